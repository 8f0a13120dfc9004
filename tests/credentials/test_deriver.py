from __future__ import annotations

import re

import pytest

from src.student_portal.student_portal.core.exceptions import ConfigError
from src.student_portal.student_portal.credentials.deriver import CredentialDeriver


def test_known_vector():
    deriver = CredentialDeriver("test-secret")

    assert deriver.derive("S022") == "ac-6Hu2h-3NKp9P"
    assert deriver.derive("S010") == "ac-_L8Gz-aMeQEZ"


def test_same_token_same_secret_across_instances():
    a = CredentialDeriver("k1")
    b = CredentialDeriver("k1")

    assert a.derive("S022") == a.derive("S022") == b.derive("S022")


def test_token_is_trimmed():
    deriver = CredentialDeriver("k1")

    assert deriver.derive("  S022 ") == deriver.derive("S022")


def test_format_and_distinct_tokens():
    deriver = CredentialDeriver("k1")
    secrets = {deriver.derive(f"S{i:03d}") for i in range(200)}

    assert len(secrets) == 200
    for s in secrets:
        assert re.fullmatch(r"ac-[A-Za-z0-9_-]{5}-[A-Za-z0-9_-]{6}", s)


def test_key_changes_secret():
    assert CredentialDeriver("k1").derive("S022") != CredentialDeriver("k2").derive("S022")


@pytest.mark.parametrize("key", [None, ""])
def test_missing_key_is_config_error(key):
    with pytest.raises(ConfigError):
        CredentialDeriver(key)

