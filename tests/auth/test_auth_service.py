from __future__ import annotations

import pytest

from src.student_portal.student_portal.auth.service import AuthService
from src.student_portal.student_portal.core.exceptions import AuthenticationError, ValidationError
from src.student_portal.student_portal.credentials.deriver import CredentialDeriver
from src.student_portal.student_portal.directory.cache import DirectoryCache
from src.student_portal.student_portal.students.model import StudentRecord


class FakeStudents:
    def list_all(self):
        return [StudentRecord(record_id="r1", preferred_name="Sam", name="S010 - Sam Lee", student_id=None)]


DERIVER = CredentialDeriver("test-secret")


def _service(master=None):
    directory = DirectoryCache(FakeStudents(), DERIVER)
    directory.refresh()
    return AuthService(directory, master_password=master)


def test_derived_secret_authenticates():
    result = _service().authenticate("sam", DERIVER.derive("S010"))

    assert result.alias == "Sam"
    assert result.identity_token == "S010"
    assert result.staff_override is False


def test_wrong_secret_and_unknown_alias_fail_the_same_way():
    svc = _service()

    with pytest.raises(AuthenticationError) as wrong:
        svc.authenticate("Sam", "wrong")
    with pytest.raises(AuthenticationError) as unknown:
        svc.authenticate("unknown-alias", DERIVER.derive("S010"))

    assert str(wrong.value) == str(unknown.value) == "Invalid credentials"


def test_secret_is_not_trimmed():
    with pytest.raises(AuthenticationError):
        _service().authenticate("Sam", " " + DERIVER.derive("S010"))


def test_master_password_is_staff_override_for_known_alias():
    svc = _service(master="open-sesame")

    assert svc.authenticate("SAM", "open-sesame").staff_override is True
    with pytest.raises(AuthenticationError):
        svc.authenticate("ghost", "open-sesame")


def test_empty_inputs_are_validation_errors():
    with pytest.raises(ValidationError):
        _service().authenticate("  ", "x")
    with pytest.raises(ValidationError):
        _service().authenticate("Sam", "")


def test_teacher_login():
    svc = _service(master="open-sesame")
    svc.authenticate_teacher("open-sesame")

    with pytest.raises(AuthenticationError):
        svc.authenticate_teacher("nope")
    with pytest.raises(AuthenticationError):
        _service(master=None).authenticate_teacher("anything")
