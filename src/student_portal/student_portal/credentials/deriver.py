from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Optional

from ..core.constants import SECRET_PREFIX
from ..core.exceptions import ConfigError


class CredentialDeriver:
    """Maps an identity token to a reproducible, human-typeable secret.

    secret = "<prefix>-<5 chars>-<6 chars>" cut from the unpadded base64url
    HMAC-SHA256 of the trimmed token, keyed by the process-wide secret.
    """

    def __init__(self, key: Optional[str], *, prefix: str = SECRET_PREFIX):
        if not key:
            raise ConfigError("PORTAL_PW_SECRET is not set. Add it to your .env")
        self._key = key.encode("utf-8")
        self._prefix = prefix

    def derive(self, identity_token: str) -> str:
        digest = hmac.new(self._key, str(identity_token).strip().encode("utf-8"), hashlib.sha256).digest()
        raw = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
        return f"{self._prefix}-{raw[0:5]}-{raw[5:11]}"
