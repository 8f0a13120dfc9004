from __future__ import annotations

import hmac
import logging
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, ValidationError
from ..directory.cache import DirectoryCache
from .model import AuthResult

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate students (derived secret) and teachers (master secret)."""

    def __init__(self, directory: DirectoryCache, *, master_password: Optional[str] = None):
        self._directory = directory
        self._master_password = master_password or None

    def _is_master(self, supplied: str) -> bool:
        if not self._master_password:
            return False
        return hmac.compare_digest(self._master_password.encode("utf-8"), supplied.encode("utf-8"))

    def authenticate(self, alias: str, supplied_secret: str) -> AuthResult:
        alias = require_non_empty(alias, "Preferred name")
        if not supplied_secret:
            raise ValidationError("Password is required")

        entry = self._directory.lookup(alias)
        if entry is None:
            raise AuthenticationError()

        if self._is_master(supplied_secret):
            logger.warning("[STAFF OVERRIDE] login as %s", entry.alias)
            return AuthResult(alias=entry.alias, identity_token=entry.identity_token, staff_override=True)

        if not hmac.compare_digest(entry.derived_secret.encode("utf-8"), supplied_secret.encode("utf-8")):
            raise AuthenticationError()

        return AuthResult(alias=entry.alias, identity_token=entry.identity_token)

    def authenticate_teacher(self, password: str) -> None:
        if not password:
            raise ValidationError("Password is required")
        if not self._is_master(password):
            logger.info("Rejected teacher login")
            raise AuthenticationError("Invalid teacher password")
