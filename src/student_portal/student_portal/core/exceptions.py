from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigError(DomainError):
    """Raised at startup when required configuration is missing."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid.

    The message never says whether the alias or the secret was wrong.
    """

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when an alias or course has no matching record."""


class StudentNotFound(NotFoundError):
    pass


class ProfileNotFound(NotFoundError):
    pass


class CourseNotFound(NotFoundError):
    pass


class CourseWindowError(ValidationError):
    """Raised when a course cannot be windowed (no start date)."""


class FetchFailure(DomainError):
    """The record store was unreachable or answered with a non-success status."""

    def __init__(self, message: str, *, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class RefreshFailure(DomainError):
    """A directory refresh failed; the previous directory stays live."""

    def __init__(self, message: str, *, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause
