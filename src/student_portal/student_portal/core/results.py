from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .enums import LookupStatus

T = TypeVar("T")


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """Found(value) | NotFound | Degraded(reason).

    Used for joins that may fail independently of the operation that needs
    them, so a degraded join is never mistaken for a hard failure.
    """

    status: LookupStatus
    value: Optional[T] = None
    reason: Optional[str] = None

    @classmethod
    def found(cls, value: T) -> "LookupResult[T]":
        return cls(LookupStatus.FOUND, value=value)

    @classmethod
    def not_found(cls) -> "LookupResult[T]":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def degraded(cls, reason: str) -> "LookupResult[T]":
        return cls(LookupStatus.DEGRADED, reason=reason)

    @property
    def is_found(self) -> bool:
        return self.status == LookupStatus.FOUND

    def value_or(self, default: Optional[T]) -> Optional[T]:
        return self.value if self.is_found else default
