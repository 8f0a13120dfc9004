from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class DirectoryEntry:
    """One login identity: alias -> identity token -> derived secret."""

    alias: str
    identity_token: str
    derived_secret: str


@dataclass(frozen=True)
class RefreshStatus:
    """Observable outcome of the latest directory refreshes."""

    entry_count: int = 0
    last_success_at: Optional[datetime] = None
    last_attempt_at: Optional[datetime] = None
    last_error: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.last_success_at is not None
