from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from ..common.validators import normalize_alias
from ..core.exceptions import FetchFailure, RefreshFailure, StudentNotFound
from ..credentials.deriver import CredentialDeriver
from ..credentials.identity import resolve_identity_token
from ..students.model import StudentRecord
from ..students.repository import StudentRepository
from .model import DirectoryEntry, RefreshStatus

logger = logging.getLogger(__name__)


def build_entries(records: Iterable[StudentRecord], deriver: CredentialDeriver) -> dict[str, DirectoryEntry]:
    """Normalized alias -> entry. Records without alias or identity are skipped."""
    entries: dict[str, DirectoryEntry] = {}
    for r in records:
        if not r.preferred_name:
            continue
        token = resolve_identity_token(r.name, r.student_id)
        if not token:
            continue
        key = normalize_alias(r.preferred_name)
        if key in entries:
            logger.warning("Duplicate alias %r in student records; keeping the first", r.preferred_name)
            continue
        entries[key] = DirectoryEntry(
            alias=r.preferred_name,
            identity_token=token,
            derived_secret=deriver.derive(token),
        )
    return entries


class DirectoryCache:
    """Process-wide alias directory with copy-and-swap refresh.

    A refresh builds a complete new mapping off to the side and publishes it
    with one reference assignment, so readers see either the old or the new
    mapping and never wait for a refresh in progress. Refreshes are
    serialized among themselves.
    """

    def __init__(
        self,
        students: StudentRepository,
        deriver: CredentialDeriver,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._students = students
        self._deriver = deriver
        self._clock = clock
        self._entries: Mapping[str, DirectoryEntry] = MappingProxyType({})
        self._status = RefreshStatus()
        self._refresh_lock = threading.Lock()

    @property
    def status(self) -> RefreshStatus:
        return self._status

    def refresh(self) -> int:
        """Reload every student record and publish a new mapping.

        Raises RefreshFailure and keeps the previous mapping when the store
        cannot be read.
        """
        with self._refresh_lock:
            attempted_at = self._clock()
            try:
                records = self._students.list_all()
            except FetchFailure as exc:
                self._status = replace(self._status, last_attempt_at=attempted_at, last_error=str(exc))
                raise RefreshFailure(f"Directory refresh failed: {exc}", cause=exc) from exc

            entries = build_entries(records, self._deriver)
            self._entries = MappingProxyType(entries)
            self._status = RefreshStatus(
                entry_count=len(entries),
                last_success_at=attempted_at,
                last_attempt_at=attempted_at,
                last_error=None,
            )
            logger.info("Loaded %d students into the directory", len(entries))
            return len(entries)

    def snapshot(self) -> Mapping[str, DirectoryEntry]:
        """The live mapping; stays consistent even if a refresh publishes meanwhile."""
        return self._entries

    def lookup(self, alias: str) -> Optional[DirectoryEntry]:
        if not isinstance(alias, str):
            return None
        return self._entries.get(normalize_alias(alias))

    def require(self, alias: str) -> DirectoryEntry:
        entry = self.lookup(alias)
        if entry is None:
            raise StudentNotFound("Student not found")
        return entry
