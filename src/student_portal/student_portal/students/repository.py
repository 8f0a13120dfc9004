from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import StudentRecord


class StudentRepository(Protocol):
    """Read access to student records.

    Services depend on this interface, not on the Airtable implementation.
    """

    def list_all(self) -> Sequence[StudentRecord]:
        raise NotImplementedError

    def find_by_preferred_name(self, preferred_name: str) -> Optional[StudentRecord]:
        raise NotImplementedError
