from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one day of attendance for one student.

    blocks maps each time-block field ("Block A".."Block D") to its status
    text, or None when nothing was recorded for that block.
    """

    record_id: str
    date: Optional[date]
    course_ids: tuple[str, ...] = ()
    blocks: Mapping[str, Optional[str]] = field(default_factory=dict)
    alias: Optional[str] = None

    def block(self, name: str) -> Optional[str]:
        return self.blocks.get(name)


@dataclass(frozen=True)
class StudentSummary:
    """Read-model: per-student totals for one class.

    percent_missed is None when it could not be looked up.
    """

    alias: str
    absences: int
    tardies: int
    total_blocks: int
    percent_missed: Optional[float]
