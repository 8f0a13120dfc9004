"""Folding attendance rows into per-student class totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.constants import ABSENT_MARKER, BLOCK_FIELDS, TARDY_MARKER
from ..courses.model import CourseWindow
from .model import AttendanceRecord, StudentSummary


@dataclass
class BlockTally:
    alias: str
    absences: int = 0
    tardies: int = 0
    total_blocks: int = 0

    def add_status(self, status: Optional[str]) -> None:
        if not status:
            return
        self.total_blocks += 1
        if ABSENT_MARKER in status:
            self.absences += 1
        elif TARDY_MARKER in status:
            self.tardies += 1

    def add_record(self, record: AttendanceRecord) -> None:
        for name in BLOCK_FIELDS:
            self.add_status(record.block(name))

    def to_summary(self, percent_missed: Optional[float]) -> StudentSummary:
        return StudentSummary(
            alias=self.alias,
            absences=self.absences,
            tardies=self.tardies,
            total_blocks=self.total_blocks,
            percent_missed=percent_missed,
        )


def rows_for_course(records: Iterable[AttendanceRecord], course: CourseWindow) -> list[AttendanceRecord]:
    """Rows linked to the course and dated on or after its start."""
    return [r for r in records if course.course_id in r.course_ids and course.admits(r.date)]


def tally_by_student(records: Iterable[AttendanceRecord]) -> dict[str, BlockTally]:
    """Alias -> tally, in first-seen order. Rows without an alias are dropped."""
    tallies: dict[str, BlockTally] = {}
    for r in records:
        if not r.alias:
            continue
        tally = tallies.get(r.alias)
        if tally is None:
            tally = BlockTally(alias=r.alias)
            tallies[r.alias] = tally
        tally.add_record(r)
    return tallies
