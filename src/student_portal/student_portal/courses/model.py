from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import CourseCategory


def infer_category(course_name: str) -> CourseCategory:
    """Course family from free-text markers in its display name.

    Checked in order; the first match wins ("Frontend"/"FE", then
    "Backend"/"BE", then "TCF"/"ITP").
    """
    name = course_name or ""
    if "Frontend" in name or "FE" in name:
        return CourseCategory.FRONTEND
    if "Backend" in name or "BE" in name:
        return CourseCategory.BACKEND
    if "TCF" in name or "ITP" in name:
        return CourseCategory.FOUNDATIONS
    return CourseCategory.OTHER


@dataclass(frozen=True)
class CourseWindow:
    """Domain entity: a course and the dates it runs."""

    course_id: str
    name: str
    start_date: Optional[date]
    end_date: Optional[date]

    @property
    def category(self) -> CourseCategory:
        return infer_category(self.name)

    def is_active(self, today: date) -> bool:
        """today within [start, end], end day included; undated courses never are."""
        if self.start_date is None or self.end_date is None:
            return False
        return self.start_date <= today <= self.end_date

    def admits(self, record_date: Optional[date]) -> bool:
        """Attendance on or after the start date counts toward the course."""
        if self.start_date is None or record_date is None:
            return False
        return record_date >= self.start_date

    def overlaps(self, start: date, end_exclusive: date) -> bool:
        if self.start_date is None or self.end_date is None:
            return False
        return self.start_date < end_exclusive and self.end_date >= start
