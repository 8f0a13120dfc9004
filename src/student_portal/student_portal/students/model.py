from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import CourseCategory


@dataclass(frozen=True)
class StudentRecord:
    """Domain entity: one row of the Students table."""

    record_id: str
    preferred_name: Optional[str]
    name: Optional[str]
    student_id: Any
    course_ids: tuple[str, ...] = ()
    percent_missed_fe: Any = 0
    percent_missed_be: Any = 0
    percent_missed_tcf: Any = 0

    def percent_missed_for(self, category: CourseCategory) -> Any:
        """Metric matching a course family; 0 when the family is unknown."""
        return {
            CourseCategory.FRONTEND: self.percent_missed_fe,
            CourseCategory.BACKEND: self.percent_missed_be,
            CourseCategory.FOUNDATIONS: self.percent_missed_tcf,
        }.get(category, 0)


@dataclass(frozen=True)
class Profile:
    """Read-model returned to a logged-in student."""

    preferred_name: str
    current_course: Optional[str]
    percent_missed_fe: Any
    percent_missed_be: Any
    percent_missed_tcf: Any
