from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from .repository import CourseRepository


class CourseService:
    """Use case: list the courses running today (teacher class picker)."""

    def __init__(self, courses: CourseRepository, *, name_filter: Optional[str] = None):
        self._courses = courses
        self._name_filter = name_filter or None

    def list_active_courses(self, *, today: Optional[date] = None) -> list[str]:
        today = today or today_local()
        names = [
            c.name
            for c in self._courses.list_all(name_filter=self._name_filter)
            if c.name and c.is_active(today)
        ]
        return sorted(names)
