from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CourseWindow


class CourseRepository(Protocol):
    def get_by_id(self, course_id: str) -> Optional[CourseWindow]:
        raise NotImplementedError

    def find_by_name(self, name: str) -> Optional[CourseWindow]:
        raise NotImplementedError

    def list_all(self, *, name_filter: Optional[str] = None) -> Sequence[CourseWindow]:
        raise NotImplementedError
