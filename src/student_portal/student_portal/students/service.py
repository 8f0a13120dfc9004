from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import FetchFailure, ProfileNotFound
from ..courses.repository import CourseRepository
from ..directory.cache import DirectoryCache
from .model import Profile
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """Use case: a student's profile card (current course and % missed)."""

    def __init__(self, students: StudentRepository, courses: CourseRepository, directory: DirectoryCache):
        self._students = students
        self._courses = courses
        self._directory = directory

    def _course_name(self, course_id: str) -> Optional[str]:
        try:
            course = self._courses.get_by_id(course_id)
        except FetchFailure as exc:
            logger.warning("Could not fetch course %s: %s", course_id, exc)
            return None
        except Exception:
            logger.exception("Unexpected error fetching course %s", course_id)
            return None
        if course is None or not course.name:
            return None
        return course.name

    def compose_profile(self, alias: str) -> Profile:
        entry = self._directory.require(alias)

        record = self._students.find_by_preferred_name(entry.alias)
        if record is None:
            raise ProfileNotFound("Student profile not found")

        course_name = self._course_name(record.course_ids[0]) if record.course_ids else None

        return Profile(
            preferred_name=record.preferred_name or entry.alias,
            current_course=course_name,
            percent_missed_fe=record.percent_missed_fe,
            percent_missed_be=record.percent_missed_be,
            percent_missed_tcf=record.percent_missed_tcf,
        )
