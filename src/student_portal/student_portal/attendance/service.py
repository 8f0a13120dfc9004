from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Optional

from ..common.text import collation_key
from ..core.constants import DEFAULT_PERCENT_LOOKUP_WORKERS
from ..core.enums import CourseCategory
from ..core.exceptions import CourseNotFound, CourseWindowError
from ..core.results import LookupResult
from ..courses.model import CourseWindow
from ..courses.repository import CourseRepository
from ..directory.cache import DirectoryCache
from ..students.repository import StudentRepository
from .aggregation import rows_for_course, tally_by_student
from .model import AttendanceRecord, StudentSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: a student's attendance history and a teacher's class summary.

    Nothing is cached here; every call reads the record store afresh.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        courses: CourseRepository,
        students: StudentRepository,
        directory: DirectoryCache,
        *,
        date_floor: date,
        lookup_workers: int = DEFAULT_PERCENT_LOOKUP_WORKERS,
    ):
        self._attendance = attendance
        self._courses = courses
        self._students = students
        self._directory = directory
        self._date_floor = date_floor
        self._lookup_workers = max(1, int(lookup_workers))

    def list_attendance(self, alias: str, *, date_floor: Optional[date] = None) -> list[AttendanceRecord]:
        entry = self._directory.require(alias)
        floor = date_floor or self._date_floor
        rows = self._attendance.list_for_alias(entry.alias)
        return [r for r in rows if r.date is not None and r.date >= floor]

    def summarize_class(self, course_id: str) -> list[StudentSummary]:
        course = self._courses.get_by_id(course_id)
        if course is None:
            raise CourseNotFound("Course not found")
        return self._summarize(course)

    def summarize_class_by_name(self, course_name: str) -> list[StudentSummary]:
        course = self._courses.find_by_name(course_name)
        if course is None:
            raise CourseNotFound("Course not found")
        return self._summarize(course)

    def lookup_percent_missed(self, alias: str, category: CourseCategory) -> LookupResult[float]:
        try:
            student = self._students.find_by_preferred_name(alias)
        except Exception as exc:
            logger.warning("Error fetching %% missed for %s: %s", alias, exc)
            return LookupResult.degraded(str(exc))
        if student is None:
            return LookupResult.not_found()
        return LookupResult.found(student.percent_missed_for(category))

    def _summarize(self, course: CourseWindow) -> list[StudentSummary]:
        if course.start_date is None:
            raise CourseWindowError("Course start date not set")

        tallies = tally_by_student(rows_for_course(self._attendance.list_all(), course))
        aliases = list(tallies)
        category = course.category

        results: dict[str, LookupResult[float]] = {}
        if aliases:
            workers = min(self._lookup_workers, len(aliases))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                lookups = pool.map(lambda a: self.lookup_percent_missed(a, category), aliases)
                results = dict(zip(aliases, lookups))

        summaries = [tallies[a].to_summary(results[a].value_or(None)) for a in aliases]
        summaries.sort(key=lambda s: collation_key(s.alias))
        return summaries
