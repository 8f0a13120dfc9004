from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from .airtable.client import AirtableClient
from .attendance.airtable_attendance_repository import AirtableAttendanceRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .common.datetime_utils import parse_iso_date
from .core import constants
from .courses.airtable_course_repository import AirtableCourseRepository
from .courses.service import CourseService
from .credentials.deriver import CredentialDeriver
from .directory.cache import DirectoryCache
from .directory.scheduler import DirectoryRefresher
from .students.airtable_student_repository import AirtableStudentRepository
from .students.service import ProfileService


@dataclass(frozen=True)
class Container:
    client: AirtableClient

    students_repo: AirtableStudentRepository
    courses_repo: AirtableCourseRepository
    attendance_repo: AirtableAttendanceRepository

    deriver: CredentialDeriver
    directory: DirectoryCache
    refresher: DirectoryRefresher

    auth_service: AuthService
    attendance_service: AttendanceService
    profile_service: ProfileService
    course_service: CourseService


def build_container(
    *,
    airtable_config: dict,
    portal_config: dict,
    transport: Optional[httpx.BaseTransport] = None,
) -> Container:
    deriver = CredentialDeriver(portal_config.get("pw_secret"))

    client = AirtableClient(
        base_id=str(airtable_config.get("base_id", "")),
        api_key=str(airtable_config.get("api_key", "")),
        api_url=str(airtable_config.get("api_url") or "https://api.airtable.com/v0"),
        timeout=float(airtable_config.get("timeout", constants.DEFAULT_TIMEOUT_SECONDS)),
        max_retries=int(airtable_config.get("max_retries", constants.DEFAULT_MAX_RETRIES)),
        retry_backoff=float(airtable_config.get("retry_backoff", constants.DEFAULT_RETRY_BACKOFF_SECONDS)),
        transport=transport,
    )

    students_repo = AirtableStudentRepository(
        client,
        table=airtable_config.get("students_table", "Students"),
        view=airtable_config.get("students_view", ""),
    )
    courses_repo = AirtableCourseRepository(client, table=airtable_config.get("courses_table", "Courses"))
    attendance_repo = AirtableAttendanceRepository(client, table=airtable_config.get("attendance_table", "Attendance"))

    directory = DirectoryCache(students_repo, deriver)
    refresher = DirectoryRefresher(
        directory,
        interval_seconds=int(portal_config.get("directory_refresh_seconds", constants.DEFAULT_REFRESH_SECONDS)),
    )

    auth_service = AuthService(directory, master_password=portal_config.get("master_password"))
    attendance_service = AttendanceService(
        attendance_repo,
        courses_repo,
        students_repo,
        directory,
        date_floor=parse_iso_date(portal_config.get("course_start_date") or constants.DEFAULT_COURSE_START_DATE),
        lookup_workers=int(portal_config.get("percent_lookup_workers", constants.DEFAULT_PERCENT_LOOKUP_WORKERS)),
    )
    profile_service = ProfileService(students_repo, courses_repo, directory)
    course_service = CourseService(courses_repo, name_filter=portal_config.get("courses_name_filter"))

    return Container(
        client=client,
        students_repo=students_repo,
        courses_repo=courses_repo,
        attendance_repo=attendance_repo,
        deriver=deriver,
        directory=directory,
        refresher=refresher,
        auth_service=auth_service,
        attendance_service=attendance_service,
        profile_service=profile_service,
        course_service=course_service,
    )
