import os


def _flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


def airtable_config() -> dict:
    return {
        "api_key": os.getenv("AIRTABLE_API_KEY", ""),
        "base_id": os.getenv("AIRTABLE_BASE_ID", ""),
        "api_url": os.getenv("AIRTABLE_API_URL", "https://api.airtable.com/v0"),
        "students_table": os.getenv("AIRTABLE_STUDENTS_TABLE", "Students"),
        "students_view": os.getenv("AIRTABLE_STUDENTS_VIEW", ""),
        "attendance_table": os.getenv("AIRTABLE_ATTENDANCE_TABLE", "Attendance"),
        "courses_table": os.getenv("AIRTABLE_COURSES_TABLE", "Courses"),
        "timeout": float(os.getenv("AIRTABLE_TIMEOUT_SECONDS", "10")),
        "max_retries": int(os.getenv("AIRTABLE_MAX_RETRIES", "2")),
        "retry_backoff": float(os.getenv("AIRTABLE_RETRY_BACKOFF_SECONDS", "0.5")),
    }


def portal_config() -> dict:
    return {
        "pw_secret": os.getenv("PORTAL_PW_SECRET"),
        "master_password": os.getenv("MASTER_PORTAL_PW"),
        "course_start_date": os.getenv("COURSE_START_DATE", "2026-01-12"),
        "courses_name_filter": os.getenv("COURSES_NAME_FILTER", ""),
        "directory_refresh_seconds": int(os.getenv("DIRECTORY_REFRESH_SECONDS", "300")),
        "percent_lookup_workers": int(os.getenv("PERCENT_LOOKUP_WORKERS", "8")),
    }


ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "")
LOGIN_RATE_LIMIT = os.getenv("LOGIN_RATE_LIMIT", "50 per 15 minutes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "3001"))
