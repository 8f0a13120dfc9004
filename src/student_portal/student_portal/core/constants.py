"""Constants and defaults.

Airtable field names are the wire contract with the record store; keep them
here instead of spreading string literals across repositories.
"""

DEFAULT_REFRESH_SECONDS = 300
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_BACKOFF_SECONDS = 0.5
DEFAULT_PERCENT_LOOKUP_WORKERS = 8
DEFAULT_COURSE_START_DATE = "2026-01-12"

SECRET_PREFIX = "ac"

# Students table
FIELD_PREFERRED_NAME = "Preferred Name"
FIELD_NAME = "Name"
FIELD_STUDENT_ID = "StudentID"
FIELD_CURRENT_COURSE = "Current Course"
FIELD_PCT_MISSED_FE = "% missed FE"
FIELD_PCT_MISSED_BE = "% missed BE"
FIELD_PCT_MISSED_TCF = "% missed TCF/ITP"

# Attendance table
FIELD_DATE = "Date"
FIELD_PREFERRED_NAME_TEXT = "PreferredNameText"
FIELD_STUDENT_COURSES = "Current Course (from Student)"
BLOCK_FIELDS = ("Block A", "Block B", "Block C", "Block D")

# Courses table
FIELD_COURSE_NAME = "Name"
FIELD_START_DATE = "Start Date"
FIELD_END_DATE = "End Date"

ABSENT_MARKER = "Absent"
TARDY_MARKER = "Tardy"
