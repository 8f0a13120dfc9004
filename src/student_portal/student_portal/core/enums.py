from __future__ import annotations

from enum import Enum


class LookupStatus(str, Enum):
    """Outcome of a secondary lookup (join)."""

    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    DEGRADED = "DEGRADED"


class CourseCategory(str, Enum):
    """Course family, used to pick the matching "% missed" field."""

    FRONTEND = "FRONTEND"
    BACKEND = "BACKEND"
    FOUNDATIONS = "FOUNDATIONS"
    OTHER = "OTHER"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
