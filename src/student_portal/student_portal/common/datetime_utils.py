from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_record_date(value: Any) -> Optional[date]:
    """Calendar date of a store field, or None when missing or malformed.

    Accepts plain dates ("2026-01-15") and ISO timestamps
    ("2026-01-15T08:00:00.000Z"); only the date part is kept.
    """
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return parse_iso_date(value[:10])
    except ValueError:
        return None


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the following month."""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end
