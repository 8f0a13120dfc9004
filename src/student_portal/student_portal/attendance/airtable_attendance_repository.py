from __future__ import annotations

from typing import Any, Optional, Sequence

from ..airtable.client import AirtableClient
from ..airtable.formula import field_equals
from ..airtable.model import Query, SortSpec, StoreRecord
from ..airtable.pagination import drain
from ..common.datetime_utils import parse_record_date
from ..common.validators import first_text, linked_ids
from ..core import constants as f
from ..core.enums import SortDirection
from .model import AttendanceRecord


def _status_text(value: Any) -> Optional[str]:
    # Single and multiple select fields both occur.
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v) for v in value if v)
    if value is None or value == "":
        return None
    return str(value)


def to_attendance(record: StoreRecord) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=record.record_id,
        date=parse_record_date(record.get(f.FIELD_DATE)),
        course_ids=linked_ids(record.get(f.FIELD_STUDENT_COURSES)),
        blocks={name: _status_text(record.get(name)) for name in f.BLOCK_FIELDS},
        alias=first_text(record.get(f.FIELD_PREFERRED_NAME_TEXT)),
    )


class AirtableAttendanceRepository:
    def __init__(self, client: AirtableClient, *, table: str = "Attendance"):
        self._client = client
        self._table = table

    def list_for_alias(self, alias: str) -> Sequence[AttendanceRecord]:
        query = Query(
            table=self._table,
            formula=field_equals(f.FIELD_PREFERRED_NAME_TEXT, alias),
            sort=(SortSpec(f.FIELD_DATE, SortDirection.DESC),),
        )
        return [to_attendance(r) for r in drain(self._client, query)]

    def list_all(self) -> Sequence[AttendanceRecord]:
        return [to_attendance(r) for r in drain(self._client, Query(table=self._table))]
