from __future__ import annotations

from typing import Any, Optional, Sequence

from ..airtable.client import AirtableClient
from ..airtable.formula import field_equals
from ..airtable.model import Query, StoreRecord
from ..airtable.pagination import drain
from ..common.validators import linked_ids
from ..core import constants as f
from .model import StudentRecord


def _percent(value: Any) -> Any:
    """Stored value as-is; only a missing or blank cell reads as 0."""
    if value is None or value == "" or value is False:
        return 0
    return value


def to_student(record: StoreRecord) -> StudentRecord:
    preferred = record.get(f.FIELD_PREFERRED_NAME)
    name = record.get(f.FIELD_NAME)
    return StudentRecord(
        record_id=record.record_id,
        preferred_name=preferred if isinstance(preferred, str) and preferred.strip() else None,
        name=name if isinstance(name, str) else None,
        student_id=record.get(f.FIELD_STUDENT_ID),
        course_ids=linked_ids(record.get(f.FIELD_CURRENT_COURSE)),
        percent_missed_fe=_percent(record.get(f.FIELD_PCT_MISSED_FE)),
        percent_missed_be=_percent(record.get(f.FIELD_PCT_MISSED_BE)),
        percent_missed_tcf=_percent(record.get(f.FIELD_PCT_MISSED_TCF)),
    )


class AirtableStudentRepository:
    def __init__(self, client: AirtableClient, *, table: str = "Students", view: str = ""):
        self._client = client
        self._table = table
        self._view = view or None

    def list_all(self) -> Sequence[StudentRecord]:
        records = drain(self._client, Query(table=self._table, view=self._view))
        return [to_student(r) for r in records]

    def find_by_preferred_name(self, preferred_name: str) -> Optional[StudentRecord]:
        query = Query(
            table=self._table,
            formula=field_equals(f.FIELD_PREFERRED_NAME, preferred_name),
            max_records=1,
        )
        page = self._client.list_page(query)
        if not page.records:
            return None
        return to_student(page.records[0])
