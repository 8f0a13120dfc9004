from __future__ import annotations

from typing import Optional, Sequence

from ..airtable.client import AirtableClient
from ..airtable.formula import field_contains, field_equals
from ..airtable.model import Query, StoreRecord
from ..airtable.pagination import drain
from ..common.datetime_utils import parse_record_date
from ..core import constants as f
from ..core.exceptions import FetchFailure
from .model import CourseWindow


def to_course(record: StoreRecord) -> CourseWindow:
    name = record.get(f.FIELD_COURSE_NAME)
    return CourseWindow(
        course_id=record.record_id,
        name=name if isinstance(name, str) else "",
        start_date=parse_record_date(record.get(f.FIELD_START_DATE)),
        end_date=parse_record_date(record.get(f.FIELD_END_DATE)),
    )


class AirtableCourseRepository:
    def __init__(self, client: AirtableClient, *, table: str = "Courses"):
        self._client = client
        self._table = table

    def get_by_id(self, course_id: str) -> Optional[CourseWindow]:
        try:
            record = self._client.get_record(self._table, course_id)
        except FetchFailure as exc:
            if exc.status == 404:
                return None
            raise
        return to_course(record)

    def find_by_name(self, name: str) -> Optional[CourseWindow]:
        query = Query(table=self._table, formula=field_equals(f.FIELD_COURSE_NAME, name), max_records=1)
        page = self._client.list_page(query)
        if not page.records:
            return None
        return to_course(page.records[0])

    def list_all(self, *, name_filter: Optional[str] = None) -> Sequence[CourseWindow]:
        formula = field_contains(f.FIELD_COURSE_NAME, name_filter) if name_filter else None
        records = drain(self._client, Query(table=self._table, formula=formula))
        return [to_course(r) for r in records]
