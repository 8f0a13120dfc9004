from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import SortDirection


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class Query:
    """A list request against one table; the cursor is supplied per page."""

    table: str
    formula: Optional[str] = None
    sort: tuple[SortSpec, ...] = ()
    view: Optional[str] = None
    max_records: Optional[int] = None

    def to_params(self, *, offset: Optional[str] = None) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.formula:
            params.append(("filterByFormula", self.formula))
        for i, spec in enumerate(self.sort):
            params.append((f"sort[{i}][field]", spec.field))
            params.append((f"sort[{i}][direction]", spec.direction.value))
        if self.view:
            params.append(("view", self.view))
        if self.max_records is not None:
            params.append(("maxRecords", str(int(self.max_records))))
        if offset:
            params.append(("offset", offset))
        return params


@dataclass(frozen=True)
class StoreRecord:
    """One raw record: opaque id plus its field set."""

    record_id: str
    fields: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass(frozen=True)
class Page:
    records: list[StoreRecord]
    offset: Optional[str] = None
