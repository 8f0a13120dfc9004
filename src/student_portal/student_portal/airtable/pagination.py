from __future__ import annotations

from typing import Iterator, Optional, Protocol

from ..core.exceptions import FetchFailure
from .model import Page, Query, StoreRecord


class PageSource(Protocol):
    def list_page(self, query: Query, *, offset: Optional[str] = None) -> Page:
        raise NotImplementedError


class PagedQuery:
    """Lazy, restartable view over every page of a query.

    Each iteration starts again from the first page. Server order is kept:
    pages are yielded as received and records within a page are untouched.
    """

    def __init__(self, source: PageSource, query: Query):
        self._source = source
        self._query = query

    def pages(self) -> Iterator[Page]:
        offset: Optional[str] = None
        seen: set[str] = set()
        while True:
            page = self._source.list_page(self._query, offset=offset)
            yield page
            if not page.offset:
                return
            if page.offset in seen:
                raise FetchFailure(f"Pagination cursor for {self._query.table} did not advance", body=page.offset)
            seen.add(page.offset)
            offset = page.offset

    def __iter__(self) -> Iterator[StoreRecord]:
        for page in self.pages():
            yield from page.records

    def drain(self) -> list[StoreRecord]:
        """All records, or an exception; never a partial batch."""
        return list(self)


def drain(source: PageSource, query: Query) -> list[StoreRecord]:
    return PagedQuery(source, query).drain()
