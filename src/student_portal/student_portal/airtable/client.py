from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx

from ..core.constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_BACKOFF_SECONDS, DEFAULT_TIMEOUT_SECONDS
from ..core.exceptions import FetchFailure
from .model import Page, Query, StoreRecord

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.airtable.com/v0"
TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})


class AirtableClient:
    """Thin synchronous client for the Airtable REST API.

    Every call has a hard timeout. Rate limiting (429), server errors and
    transport errors are retried with exponential backoff; any other
    non-success status fails immediately with FetchFailure.
    """

    def __init__(
        self,
        *,
        base_id: str,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_backoff: float = DEFAULT_RETRY_BACKOFF_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._client = httpx.Client(
            base_url=f"{api_url.rstrip('/')}/{base_id}",
            headers={
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        self._max_retries = max(0, int(max_retries))
        self._retry_backoff = float(retry_backoff)
        self._sleep = sleep

    def close(self) -> None:
        self._client.close()

    def list_page(self, query: Query, *, offset: Optional[str] = None) -> Page:
        data = self._get(f"/{quote(query.table, safe='')}", params=query.to_params(offset=offset))
        records = data.get("records")
        if records is None:
            records = []
        if not isinstance(records, list):
            raise FetchFailure(f"Malformed page from {query.table}: 'records' is not a list", body=str(data)[:500])
        next_offset = data.get("offset")
        return Page(
            records=[self._to_record(r) for r in records],
            offset=str(next_offset) if next_offset else None,
        )

    def get_record(self, table: str, record_id: str) -> StoreRecord:
        data = self._get(f"/{quote(table, safe='')}/{quote(record_id, safe='')}")
        return self._to_record(data)

    @staticmethod
    def _to_record(raw: Any) -> StoreRecord:
        if not isinstance(raw, dict):
            raise FetchFailure("Malformed record in store response", body=str(raw)[:500])
        fields = raw.get("fields")
        if fields is None:
            fields = {}
        if not isinstance(fields, dict):
            raise FetchFailure("Malformed record in store response: 'fields' is not an object", body=str(raw)[:500])
        return StoreRecord(record_id=str(raw.get("id", "")), fields=dict(fields))

    def _get(self, path: str, params: Optional[list[tuple[str, str]]] = None) -> dict:
        attempt = 0
        while True:
            try:
                response = self._client.get(path, params=params)
            except httpx.RequestError as exc:
                failure = FetchFailure(f"Record store unreachable: {exc}", body=str(exc))
            else:
                if response.is_success:
                    return self._decode(response)
                failure = FetchFailure(
                    f"Record store returned {response.status_code} for {path}",
                    status=response.status_code,
                    body=response.text,
                )
                if response.status_code not in TRANSIENT_STATUSES:
                    logger.error("Airtable error %s on %s: %s", response.status_code, path, response.text)
                    raise failure

            if attempt >= self._max_retries:
                logger.error("Airtable call %s failed after %d attempt(s): %s", path, attempt + 1, failure)
                raise failure

            delay = self._retry_backoff * (2 ** attempt)
            logger.warning("Airtable call %s failed (%s); retrying in %.2fs", path, failure, delay)
            self._sleep(delay)
            attempt += 1

    @staticmethod
    def _decode(response: httpx.Response) -> dict:
        try:
            data = response.json()
        except ValueError as exc:
            raise FetchFailure(
                "Record store returned a non-JSON body",
                status=response.status_code,
                body=response.text,
            ) from exc
        if not isinstance(data, dict):
            raise FetchFailure("Record store returned an unexpected payload", status=response.status_code, body=response.text)
        return data
