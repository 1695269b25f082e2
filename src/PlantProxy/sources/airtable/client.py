"""Airtable REST API client.

Calls the list-records endpoint over HTTP. The client fails fast: timeouts,
connection errors and 4xx/5xx answers are raised as upstream errors without
local retries.
"""

from __future__ import annotations

from typing import Any, Sequence
from urllib.parse import quote

import requests

from PlantProxy.core.errors import UpstreamHttpError, UpstreamTransportError
from PlantProxy.core.models import RecordQuery
from PlantProxy.utils.log import log

AIRTABLE_API_URL = "https://api.airtable.com/v0"
DEFAULT_TIMEOUT = 15.0

HEADERS = {
    "User-Agent": "plant-proxy/0.1",
    "Accept": "application/json",
}


class AirtableApiClient:
    """Low-level HTTP client for one Airtable table.

    Responsible only for building requests and returning the decoded JSON
    payload. Mapping and domain logic are handled elsewhere.
    """

    def __init__(
        self,
        *,
        base_id: str,
        table: str,
        token: str,
        api_url: str = AIRTABLE_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        return_fields_by_id: bool = False,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_id: Airtable base identifier.
            table: Table name or identifier.
            token: Personal access token sent as bearer credential.
            api_url: API root URL.
            timeout: Request timeout in seconds.
            return_fields_by_id: Ask Airtable to key fields by field id.
            session: Optional pre-built session (tests).
        """
        self.base_id = base_id
        self.table = table
        self.timeout = timeout
        self.return_fields_by_id = return_fields_by_id
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._session = session or requests.Session()

    @property
    def table_url(self) -> str:
        """Return the list-records endpoint URL."""
        return f"{self._api_url}/{self.base_id}/{quote(self.table, safe='')}"

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self) -> AirtableApiClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def list_records(self, query: RecordQuery) -> dict[str, Any]:
        """Fetch one page of records.

        Args:
            query: Page size, cursor, formula, sort and field selection.

        Returns:
            Decoded payload with ``records`` and optional ``offset``.

        Raises:
            UpstreamTransportError: On timeouts and connection failures.
            UpstreamHttpError: On 4xx/5xx answers or undecodable payloads.
        """
        params = self.build_params(query)
        log.debug(
            "Airtable list records: table=%s page_size=%s cursor=%s formula=%s",
            self.table,
            query.page_size,
            query.cursor or "-",
            query.formula or "-",
        )
        headers = dict(HEADERS)
        headers["Authorization"] = f"Bearer {self._token}"

        try:
            resp = self._session.get(self.table_url, params=params, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise UpstreamTransportError(f"Airtable request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise UpstreamTransportError(f"Airtable request failed: {e}") from e

        body = _decode_body(resp)
        if resp.status_code >= 400:
            log.debug("Airtable error response: status=%s body=%s", resp.status_code, body)
            raise UpstreamHttpError("Airtable request failed", status=resp.status_code, body=body)
        if not isinstance(body, dict):
            raise UpstreamHttpError("Airtable returned an unexpected payload", status=resp.status_code, body=body)

        log.debug(
            "Airtable response ok: status=%s records=%s has_offset=%s",
            resp.status_code,
            len(body.get("records") or []),
            bool(body.get("offset")),
        )
        return body

    def build_params(self, query: RecordQuery) -> list[tuple[str, str]]:
        """Build query parameters, skipping empty values.

        Returns a list of pairs so ``fields[]`` can repeat.
        """
        params: list[tuple[str, str]] = [("pageSize", str(query.page_size))]
        if query.cursor:
            params.append(("offset", query.cursor))
        if query.formula:
            params.append(("filterByFormula", query.formula))
        if query.sort is not None and query.sort.field and query.sort.direction:
            params.append(("sort[0][field]", query.sort.field))
            params.append(("sort[0][direction]", query.sort.direction))
        if self.return_fields_by_id:
            params.append(("returnFieldsByFieldId", "true"))
        params.extend(("fields[]", name) for name in _non_empty(query.fields))
        return params


def _non_empty(values: Sequence[str]) -> list[str]:
    return [value for value in values if value]


def _decode_body(resp: requests.Response) -> Any:
    """Decode a JSON body, falling back to raw text."""
    try:
        return resp.json()
    except ValueError:
        return resp.text
