"""Shared plumbing for the Atlassian REST source clients.

Holds everything the Jira and Confluence adapters have in common: auth
headers, URL joining, response-shape normalisation and the offset/token
"is there a next page" rules.  Follows the same adapter pattern as the
other httpx providers: an injected ``httpx.AsyncClient`` and one request
per public call.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from atlas_export.interfaces.source_api import ISourceApiClient
from atlas_export.models.pagination import OffsetCursor, TokenCursor
from atlas_export.models.records import Credential
from atlas_export.utils.http import send_json
from atlas_export.utils.logging import get_logger

# Wrapper objects some gateways put around the real body ({"result": {...}}).
_WRAPPER_KEYS = ("result", "data")
_TOKEN_KEYS = ("nextPageToken", "next_page_token", "cursor")
_TOTAL_KEYS = ("total", "totalSize")
_PAGING_KEYS = ("isLast", *_TOTAL_KEYS, *_TOKEN_KEYS)


def build_auth_headers(credential: Credential) -> dict[str, str]:
    """Basic auth from ``email:api_key``, or a bearer token when no email is set."""
    if credential.email:
        raw = f"{credential.email}:{credential.api_key}".encode()
        authorization = f"Basic {base64.b64encode(raw).decode('ascii')}"
    else:
        authorization = f"Bearer {credential.api_key}"
    return {"Authorization": authorization, "Accept": "application/json"}


def escape_query_literal(value: str) -> str:
    """Escape a value for embedding inside a double-quoted query literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _dict_items(values: Sequence[Any]) -> list[dict[str, Any]]:
    return [value for value in values if isinstance(value, Mapping)]


def _is_subquery_list(values: Sequence[Any], candidate_keys: Sequence[str]) -> bool:
    """True when every element is an object carrying its own candidate array."""
    if not values:
        return False
    return all(
        isinstance(value, Mapping)
        and any(isinstance(value.get(key), list) for key in candidate_keys)
        for value in values
    )


def extract_items(payload: Any, candidate_keys: Sequence[str]) -> list[dict[str, Any]]:
    """Find the item array inside a heterogeneous response body.

    Candidates are tried in a fixed order and the first non-empty match
    wins:

    1. the body itself is an array
    2. ``payload[key]`` for each key in *candidate_keys*; a list of
       sub-queries (each carrying its own array) is flattened
    3. the same search inside ``result``/``data`` wrapper objects

    Returns ``[]`` when nothing matches.  Never raises.
    """
    if isinstance(payload, list):
        if _is_subquery_list(payload, candidate_keys):
            return _flatten_subqueries(payload, candidate_keys)
        return _dict_items(payload)
    if not isinstance(payload, Mapping):
        return []

    for key in candidate_keys:
        value = payload.get(key)
        if not isinstance(value, list) or not value:
            continue
        if _is_subquery_list(value, candidate_keys):
            items = _flatten_subqueries(value, candidate_keys)
        else:
            items = _dict_items(value)
        if items:
            return items

    for key in _WRAPPER_KEYS:
        wrapped = payload.get(key)
        if isinstance(wrapped, (Mapping, list)):
            items = extract_items(wrapped, candidate_keys)
            if items:
                return items
    return []


def _flatten_subqueries(
    subqueries: Sequence[Any], candidate_keys: Sequence[str]
) -> list[dict[str, Any]]:
    items: list[dict[str, Any]] = []
    for subquery in subqueries:
        items.extend(extract_items(subquery, candidate_keys))
    return items


def _unwrap(payload: Any) -> Mapping[str, Any]:
    """Return the mapping that carries paging metadata (``isLast``, tokens …)."""
    if not isinstance(payload, Mapping):
        return {}
    for key in _WRAPPER_KEYS:
        wrapped = payload.get(key)
        if isinstance(wrapped, Mapping) and not any(k in payload for k in _PAGING_KEYS):
            return wrapped
    return payload


def reported_total(payload: Any) -> int | None:
    meta = _unwrap(payload)
    for key in _TOTAL_KEYS:
        value = meta.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def next_offset_cursor(
    cursor: OffsetCursor,
    returned: int,
    payload: Any,
) -> OffsetCursor | None:
    """Apply the offset termination rules to one fetched page.

    End of data when the page is empty, the body says ``isLast``, the
    reported total has been reached, or fewer items than requested came back.
    """
    if returned == 0:
        return None
    meta = _unwrap(payload)
    if meta.get("isLast") is True:
        return None
    total = reported_total(payload)
    consumed = cursor.start + returned
    if total is not None and consumed >= total:
        return None
    if returned < cursor.size:
        return None
    return cursor.advance(returned)


def next_token_cursor(returned: int, payload: Any) -> TokenCursor | None:
    """End of data when the page is empty or carries no continuation token."""
    if returned == 0:
        return None
    meta = _unwrap(payload)
    for key in _TOKEN_KEYS:
        token = meta.get(key)
        if isinstance(token, str) and token:
            return TokenCursor(value=token)
    return None


class AtlassianSourceClient(ISourceApiClient):
    """Base class for the Jira and Confluence adapters.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    timeout:
        Per-request timeout in seconds.
    """

    source_name: str = "atlassian"

    def __init__(self, http_client: httpx.AsyncClient, timeout: float = 30.0) -> None:
        self._http = http_client
        self._timeout = timeout
        self._logger = get_logger(__name__).bind(source=self.source_name)

    def get_source_name(self) -> str:
        return self.source_name

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    @staticmethod
    def _url(credential: Credential, path: str) -> str:
        return f"{credential.base_url.rstrip('/')}{path}"

    async def _get(
        self,
        credential: Credential,
        url: str,
        params: dict[str, Any],
    ) -> Any:
        self._logger.debug("source_request", method="GET", url=url, params=params)
        return await send_json(
            self._http,
            "GET",
            url,
            provider_name=self.source_name,
            headers=build_auth_headers(credential),
            params=params,
            timeout=self._timeout,
        )

    async def _post(
        self,
        credential: Credential,
        url: str,
        body: dict[str, Any],
    ) -> Any:
        self._logger.debug("source_request", method="POST", url=url, body=body)
        headers = build_auth_headers(credential)
        headers["Content-Type"] = "application/json"
        return await send_json(
            self._http,
            "POST",
            url,
            provider_name=self.source_name,
            headers=headers,
            json=body,
            timeout=self._timeout,
        )
