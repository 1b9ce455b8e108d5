"""JSON-over-HTTP helper shared by every httpx-backed adapter.

Performs exactly one request (no retry) and converts every failure into the
typed hierarchy in :mod:`atlas_export.utils.errors`:

* transport failure or timeout        -> ``UpstreamUnreachableError``
* 401 / 403 / other non-2xx status    -> ``error_for_status(...)``
* 2xx with a body that is not JSON    -> ``MalformedResponseError``

An empty 2xx body decodes to ``None``.
"""

from __future__ import annotations

from typing import Any

import httpx

from atlas_export.utils.errors import (
    MalformedResponseError,
    UpstreamUnreachableError,
    error_for_status,
)
from atlas_export.utils.logging import get_logger

_logger = get_logger(__name__)

_MAX_LOGGED_BODY = 300


def extract_error_message(payload: Any) -> str | None:
    """Pull a human-readable message out of an Atlassian/OpenAI/Pinecone error body."""
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message:
        return message
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str) and error:
        return error
    messages = payload.get("errorMessages")
    if isinstance(messages, list) and messages:
        return "; ".join(str(item) for item in messages)
    errors = payload.get("errors")
    if isinstance(errors, dict) and errors:
        return "; ".join(f"{field}: {text}" for field, text in errors.items())
    return None


def _decode_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    return response.json()


async def send_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider_name: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    json: Any = None,
    timeout: float | None = None,
) -> Any:
    """Send one request and return the decoded JSON body.

    Raises
    ------
    UpstreamUnreachableError
        On any httpx transport error, including timeouts.
    UpstreamError
        (or its 401/403 subclasses) on a non-success status.
    MalformedResponseError
        When a success response is not valid JSON.
    """
    request_kwargs: dict[str, Any] = {"headers": headers, "params": params}
    if json is not None:
        request_kwargs["json"] = json
    if timeout is not None:
        request_kwargs["timeout"] = timeout

    try:
        response = await client.request(method, url, **request_kwargs)
    except httpx.TimeoutException as exc:
        _logger.error("upstream_timeout", provider=provider_name, method=method, url=url)
        raise UpstreamUnreachableError(
            f"Request to {provider_name} timed out", provider_name=provider_name
        ) from exc
    except httpx.RequestError as exc:
        _logger.error(
            "upstream_unreachable",
            provider=provider_name,
            method=method,
            url=url,
            error=str(exc),
        )
        raise UpstreamUnreachableError(
            f"Failed to reach {provider_name}: {exc}", provider_name=provider_name
        ) from exc

    if not response.is_success:
        try:
            payload = _decode_json(response)
        except ValueError:
            payload = None
        message = extract_error_message(payload) or (
            f"{provider_name} error {response.status_code}"
        )
        _logger.error(
            "upstream_error_response",
            provider=provider_name,
            status=response.status_code,
            detail=message[:_MAX_LOGGED_BODY],
        )
        raise error_for_status(response.status_code, message, provider_name=provider_name)

    try:
        return _decode_json(response)
    except ValueError as exc:
        _logger.error(
            "upstream_malformed_body",
            provider=provider_name,
            status=response.status_code,
            body=response.text[:_MAX_LOGGED_BODY],
        )
        raise MalformedResponseError(
            f"{provider_name} returned a non-JSON body",
            provider_name=provider_name,
            status_code=response.status_code,
        ) from exc
