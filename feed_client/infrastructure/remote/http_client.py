"""
Async HTTP client factory and single-exchange helpers.

One httpx.AsyncClient is shared by all remote repositories for the lifetime
of the DI container. Every helper performs exactly one request: there are no
retries here or anywhere else in the client.
"""

import json
import logging
from typing import Any, Optional

import httpx

from feed_client.config.logging_config import correlation_id_var
from feed_client.domain.exceptions.malformed_entity import MalformedEntityError
from feed_client.domain.exceptions.remote_unavailable import RemoteUnavailableError

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def create_http_client(
    base_url: str,
    timeout_seconds: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the shared async HTTP client.

    Args:
        base_url: Feed service root, e.g. "https://feed.example.com"
        timeout_seconds: Per-request timeout, None disables it
        transport: Optional transport override (httpx.MockTransport in tests)

    Returns:
        httpx.AsyncClient: Unopened client, closed by the container on shutdown
    """
    client = httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=httpx.Timeout(timeout_seconds),
        headers={"Accept": "application/json"},
        transport=transport,
    )
    logger.info(f"[HTTP] Client created for {base_url}")
    return client


async def send(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    payload: Optional[dict[str, Any]] = None,
) -> httpx.Response:
    """
    Perform one HTTP exchange.

    Raises:
        RemoteUnavailableError: On any transport-level failure (no status code)
    """
    headers = {CORRELATION_HEADER: correlation_id_var.get()}
    try:
        response = await client.request(method, path, json=payload, headers=headers)
    except httpx.TransportError as e:
        logger.error(f"[HTTP] {method} {path} failed: {e!r}")
        raise RemoteUnavailableError(
            f"Could not reach the feed service ({method} {path})"
        ) from e
    logger.debug(f"[HTTP] {method} {path} -> {response.status_code}")
    return response


def unexpected_status(response: httpx.Response, action: str) -> RemoteUnavailableError:
    error_detail = response.text
    try:
        error_data = response.json()
        if isinstance(error_data, dict):
            error_detail = error_data.get("message", error_detail)
    except ValueError:
        pass
    return RemoteUnavailableError(
        f"Failed to {action} ({response.status_code}): {error_detail}",
        status_code=response.status_code,
    )


def json_body(response: httpx.Response) -> Any:
    """Decode a JSON body. An empty body decodes to None."""
    raw = response.text
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise MalformedEntityError(
            f"Response body is not valid JSON: {raw[:100]!r}", payload=raw
        ) from e


def affected_count(response: httpx.Response) -> int:
    """
    Parse the affected-count body of PATCH/DELETE.

    Accepts a JSON integer ("1"), plain text with surrounding whitespace
    ("1\\n"), or an empty body which counts as 0.
    """
    raw = response.text.strip()
    if not raw:
        return 0
    try:
        value = json.loads(raw)
    except ValueError:
        value = raw
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedEntityError(
            f"Expected a non-negative affected count, got {raw[:100]!r}", payload=raw
        )
    return value
