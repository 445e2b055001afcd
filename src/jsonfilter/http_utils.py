"""HTTP helpers for size-bounded JSON fetching."""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from jsonfilter.config import (
    JSONFILTER_ACCEPT,
    JSONFILTER_FETCH_TIMEOUT_S,
    JSONFILTER_USER_AGENT,
)
from jsonfilter.exceptions import ContentTooLargeError

logger = logging.getLogger(__name__)

_MAX_REDIRECTS: Final[int] = 5


def request_headers() -> dict[str, str]:
    """Headers sent with every fetch."""
    return {"Accept": JSONFILTER_ACCEPT, "User-Agent": JSONFILTER_USER_AGENT}


def new_client(timeout_s: float = JSONFILTER_FETCH_TIMEOUT_S) -> httpx.AsyncClient:
    """Create a client configured for one-off JSON fetches.

    Args:
        timeout_s: Per-operation timeout (connect, read, write, pool).

    Returns:
        An ``httpx.AsyncClient`` the caller must close.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_s),
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


async def send_streaming(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout_s: float,
) -> httpx.Response:
    """Issue a GET and return as soon as the headers arrive.

    The body is left unread so callers can inspect status and headers first.
    The whole exchange up to the headers is bounded by ``timeout_s``.

    Raises:
        asyncio.TimeoutError: If the headers do not arrive in time.
        httpx.HTTPError: On transport failures.
    """
    request = client.build_request("GET", url, headers=request_headers())
    return await asyncio.wait_for(client.send(request, stream=True), timeout=timeout_s)


def parse_content_length(headers: httpx.Headers) -> int | None:
    """Return the declared body length, or None if absent or unparsable."""
    raw = headers.get("content-length")
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        logger.debug("Ignoring unparsable Content-Length %r", raw)
        return None
    return value if value >= 0 else None


async def read_limited(response: httpx.Response, limit: int) -> bytes:
    """Read the response body, stopping as soon as it grows past ``limit``.

    Args:
        response: A streaming response whose body has not been read.
        limit: Maximum number of bytes accepted.

    Returns:
        The complete body.

    Raises:
        ContentTooLargeError: If more than ``limit`` bytes arrive.
        httpx.HTTPError: If the body cannot be read.
    """
    chunks: list[bytes] = []
    received = 0
    async for chunk in response.aiter_bytes():
        received += len(chunk)
        if received > limit:
            raise ContentTooLargeError(received, limit)
        chunks.append(chunk)
    return b"".join(chunks)


async def read_preview(response: httpx.Response, limit: int) -> str:
    """Best-effort read of the first ``limit`` bytes for diagnostics.

    Returns an empty string if the body cannot be read.
    """
    buffer = bytearray()
    try:
        async for chunk in response.aiter_bytes():
            buffer.extend(chunk)
            if len(buffer) >= limit:
                break
    except httpx.HTTPError as exc:
        logger.debug("Could not read error body preview: %s", exc)
        return ""
    return decode_body(response, bytes(buffer[:limit]))


def decode_body(response: httpx.Response, body: bytes) -> str:
    """Decode ``body`` with the response charset, falling back to UTF-8."""
    encoding = response.charset_encoding or "utf-8"
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")
