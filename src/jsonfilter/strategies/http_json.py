"""Ingest JSON from HTTP and HTTPS URLs."""

from __future__ import annotations

import asyncio
import logging

import httpx

from jsonfilter.config import (
    JSONFILTER_FETCH_TIMEOUT_S,
    JSONFILTER_MAX_CONTENT_BYTES,
    JSONFILTER_PREVIEW_BYTES,
)
from jsonfilter.exceptions import ContentTooLargeError
from jsonfilter.http_utils import (
    decode_body,
    new_client,
    parse_content_length,
    read_limited,
    read_preview,
    send_streaming,
)
from jsonfilter.schemas import (
    ErrorKind,
    IngestionFailure,
    IngestionOutcome,
    StrategyMetadata,
)
from jsonfilter.strategies.base import IngestionStrategy

logger = logging.getLogger(__name__)

_SCHEMES = ("http", "https")


class HttpJsonStrategy(IngestionStrategy):
    """Fetch JSON from static files and API endpoints over HTTP(S).

    The response body is validated as JSON whatever its declared content type,
    since many APIs omit or mis-set it.

    Args:
        client: Optional shared ``httpx.AsyncClient``. When omitted a client is
            created and closed for every call.
        timeout_s: Deadline for receiving the response headers.
        max_content_bytes: Largest body accepted.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout_s: float = JSONFILTER_FETCH_TIMEOUT_S,
        max_content_bytes: int = JSONFILTER_MAX_CONTENT_BYTES,
    ) -> None:
        self.client = client
        self.timeout_s = timeout_s
        self.max_content_bytes = max_content_bytes

    def can_handle(self, source: str) -> bool:
        return source.startswith(("http://", "https://"))

    async def ingest(self, source: str) -> IngestionOutcome:
        try:
            url = httpx.URL(source)
        except httpx.InvalidURL as exc:
            return IngestionFailure.of(
                ErrorKind.INVALID_URL,
                f"Invalid URL format: {source}",
                {"url": source, "reason": str(exc)},
            )
        if url.scheme not in _SCHEMES:
            return IngestionFailure.of(
                ErrorKind.INVALID_URL,
                "Only HTTP and HTTPS URLs are supported",
                {"url": source, "protocol": url.scheme},
            )
        if not url.host:
            return IngestionFailure.of(
                ErrorKind.INVALID_URL,
                f"Invalid URL format: {source}",
                {"url": source, "reason": "missing host"},
            )

        if self.client is not None:
            return await self._fetch(self.client, source)

        async with new_client(self.timeout_s) as client:
            return await self._fetch(client, source)

    async def _fetch(self, client: httpx.AsyncClient, source: str) -> IngestionOutcome:
        try:
            response = await send_streaming(client, source, timeout_s=self.timeout_s)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            return IngestionFailure.of(
                ErrorKind.NETWORK_ERROR,
                f"Request timeout after {int(self.timeout_s * 1000)}ms",
                {"url": source, "timeout_ms": int(self.timeout_s * 1000), "reason": str(exc) or None},
            )
        except httpx.HTTPError as exc:
            return IngestionFailure.of(
                ErrorKind.NETWORK_ERROR,
                f"Failed to fetch from {source}: {exc}",
                {"url": source, "reason": str(exc)},
            )

        try:
            return await self._handle_response(response, source)
        finally:
            await response.aclose()

    async def _handle_response(self, response: httpx.Response, source: str) -> IngestionOutcome:
        if not response.is_success:
            failure = await self._classify_status(response, source)
            logger.warning(
                "HTTP fetch failed",
                extra={"url": source, "status": response.status_code, "kind": failure.error.kind.value},
            )
            return failure

        declared = parse_content_length(response.headers)
        if declared is not None and declared > self.max_content_bytes:
            return IngestionFailure.of(
                ErrorKind.CONTENT_TOO_LARGE,
                f"Response too large ({_mb(declared)}MB). This tool is optimized for JSON "
                f"files under {_mb(self.max_content_bytes)}MB.",
                {"content_length": declared, "max_size": self.max_content_bytes, "url": source},
            )

        try:
            body = await read_limited(response, self.max_content_bytes)
        except ContentTooLargeError as exc:
            return IngestionFailure.of(
                ErrorKind.CONTENT_TOO_LARGE,
                f"Response too large ({_mb(exc.size)}MB after reading). This tool is optimized "
                f"for JSON files under {_mb(self.max_content_bytes)}MB.",
                {"actual_size": exc.size, "max_size": self.max_content_bytes, "url": source},
            )
        except httpx.HTTPError as exc:
            return IngestionFailure.of(
                ErrorKind.NETWORK_ERROR,
                "Failed to read response content. This may be due to network issues "
                "or the response being too large.",
                {"url": source, "reason": str(exc)},
            )

        content = decode_body(response, body)
        logger.debug("Fetched %d bytes from %s", len(body), source)

        validation = self.validate_json_content(content)
        if validation.ok:
            return validation

        content_type = response.headers.get("content-type", "unknown")
        preview = content[:JSONFILTER_PREVIEW_BYTES]
        return IngestionFailure.of(
            ErrorKind.INVALID_JSON,
            f"Response content is not valid JSON. Content-Type: {content_type}. {_content_hint(preview)}",
            {
                "content_type": content_type,
                "url": source,
                "content_preview": preview,
                "response_size": len(body),
            },
        )

    async def _classify_status(self, response: httpx.Response, source: str) -> IngestionFailure:
        status = response.status_code
        details = {"status": status, "status_text": response.reason_phrase, "url": source}

        if status in (401, 403):
            if status == 401:
                message = (
                    "Authentication required: This endpoint needs valid credentials. "
                    "Verify this is a public API endpoint."
                )
            else:
                message = (
                    "Access forbidden: This endpoint may require authentication, be restricted "
                    "by region, or have IP restrictions. Verify this is a publicly accessible endpoint."
                )
            preview = await read_preview(response, JSONFILTER_PREVIEW_BYTES)
            if preview:
                details["response_preview"] = preview
            return IngestionFailure.of(ErrorKind.AUTHENTICATION_REQUIRED, message, details)

        if status == 429:
            retry_after = response.headers.get("retry-after")
            if retry_after is not None:
                details["retry_after"] = retry_after
            return IngestionFailure.of(
                ErrorKind.RATE_LIMIT_EXCEEDED,
                "API rate limit exceeded. Please wait before making more requests to this endpoint."
                + (f" Retry after: {retry_after}." if retry_after is not None else ""),
                details,
            )

        if status >= 500:
            return IngestionFailure.of(
                ErrorKind.SERVER_ERROR,
                f"Server error (HTTP {status}): This is likely a temporary issue with the "
                "endpoint. Try again later.",
                details,
            )

        hint = "Endpoint not found - verify the URL is correct." if status == 404 else "Client error occurred."
        return IngestionFailure.of(
            ErrorKind.NETWORK_ERROR,
            f"HTTP {status}: {response.reason_phrase}. {hint}",
            details,
        )

    def metadata(self) -> StrategyMetadata:
        return StrategyMetadata(
            name="HttpJsonStrategy",
            description="Fetches JSON data from HTTP/HTTPS URLs (static files and API endpoints)",
            supported_sources=[
                "HTTP/HTTPS URLs serving JSON content",
                "JSON API endpoints",
                "Static .json files",
                "Any HTTP/HTTPS URL returning valid JSON",
            ],
        )


def _content_hint(preview: str) -> str:
    lowered = preview.lower()
    if "<!doctype html" in lowered or "<html" in lowered:
        return "The response appears to be HTML - verify the URL points to a JSON endpoint, not a web page."
    if "<?xml" in lowered:
        return "The response appears to be XML - this tool only supports JSON format."
    if not preview.strip():
        return "The response is empty - the endpoint may not be returning data."
    return "Verify the endpoint returns valid JSON format."


def _mb(size: int) -> int:
    return round(size / 1024 / 1024)
