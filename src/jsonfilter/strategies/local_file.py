"""Ingest JSON from the local filesystem."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from jsonfilter.config import JSONFILTER_MAX_CONTENT_BYTES
from jsonfilter.schemas import (
    ErrorKind,
    IngestionFailure,
    IngestionOutcome,
    StrategyMetadata,
)
from jsonfilter.strategies.base import IngestionStrategy

logger = logging.getLogger(__name__)


class LocalFileStrategy(IngestionStrategy):
    """Read JSON from a file path (absolute, relative or bare).

    Any source that is not an http(s) URL is treated as a path, so this
    strategy belongs at the end of the registry.
    """

    def __init__(self, *, max_content_bytes: int = JSONFILTER_MAX_CONTENT_BYTES) -> None:
        self.max_content_bytes = max_content_bytes

    def can_handle(self, source: str) -> bool:
        return not source.startswith(("http://", "https://"))

    async def ingest(self, source: str) -> IngestionOutcome:
        # NUL bytes raise ValueError, unknown ~user raises RuntimeError.
        try:
            path = Path(source).expanduser().resolve()
        except (OSError, ValueError, RuntimeError) as exc:
            return _not_found(source, exc)

        try:
            stat = await asyncio.to_thread(path.stat)
        except (OSError, ValueError) as exc:
            return _not_found(str(path), exc)

        # Oversized files are rejected before a single byte is read.
        if stat.st_size > self.max_content_bytes:
            return IngestionFailure.of(
                ErrorKind.CONTENT_TOO_LARGE,
                f"File too large ({stat.st_size} bytes, {_mb(stat.st_size)}MB). "
                f"Maximum supported size is {self.max_content_bytes} bytes "
                f"({_mb(self.max_content_bytes)}MB).",
                {"path": str(path), "size": stat.st_size, "max_size": self.max_content_bytes},
            )

        try:
            raw = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            return _not_found(str(path), exc)

        # Decoded from bytes so line endings reach the caller untouched.
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            return IngestionFailure.of(
                ErrorKind.INVALID_JSON,
                f"File is not valid UTF-8 text: {path} ({exc.reason} at byte {exc.start})",
                {"path": str(path), "position": exc.start},
            )

        logger.debug("Read %d bytes from %s", stat.st_size, path)
        return self.validate_json_content(content)

    def metadata(self) -> StrategyMetadata:
        return StrategyMetadata(
            name="LocalFileStrategy",
            description="Reads JSON data from local file system",
            supported_sources=["Local file paths (relative and absolute)"],
        )


def _not_found(path: str, exc: Exception) -> IngestionFailure:
    reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
    return IngestionFailure.of(
        ErrorKind.FILE_NOT_FOUND,
        f"File not found: {path}",
        {"path": path, "reason": reason},
    )


def _mb(size: int) -> int:
    return round(size / 1024 / 1024)
