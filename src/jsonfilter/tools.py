"""Tool operations: schema generation, shape filtering and size dry runs.

Each operation ingests one source, runs a synchronous traversal over the
parsed document and renders a text result. Failures are rendered as
``"Error: {message}"`` with no partial output.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel

from jsonfilter.document import parse_document
from jsonfilter.exceptions import SchemaGenerationError, ShapeError
from jsonfilter.projection import project
from jsonfilter.resolver import SourceResolver, default_resolver
from jsonfilter.schema_gen import infer_types_async
from jsonfilter.schemas import ErrorKind, IngestionFailure, IngestionOutcome, Shape
from jsonfilter.sizing import breakdown, format_size, size_of

logger = logging.getLogger(__name__)

QUICKTYPE_ERROR = "quicktype_error"

# Built once and shared read-only by every call that does not pass its own.
_RESOLVER = default_resolver()


class ToolResult(BaseModel):
    """Rendered output of a tool call."""

    text: str
    is_error: bool = False
    error_kind: str | None = None

    @classmethod
    def failure(cls, kind: str, message: str) -> ToolResult:
        return cls(text=f"Error: {message}", is_error=True, error_kind=kind)


def parse_shape(raw: Any) -> Shape:
    """Accept a shape as a dict or as JSON text.

    Raises:
        ShapeError: If ``raw`` is not valid JSON or not a JSON object.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise ShapeError(f"Invalid JSON in shape parameter: {exc}") from exc
    if not isinstance(raw, dict):
        raise ShapeError(f"Shape must be a JSON object, got {type(raw).__name__}")
    return raw


async def json_schema(source: str, *, resolver: SourceResolver | None = None) -> ToolResult:
    """Generate type definitions for the document at ``source``."""
    outcome = await _ingest(source, resolver)
    if isinstance(outcome, IngestionFailure):
        return _ingestion_failed(source, outcome)

    size = len(outcome.content.encode("utf-8"))
    try:
        schema = await infer_types_async(outcome.content)
    except SchemaGenerationError as exc:
        logger.error("Schema generation failed", extra={"source": source, "error": str(exc)})
        return ToolResult.failure(QUICKTYPE_ERROR, f"Failed to generate schema: {exc}")

    return ToolResult(text=f"// File size: {format_size(size)} ({size} bytes)\n\n{schema}")


async def json_filter(
    source: str,
    shape: Any,
    *,
    resolver: SourceResolver | None = None,
) -> ToolResult:
    """Return the fields of the document at ``source`` selected by ``shape``."""
    try:
        parsed_shape = parse_shape(shape)
    except ShapeError as exc:
        return ToolResult.failure(ErrorKind.VALIDATION_ERROR.value, str(exc))

    outcome = await _ingest(source, resolver)
    if isinstance(outcome, IngestionFailure):
        return _ingestion_failed(source, outcome)

    try:
        filtered = project(parse_document(outcome.content), parsed_shape)
        text = json.dumps(filtered, indent=2, ensure_ascii=False)
    except RecursionError:
        return ToolResult.failure(
            ErrorKind.VALIDATION_ERROR.value,
            "Failed to apply shape filter: document is nested too deeply",
        )
    return ToolResult(text=text)


async def json_dry_run(
    source: str,
    shape: Any,
    *,
    resolver: SourceResolver | None = None,
) -> ToolResult:
    """Report the serialized size of the fields ``shape`` selects."""
    try:
        parsed_shape = parse_shape(shape)
    except ShapeError as exc:
        return ToolResult.failure(ErrorKind.VALIDATION_ERROR.value, str(exc))

    outcome = await _ingest(source, resolver)
    if isinstance(outcome, IngestionFailure):
        return _ingestion_failed(source, outcome)

    try:
        document = parse_document(outcome.content)
        sizes = breakdown(document, parsed_shape)
        total = size_of(document)
    except RecursionError:
        return ToolResult.failure(
            ErrorKind.VALIDATION_ERROR.value,
            "Failed to calculate size breakdown: document is nested too deeply",
        )

    header = f"Total file size: {format_size(total)} ({total} bytes)\n\nSize breakdown:\n"
    return ToolResult(text=header + json.dumps(sizes, indent=2))


def _ingestion_failed(source: str, outcome: IngestionFailure) -> ToolResult:
    logger.info(
        "Ingestion failed",
        extra={"source": source, "kind": outcome.error.kind.value},
    )
    return ToolResult.failure(outcome.error.kind.value, outcome.error.message)


async def _ingest(source: str, resolver: SourceResolver | None) -> IngestionOutcome:
    try:
        return await (resolver or _RESOLVER).ingest(source)
    except Exception as exc:
        logger.exception("Unexpected ingestion error", extra={"source": source})
        return IngestionFailure.of(
            ErrorKind.VALIDATION_ERROR,
            f"Unexpected error during processing: {exc}",
            {"source": source},
        )
