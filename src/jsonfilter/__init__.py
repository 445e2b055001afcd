"""jsonfilter: ingest JSON from files or URLs, project it by shape, measure it."""

from jsonfilter.exceptions import (
    ContentTooLargeError,
    JsonFilterError,
    SchemaGenerationError,
    ShapeError,
)
from jsonfilter.projection import project
from jsonfilter.resolver import SourceResolver, default_resolver
from jsonfilter.schemas import (
    ErrorKind,
    IngestionError,
    IngestionFailure,
    IngestionOutcome,
    IngestionSuccess,
    StrategyMetadata,
)
from jsonfilter.sizing import breakdown, format_size, merge_breakdowns, size_of
from jsonfilter.strategies import HttpJsonStrategy, IngestionStrategy, LocalFileStrategy
from jsonfilter.tools import ToolResult, json_dry_run, json_filter, json_schema, parse_shape

__all__ = [
    "ContentTooLargeError",
    "ErrorKind",
    "HttpJsonStrategy",
    "IngestionError",
    "IngestionFailure",
    "IngestionOutcome",
    "IngestionStrategy",
    "IngestionSuccess",
    "JsonFilterError",
    "LocalFileStrategy",
    "SchemaGenerationError",
    "ShapeError",
    "SourceResolver",
    "StrategyMetadata",
    "ToolResult",
    "breakdown",
    "default_resolver",
    "format_size",
    "json_dry_run",
    "json_filter",
    "json_schema",
    "merge_breakdowns",
    "parse_shape",
    "project",
    "size_of",
]
