"""Shared schemas for jsonfilter."""

from jsonfilter.schemas.ingestion import (
    ErrorKind,
    IngestionError,
    IngestionFailure,
    IngestionOutcome,
    IngestionSuccess,
    StrategyMetadata,
)
from jsonfilter.schemas.json_types import JsonValue, Shape, SizeBreakdown

__all__ = [
    "ErrorKind",
    "IngestionError",
    "IngestionFailure",
    "IngestionOutcome",
    "IngestionSuccess",
    "JsonValue",
    "Shape",
    "SizeBreakdown",
    "StrategyMetadata",
]
