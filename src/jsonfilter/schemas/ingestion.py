"""Ingestion outcome models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Closed set of ingestion failure classes."""

    FILE_NOT_FOUND = "file_not_found"
    INVALID_JSON = "invalid_json"
    NETWORK_ERROR = "network_error"
    INVALID_URL = "invalid_url"
    UNSUPPORTED_CONTENT_TYPE = "unsupported_content_type"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    VALIDATION_ERROR = "validation_error"
    AUTHENTICATION_REQUIRED = "authentication_required"
    SERVER_ERROR = "server_error"
    CONTENT_TOO_LARGE = "content_too_large"


class IngestionError(BaseModel):
    """A classified ingestion failure.

    Attributes:
        kind: Failure class.
        message: Human-actionable description, shown to the caller verbatim.
        details: Optional machine-readable context (status, url, sizes, previews).
    """

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    details: dict[str, Any] | None = None


class IngestionSuccess(BaseModel):
    """Raw JSON text that has already been validated."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    content: str


class IngestionFailure(BaseModel):
    """Ingestion failed; there is no content to read."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    error: IngestionError

    @classmethod
    def of(
        cls,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> IngestionFailure:
        return cls(error=IngestionError(kind=kind, message=message, details=details))


IngestionOutcome = Union[IngestionSuccess, IngestionFailure]


class StrategyMetadata(BaseModel):
    """Descriptive information about an ingestion strategy."""

    name: str
    description: str
    supported_sources: list[str] = Field(default_factory=list)
