"""Abstract ingestion strategy."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod

from jsonfilter.document import parse_document
from jsonfilter.schemas import (
    ErrorKind,
    IngestionFailure,
    IngestionOutcome,
    IngestionSuccess,
    StrategyMetadata,
)


class IngestionStrategy(ABC):
    """Turns a source identifier into validated JSON text or a classified error."""

    @abstractmethod
    def can_handle(self, source: str) -> bool:
        """Return True if this strategy accepts ``source``."""

    @abstractmethod
    async def ingest(self, source: str) -> IngestionOutcome:
        """Read ``source`` and return its JSON text or a failure.

        Implementations never raise for expected failures; every problem is
        reported as an ``IngestionFailure``.
        """

    @abstractmethod
    def metadata(self) -> StrategyMetadata:
        """Describe this strategy."""

    @property
    def name(self) -> str:
        return self.metadata().name

    def validate_json_content(self, content: str) -> IngestionOutcome:
        """Check that ``content`` parses as strict JSON.

        ``NaN`` and ``Infinity`` are accepted by :mod:`json` but are not part
        of JSON, so they are rejected here.
        """
        try:
            parse_document(content)
        except json.JSONDecodeError as exc:
            return IngestionFailure.of(
                ErrorKind.INVALID_JSON,
                f"Invalid JSON format in content: {exc.msg} (line {exc.lineno}, column {exc.colno})",
                {"line": exc.lineno, "column": exc.colno, "position": exc.pos},
            )
        except (ValueError, RecursionError) as exc:
            return IngestionFailure.of(
                ErrorKind.INVALID_JSON,
                f"Invalid JSON format in content: {exc}",
            )
        return IngestionSuccess(content=content)
