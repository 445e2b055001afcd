"""Pick an ingestion strategy for a source and delegate to it."""

from __future__ import annotations

import logging
from typing import Iterable

from jsonfilter.schemas import (
    ErrorKind,
    IngestionFailure,
    IngestionOutcome,
    StrategyMetadata,
)
from jsonfilter.strategies import HttpJsonStrategy, IngestionStrategy, LocalFileStrategy

logger = logging.getLogger(__name__)


class SourceResolver:
    """Ordered registry of ingestion strategies; the first match wins."""

    def __init__(self, strategies: Iterable[IngestionStrategy] | None = None) -> None:
        self._strategies: list[IngestionStrategy] = list(strategies or [])

    def register_strategy(self, strategy: IngestionStrategy) -> None:
        """Append ``strategy`` after every strategy already registered."""
        self._strategies.append(strategy)

    def find_strategy(self, source: str) -> IngestionStrategy | None:
        for strategy in self._strategies:
            if strategy.can_handle(source):
                return strategy
        return None

    async def ingest(self, source: str) -> IngestionOutcome:
        """Ingest ``source`` with the first strategy that accepts it."""
        strategy = self.find_strategy(source)
        if strategy is None:
            names = [s.name for s in self._strategies]
            return IngestionFailure.of(
                ErrorKind.VALIDATION_ERROR,
                f"No strategy found to handle source: {source} "
                f"(registered: {', '.join(names) or 'none'})",
                {"source": source, "available_strategies": names},
            )

        logger.debug("Ingesting %s with %s", source, strategy.name)
        return await strategy.ingest(source)

    def available_strategies(self) -> list[StrategyMetadata]:
        return [strategy.metadata() for strategy in self._strategies]


def default_resolver() -> SourceResolver:
    """Resolver for URLs and local paths.

    Local files are registered last: any source that is not an http(s) URL
    falls through to a path lookup.
    """
    return SourceResolver([HttpJsonStrategy(), LocalFileStrategy()])
