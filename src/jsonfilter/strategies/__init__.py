"""Ingestion strategies."""

from jsonfilter.strategies.base import IngestionStrategy
from jsonfilter.strategies.http_json import HttpJsonStrategy
from jsonfilter.strategies.local_file import LocalFileStrategy

__all__ = ["HttpJsonStrategy", "IngestionStrategy", "LocalFileStrategy"]
