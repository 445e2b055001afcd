"""Test setup for jsonfilter."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (make real network calls)",
    )


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, object], Path]:
    """Write a JSON document into tmp_path and return its path."""

    def _write(name: str, document: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write
