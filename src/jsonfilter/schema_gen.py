"""Generate type definitions from a JSON sample with quicktype."""

from __future__ import annotations

import asyncio
import subprocess

from jsonfilter.config import (
    JSONFILTER_QUICKTYPE_BIN,
    JSONFILTER_SCHEMA_LANGUAGE,
    JSONFILTER_SCHEMA_TYPE_NAME,
)
from jsonfilter.exceptions import SchemaGenerationError


def infer_types(
    sample_json: str,
    *,
    language: str = JSONFILTER_SCHEMA_LANGUAGE,
    type_name: str = JSONFILTER_SCHEMA_TYPE_NAME,
) -> str:
    """Run quicktype over a JSON sample and return the rendered types.

    The sample is fed on stdin so arbitrarily large documents never hit the
    command line length limit.

    Args:
        sample_json: Raw JSON text.
        language: quicktype target language.
        type_name: Name of the top-level type.

    Returns:
        quicktype's output, unchanged.

    Raises:
        SchemaGenerationError: If quicktype is not installed or fails.
    """
    command = [
        JSONFILTER_QUICKTYPE_BIN,
        "--src-lang",
        "json",
        "--lang",
        language,
        "--top-level",
        type_name,
        "--just-types",
    ]
    try:
        result = subprocess.run(
            command,
            input=sample_json,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )
    except FileNotFoundError as exc:
        raise SchemaGenerationError(
            f"quicktype executable not found ({JSONFILTER_QUICKTYPE_BIN}). "
            "Install it with: npm install -g quicktype"
        ) from exc

    if result.returncode != 0:
        raise SchemaGenerationError(f"quicktype failed: {result.stderr.strip()}")

    return result.stdout.rstrip("\n")


async def infer_types_async(sample_json: str, **kwargs: str) -> str:
    """Run :func:`infer_types` in a worker thread."""
    return await asyncio.to_thread(infer_types, sample_json, **kwargs)
