"""Parse JSON text into the values the projector and accountant walk."""

from __future__ import annotations

import json
import math

from jsonfilter.schemas import JsonValue


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def _parse_float(literal: str) -> float | None:
    # 1e400 overflows to inf; it re-serializes as null.
    value = float(literal)
    return None if math.isinf(value) else value


def parse_document(text: str) -> JsonValue:
    """Decode strict JSON text.

    ``NaN`` and ``Infinity`` literals are rejected. Numbers too large for a
    float become ``None``.

    Raises:
        json.JSONDecodeError: On malformed text.
        ValueError: On a non-JSON constant.
        RecursionError: On input nested too deeply for the parser.
    """
    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_float)
