"""Byte-size accounting for JSON documents and shape-selected subsets."""

from __future__ import annotations

import json
import math
from functools import reduce
from typing import Union

from jsonfilter.schemas import JsonValue, Shape, SizeBreakdown

_KB = 1024
_MB = 1024 * 1024

_Leaf = Union[int, SizeBreakdown]


def size_of(value: JsonValue) -> int:
    """Return the UTF-8 byte length of ``value`` serialized without whitespace.

    Matches ``json.dumps(value, ensure_ascii=False, separators=(",", ":"))``,
    except that non-finite floats count as ``null`` and unpaired surrogates
    count as their six-byte ``\\uXXXX`` escape.
    """
    if value is None:
        return 4
    if value is True:
        return 4
    if value is False:
        return 5
    if isinstance(value, float) and not math.isfinite(value):
        return 4
    if isinstance(value, (int, float)):
        return len(json.dumps(value))
    if isinstance(value, str):
        return _encoded_len(json.dumps(value, ensure_ascii=False))
    if isinstance(value, list):
        return 2 + sum(size_of(item) for item in value) + max(len(value) - 1, 0)
    if isinstance(value, dict):
        total = 2 + max(len(value) - 1, 0)
        for key, item in value.items():
            total += _encoded_len(json.dumps(key, ensure_ascii=False)) + 1 + size_of(item)
        return total
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def breakdown(value: JsonValue, shape: Shape) -> SizeBreakdown:
    """Measure the fields ``shape`` selects from ``value``.

    The result mirrors the shape with byte counts at the ``True`` leaves.
    For lists the per-element breakdowns are summed into one. Missing fields
    are left out, and a nested shape over a scalar yields ``{}``.
    """
    if isinstance(value, list):
        return reduce(merge_breakdowns, (breakdown(item, shape) for item in value), {})

    fields = value if isinstance(value, dict) else {}
    result: SizeBreakdown = {}
    for key, rule in shape.items():
        if key not in fields:
            continue
        if rule is True:
            result[key] = size_of(fields[key])
        elif isinstance(rule, dict):
            result[key] = breakdown(fields[key], rule)
    return result


def merge_breakdowns(left: SizeBreakdown, right: SizeBreakdown) -> SizeBreakdown:
    """Sum two breakdowns leaf by leaf.

    A key present on one side only counts as 0 on the other. Where one side
    holds a count and the other a nested breakdown, the nested one is kept.
    The merge is commutative and associative.
    """
    merged: SizeBreakdown = {}
    for key in {**left, **right}:
        merged[key] = _merge_leaf(left.get(key, 0), right.get(key, 0))
    return merged


def _merge_leaf(left: _Leaf, right: _Leaf) -> _Leaf:
    if isinstance(left, dict) and isinstance(right, dict):
        return merge_breakdowns(left, right)
    if isinstance(left, dict):
        return left
    if isinstance(right, dict):
        return right
    return left + right


def format_size(size: int) -> str:
    """Format a byte count as ``bytes``, ``KB`` or ``MB``."""
    if size < _KB:
        return f"{size} bytes"
    if size < _MB:
        return f"{size / _KB:.1f} KB"
    return f"{size / _MB:.1f} MB"


def _encoded_len(text: str) -> int:
    try:
        return len(text.encode("utf-8"))
    except UnicodeEncodeError:
        # Only unpaired surrogates survive json.loads; each serializes as \udXXX.
        return sum(6 if "\ud800" <= char <= "\udfff" else len(char.encode("utf-8")) for char in text)
