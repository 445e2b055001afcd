"""Type aliases for parsed JSON, shapes and size breakdowns."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Union

# Parsed JSON as produced by ``json.loads``. dict keeps insertion order.
JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

# {"key": True} selects a field, {"key": {...}} descends into it.
Shape = Dict[str, Union[Literal[True], "Shape"]]

# Same topology as a Shape, with byte counts at the leaves.
SizeBreakdown = Dict[str, Union[int, "SizeBreakdown"]]
