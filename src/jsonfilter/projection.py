"""Project a JSON document down to the fields named by a shape."""

from __future__ import annotations

from jsonfilter.schemas import JsonValue, Shape


def project(value: JsonValue, shape: Shape) -> JsonValue:
    """Keep only the fields ``shape`` allows.

    Lists are projected element by element with the same shape. Everything
    else produces a new dict whose keys follow the shape's order:

    - ``True`` copies the field when it exists; a missing field is omitted,
      never emitted as ``None``.
    - A nested shape recurses into the field, or skips it when missing.
    - Any other rule is ignored.

    A nested shape applied to a scalar (``null`` included) yields ``{}``.
    """
    if isinstance(value, list):
        return [project(item, shape) for item in value]

    fields = value if isinstance(value, dict) else {}
    result: dict[str, JsonValue] = {}
    for key, rule in shape.items():
        if key not in fields:
            continue
        if rule is True:
            result[key] = fields[key]
        elif isinstance(rule, dict):
            result[key] = project(fields[key], rule)
    return result
