"""Deterministic canonicalization of diffable values.

Patches carry arbitrary JSON-like values (trees, arrays, scalars), most of
which are unhashable. ``canon`` maps such a value to stable bytes whose
equality matches ``values_equal``, so patches can live in sets.

Guarantees:
- canon(v) is deterministic: same input always yields identical bytes
- Ordered trees keep their key order; unordered maps are sorted
- Ordered trees never collide with unordered maps or arrays
- Booleans stay distinct from numbers; integral floats collapse to ints
- -0.0 collapses to 0; NaN and infinities are encoded explicitly
"""
from __future__ import annotations

import json
import math
from typing import Any

from .tree import ValueShape, shape_of


def canon(value: Any) -> bytes:
    """Canonicalize a value to bytes for structural comparison and hashing."""
    return json.dumps(
        _normalize_value(value),
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")


def _normalize_value(value: Any) -> Any:
    shape = shape_of(value)
    if shape is ValueShape.ORDERED:
        return {"o": [[str(k), _normalize_value(v)] for k, v in value.items()]}
    if shape is ValueShape.UNORDERED:
        pairs = sorted(value.items(), key=lambda item: str(item[0]))
        return {"u": [[str(k), _normalize_value(v)] for k, v in pairs]}

    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return {"f": "NaN"}
        if math.isinf(value):
            return {"f": "Infinity" if value > 0 else "-Infinity"}
        if value.is_integer():
            return int(value)
        return float(f"{value:.17g}")
    if isinstance(value, (list, tuple)):
        return {"l": [_normalize_value(v) for v in value]}
    return {"r": repr(value)}
