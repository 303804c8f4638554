"""Ordered key-value trees for httpdiff.

An OrderedTree is the decoded form of a JSON object. It keeps the keys in
insertion order and exposes each key's position through ``index_of``, so
the diff engine can detect keys that moved.

Two variants share the same type:
- ordered (default): position is meaningful, reorders are reported
- unordered (``ordered=False``): position is ignored, used for derived
  structures such as parsed query strings

Plain ``dict`` values (and any other Mapping) are treated as unordered maps.
Everything that is not a mapping is a scalar, JSON arrays included.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from .errors import DuplicateKeyError


class _Missing:
    """Sentinel type for "key not found", distinct from a stored ``None``."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class ValueShape(str, Enum):
    """How the diff engine sees a value."""

    ORDERED = "ordered"  # OrderedTree with positional semantics
    UNORDERED = "unordered"  # unordered OrderedTree or plain mapping
    SCALAR = "scalar"  # str, number, bool, None, arrays


class OrderedTree(Mapping):
    """
    Immutable mapping of unique string keys that remembers insertion order.

    Attributes:
        ordered: True when key positions carry meaning (JSON objects),
                 False for derived structures whose order is arbitrary.
    """

    __slots__ = ("_pairs", "_positions", "ordered")

    def __init__(self, pairs: Iterable[Tuple[str, Any]] = (), *, ordered: bool = True):
        items = tuple((key, value) for key, value in pairs)
        positions: Dict[str, int] = {}
        for idx, (key, _value) in enumerate(items):
            if key in positions:
                raise DuplicateKeyError(key)
            positions[key] = idx
        object.__setattr__(self, "_pairs", items)
        object.__setattr__(self, "_positions", positions)
        object.__setattr__(self, "ordered", ordered)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("OrderedTree is immutable")

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Any]]) -> "OrderedTree":
        """Build an ordered tree; usable as ``json`` ``object_pairs_hook``."""
        return cls(pairs)

    @classmethod
    def unordered(cls, mapping: Mapping) -> "OrderedTree":
        """Build the unordered variant from any mapping."""
        return cls(mapping.items(), ordered=False)

    def __getitem__(self, key: str) -> Any:
        return self._pairs[self._positions[key]][1]

    def __iter__(self) -> Iterator[str]:
        return (key for key, _value in self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def lookup(self, key: str) -> Any:
        """Return the value for key, or MISSING if the key is absent."""
        return self.get(key, MISSING)

    def index_of(self, key: str) -> Optional[int]:
        """Zero-based insertion position of key, or None if absent."""
        return self._positions.get(key)

    @property
    def shape(self) -> ValueShape:
        return ValueShape.ORDERED if self.ordered else ValueShape.UNORDERED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return values_equal(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.ordered:
            return f"OrderedTree({list(self._pairs)!r})"
        return f"OrderedTree({list(self._pairs)!r}, ordered=False)"


def shape_of(value: Any) -> ValueShape:
    """Classify a value as ordered tree, unordered map or scalar."""
    if isinstance(value, OrderedTree):
        return value.shape
    if isinstance(value, Mapping):
        return ValueShape.UNORDERED
    return ValueShape.SCALAR


def is_tree(value: Any) -> bool:
    return shape_of(value) is not ValueShape.SCALAR


def supports_positions(value: Any) -> bool:
    """True if index_of on value reflects a meaningful key order."""
    return shape_of(value) is ValueShape.ORDERED


def lookup(tree: Mapping, key: str) -> Any:
    """Mapping lookup that returns MISSING instead of raising."""
    return tree.get(key, MISSING)


def values_equal(a: Any, b: Any) -> bool:
    """
    JSON-aware deep equality.

    - Trees are equal only to trees of the same shape; ordered trees also
      compare key order.
    - Numbers compare numerically (1 == 1.0) but booleans never equal numbers.
    - A tree is never equal to a scalar.
    """
    shape_a = shape_of(a)
    if shape_a is not shape_of(b):
        return False

    if shape_a is ValueShape.ORDERED:
        if len(a) != len(b):
            return False
        return all(
            key_a == key_b and values_equal(val_a, val_b)
            for (key_a, val_a), (key_b, val_b) in zip(a.items(), b.items())
        )

    if shape_a is ValueShape.UNORDERED:
        if len(a) != len(b):
            return False
        return all(key in b and values_equal(val, b[key]) for key, val in a.items())

    return _scalars_equal(a, b)


def _scalars_equal(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b

    seq_a = isinstance(a, (list, tuple))
    seq_b = isinstance(b, (list, tuple))
    if seq_a or seq_b:
        if not (seq_a and seq_b) or len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))

    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


def to_plain(value: Any) -> Any:
    """Convert trees to plain dicts (key order kept) for JSON encoding."""
    if isinstance(value, Mapping):
        return {key: to_plain(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value
