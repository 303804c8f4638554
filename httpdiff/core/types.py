from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from .canon import canon
from .errors import InvalidPatchKind
from .tree import to_plain


class PatchKind(str, Enum):
    """The four kinds of change the diff engine reports."""

    INSERT = "insert"
    DELETE = "delete"
    UPDATE = "update"
    REORDER = "reorder"

    @classmethod
    def coerce(cls, kind: Any) -> "PatchKind":
        """Accept a PatchKind or its string value; anything else is a bug."""
        if isinstance(kind, cls):
            return kind
        try:
            return cls(kind)
        except ValueError:
            raise InvalidPatchKind(kind) from None


@dataclass(frozen=True, eq=False)
class Patch:
    """
    A single path-addressed change between two trees.

    Attributes:
        kind: insert, delete, update or reorder
        path: Keys from the diff root to the changed key (empty for the root)
        old_value: Value in the first tree (None for insert); for reorder,
                   the key's position in the first tree
        new_value: Value in the second tree (None for delete); for reorder,
                   the key's position in the second tree

    Equality and hashing are structural: values are compared through their
    canonical bytes, so unhashable values (arrays, trees) are supported.
    """

    kind: PatchKind
    path: Tuple[str, ...]
    old_value: Any = None
    new_value: Any = None
    _identity: Tuple[Any, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", PatchKind.coerce(self.kind))
        object.__setattr__(self, "path", tuple(self.path))
        object.__setattr__(
            self,
            "_identity",
            (self.kind.value, self.path, canon(self.old_value), canon(self.new_value)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Patch):
            return NotImplemented
        return self._identity == other._identity

    def __hash__(self) -> int:
        return hash(self._identity)

    def sort_key(self) -> Tuple[Any, ...]:
        """Deterministic ordering: by path, then kind, then values."""
        return (self.path, self._identity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "path": list(self.path),
            "old_value": to_plain(self.old_value),
            "new_value": to_plain(self.new_value),
        }

