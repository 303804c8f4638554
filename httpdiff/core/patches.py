"""Patch accumulator for a diff run.

A PatchSet holds four deduplicating collections, one per patch kind. The
diff engine threads a single PatchSet through its recursion and returns it;
callers that need to combine runs use ``merge``, which never duplicates a
structurally identical patch.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterator, List, Sequence, Set, Tuple

from .types import Patch, PatchKind

# Display order of the collections (alphabetical).
COLLECTIONS: Tuple[Tuple[str, PatchKind], ...] = (
    ("deletes", PatchKind.DELETE),
    ("inserts", PatchKind.INSERT),
    ("reorders", PatchKind.REORDER),
    ("updates", PatchKind.UPDATE),
)


class PatchSet:
    """Four sets of patches (inserts, deletes, updates, reorders)."""

    __slots__ = ("_sets",)

    def __init__(self) -> None:
        self._sets: Dict[PatchKind, Set[Patch]] = {kind: set() for _, kind in COLLECTIONS}

    @classmethod
    def empty(cls) -> "PatchSet":
        """A fresh accumulator with all four collections empty."""
        return cls()

    def add(
        self,
        kind: Any,
        path: Sequence[str],
        old_value: Any = None,
        new_value: Any = None,
    ) -> "PatchSet":
        """
        Record a patch in the collection matching its kind.

        Adding a structurally identical patch twice is a no-op.

        Raises:
            InvalidPatchKind: kind is not one of the four patch kinds
        """
        return self.add_patch(
            Patch(kind=kind, path=tuple(path), old_value=old_value, new_value=new_value)
        )

    def add_patch(self, patch: Patch) -> "PatchSet":
        self._sets[patch.kind].add(patch)
        return self

    def merge(self, other: "PatchSet") -> "PatchSet":
        """Return a new PatchSet holding the union of both sets."""
        merged = PatchSet()
        for source in (self, other):
            for patch in source:
                merged.add_patch(patch)
        return merged

    @property
    def inserts(self) -> FrozenSet[Patch]:
        return frozenset(self._sets[PatchKind.INSERT])

    @property
    def deletes(self) -> FrozenSet[Patch]:
        return frozenset(self._sets[PatchKind.DELETE])

    @property
    def updates(self) -> FrozenSet[Patch]:
        return frozenset(self._sets[PatchKind.UPDATE])

    @property
    def reorders(self) -> FrozenSet[Patch]:
        return frozenset(self._sets[PatchKind.REORDER])

    def of_kind(self, kind: Any) -> List[Patch]:
        """Patches of one kind in deterministic order."""
        return sorted(self._sets[PatchKind.coerce(kind)], key=Patch.sort_key)

    def collections(self) -> List[Tuple[str, List[Patch]]]:
        """(name, sorted patches) for each collection, in display order."""
        return [(name, self.of_kind(kind)) for name, kind in COLLECTIONS]

    def is_empty(self) -> bool:
        return not any(self._sets.values())

    def __len__(self) -> int:
        return sum(len(patches) for patches in self._sets.values())

    def __iter__(self) -> Iterator[Patch]:
        for _name, patches in self.collections():
            yield from patches

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatchSet):
            return NotImplemented
        return self._sets == other._sets

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{name}={len(self._sets[kind])}" for name, kind in COLLECTIONS
        )
        return f"PatchSet({counts})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: [patch.to_dict() for patch in patches]
            for name, patches in self.collections()
        }
