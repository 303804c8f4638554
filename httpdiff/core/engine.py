"""Order-preserving structural diff engine.

Compares two JSON-like trees and records every change as a path-addressed
patch in a PatchSet.

Algorithm (for two trees a, b at a given path):
1. Traverse the key union: a's keys in a's order, then b's new keys in b's order.
2. Key only in b: insert patch with the whole new value (no recursion).
3. Key only in a: delete patch with the whole old value (no recursion).
4. Key in both:
   a. update patch if the values differ and are not both trees
   b. reorder patch if both trees are ordered and the key's position moved
   c. recurse if both values are trees

Two scalars (or a tree and a scalar) at the root produce a single update
patch at the empty path when they differ.

The engine is a pure function of its inputs: trees are only read, and the
accumulator is owned by the caller of ``diff``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Sequence, Tuple

from .patches import PatchSet
from .tree import MISSING, is_tree, lookup, supports_positions, values_equal
from .types import PatchKind


def key_union(a: Mapping, b: Mapping) -> List[str]:
    """All keys of a followed by b's unseen keys, first occurrence wins."""
    seen: Dict[str, None] = dict.fromkeys(a.keys())
    for key in b.keys():
        if key not in seen:
            seen[key] = None
    return list(seen)


def diff(a: Any, b: Any) -> PatchSet:
    """Compute the patches that transform a into b."""
    return diff_into(PatchSet.empty(), (), a, b)


def diff_into(patches: PatchSet, path: Sequence[str], a: Any, b: Any) -> PatchSet:
    """
    Diff a against b at path, adding patches to the given accumulator.

    Args:
        patches: Accumulator to add to (returned for chaining)
        path: Keys from the diff root to a and b
        a: First value (tree or scalar)
        b: Second value (tree or scalar)

    Returns:
        The accumulator.
    """
    path = tuple(path)
    if is_tree(a) and is_tree(b):
        return _diff_trees(patches, path, a, b)
    if not values_equal(a, b):
        patches.add(PatchKind.UPDATE, path, a, b)
    return patches


# ---------------------------------------------------------------------------
# Per-key checks
# ---------------------------------------------------------------------------


def _check_update(
    patches: PatchSet, path: Tuple[str, ...], val_a: Any, val_b: Any
) -> None:
    # Two trees are never updated as a whole; only their leaves are.
    if is_tree(val_a) and is_tree(val_b):
        return
    if not values_equal(val_a, val_b):
        patches.add(PatchKind.UPDATE, path, val_a, val_b)


def _check_reorder(
    patches: PatchSet, path: Tuple[str, ...], key: str, a: Mapping, b: Mapping
) -> None:
    index_in_a = a.index_of(key)
    index_in_b = b.index_of(key)
    if index_in_a != index_in_b:
        patches.add(PatchKind.REORDER, path, index_in_a, index_in_b)


def _check_recur(
    patches: PatchSet, path: Tuple[str, ...], val_a: Any, val_b: Any
) -> None:
    if is_tree(val_a) and is_tree(val_b):
        _diff_trees(patches, path, val_a, val_b)


def _diff_trees(
    patches: PatchSet, path: Tuple[str, ...], a: Mapping, b: Mapping
) -> PatchSet:
    positional = supports_positions(a) and supports_positions(b)

    for key in key_union(a, b):
        child_path = path + (key,)
        val_a = lookup(a, key)
        val_b = lookup(b, key)

        if val_a is MISSING:
            patches.add(PatchKind.INSERT, child_path, None, val_b)
            continue
        if val_b is MISSING:
            patches.add(PatchKind.DELETE, child_path, val_a, None)
            continue

        _check_update(patches, child_path, val_a, val_b)
        if positional:
            _check_reorder(patches, child_path, key, a, b)
        _check_recur(patches, child_path, val_a, val_b)

    return patches
