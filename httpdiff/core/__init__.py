"""Core types and logic for httpdiff."""

from .canon import canon
from .engine import diff, diff_into, key_union
from .errors import (
    DuplicateKeyError,
    HttpDiffError,
    InvalidPatchKind,
    InvalidUrlError,
    RecordDecodeError,
    RecordFileError,
    RecordReadError,
    RecordShapeError,
)
from .patches import PatchSet
from .tree import (
    MISSING,
    OrderedTree,
    ValueShape,
    is_tree,
    shape_of,
    supports_positions,
    to_plain,
    values_equal,
)
from .types import Patch, PatchKind

__all__ = [
    # Trees
    "MISSING",
    "OrderedTree",
    "ValueShape",
    "is_tree",
    "shape_of",
    "supports_positions",
    "to_plain",
    "values_equal",
    # Canonicalization
    "canon",
    # Patches
    "Patch",
    "PatchKind",
    "PatchSet",
    # Diff
    "diff",
    "diff_into",
    "key_union",
    # Errors
    "HttpDiffError",
    "DuplicateKeyError",
    "InvalidPatchKind",
    "InvalidUrlError",
    "RecordFileError",
    "RecordReadError",
    "RecordDecodeError",
    "RecordShapeError",
]
