from .config import Settings
from .core import (
    # Trees
    MISSING,
    OrderedTree,
    ValueShape,
    # Errors
    DuplicateKeyError,
    HttpDiffError,
    InvalidPatchKind,
    InvalidUrlError,
    RecordDecodeError,
    RecordFileError,
    RecordReadError,
    RecordShapeError,
    # Patches
    Patch,
    PatchKind,
    PatchSet,
    # Canonicalization
    canon,
    # Diff
    diff,
    diff_into,
    is_tree,
    key_union,
    shape_of,
    supports_positions,
    to_plain,
    values_equal,
)
from .extract import (
    FACET_NAMES,
    FACETS,
    Facet,
    FacetDiff,
    compare_records,
    diff_with_extraction,
    extract_base_url,
    extract_body,
    extract_headers,
    extract_method,
    extract_query_params,
    extract_status,
    extract_version,
)
from .records import decode_json, describe_record, load_records
from .render import (
    comparison_to_dict,
    format_comparison,
    format_patch,
    format_patches,
    format_path,
    format_value,
)
from .version import HTTPDIFF_VERSION, REPORT_SCHEMA_VERSION

__all__ = [
    # Version
    "HTTPDIFF_VERSION",
    "REPORT_SCHEMA_VERSION",
    # Trees
    "MISSING",
    "OrderedTree",
    "ValueShape",
    "is_tree",
    "shape_of",
    "supports_positions",
    "to_plain",
    "values_equal",
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
    # Records and facets
    "load_records",
    "decode_json",
    "describe_record",
    "Facet",
    "FacetDiff",
    "FACETS",
    "FACET_NAMES",
    "compare_records",
    "diff_with_extraction",
    "extract_version",
    "extract_method",
    "extract_base_url",
    "extract_query_params",
    "extract_headers",
    "extract_body",
    "extract_status",
    # Presentation
    "format_path",
    "format_value",
    "format_patch",
    "format_patches",
    "format_comparison",
    "comparison_to_dict",
    # Configuration
    "Settings",
]
