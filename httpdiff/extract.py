"""Facet extraction and per-facet diffing of HTTP records.

Each facet picks one part of a record and reshapes it into something the
diff engine can compare:

- version, method, status: scalars
- base URL: unordered {scheme, host, path} (URL parsing has no key order)
- query parameters: unordered map, empty when there is no query
- headers: ordered tree name -> value, in header array order
- body: ordered tree when it is a JSON object, otherwise the decoded JSON
  value or the raw string; a missing or null body becomes "null"
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
from urllib.parse import SplitResult, parse_qsl

from .core.engine import diff
from .core.errors import RecordShapeError
from .core.patches import PatchSet
from .core.tree import OrderedTree
from .records import decode_json, split_url, url_host

logger = logging.getLogger(__name__)

Extractor = Callable[[Any], Any]


def _dig(record: Any, *keys: str) -> Any:
    """Nested lookup; None if any level is missing or not an object."""
    value = record
    for key in keys:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _request_url(record: Any) -> SplitResult:
    url = _dig(record, "request", "url")
    if not isinstance(url, str):
        raise RecordShapeError("request.url")
    return split_url(url)


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


def extract_version(record: Any) -> Any:
    return _dig(record, "version")


def extract_method(record: Any) -> Any:
    return _dig(record, "request", "method")


def extract_status(record: Any) -> Any:
    return _dig(record, "response", "status_code")


def extract_base_url(record: Any) -> OrderedTree:
    """Scheme, host and path of the request URL, with no key order."""
    parts = _request_url(record)
    return OrderedTree.unordered(
        {
            "scheme": parts.scheme or None,
            "host": url_host(parts),
            "path": parts.path or None,
        }
    )


def extract_query_params(record: Any) -> OrderedTree:
    """Decoded query parameters; a repeated name keeps its last value."""
    query = _request_url(record).query
    params = dict(parse_qsl(query, keep_blank_values=True)) if query else {}
    return OrderedTree.unordered(params)


def extract_headers(record: Any, side: str) -> OrderedTree:
    """
    Header array of ``side`` ("request" or "response") as an ordered tree.

    A repeated header name keeps its first position and its first value.
    """
    headers = _dig(record, side, "headers") or []
    flattened: Dict[str, Any] = {}
    for header in headers:
        flattened.setdefault(_dig(header, "name"), _dig(header, "value"))
    return OrderedTree(flattened.items())


def extract_body(record: Any, side: str) -> Any:
    """Body of ``side`` decoded for diffing; see module docstring."""
    body = _dig(record, side, "body")
    if body is None:
        return "null"
    if not isinstance(body, str):
        return body
    try:
        decoded = decode_json(body)
    except ValueError:
        return body
    if decoded is None:
        return "null"
    return decoded


# ---------------------------------------------------------------------------
# Facets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Facet:
    """A named part of an HTTP record that is diffed on its own."""

    name: str
    title: str
    extract: Extractor


@dataclass(frozen=True)
class FacetDiff:
    """Patches for one facet of a record pair."""

    name: str
    title: str
    patches: PatchSet

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "patches": self.patches.to_dict(),
        }


FACETS: Tuple[Facet, ...] = (
    Facet("version", "HTTP VERSION", extract_version),
    Facet("method", "METHOD", extract_method),
    Facet("base_url", "BASE URL", extract_base_url),
    Facet("query_params", "QUERY PARAMETERS", extract_query_params),
    Facet("request_headers", "REQUEST HEADERS", lambda r: extract_headers(r, "request")),
    Facet("request_body", "REQUEST BODY", lambda r: extract_body(r, "request")),
    Facet("response_status", "RESPONSE STATUS", extract_status),
    Facet("response_headers", "RESPONSE HEADERS", lambda r: extract_headers(r, "response")),
    Facet("response_body", "RESPONSE BODY", lambda r: extract_body(r, "response")),
)

FACET_NAMES: Tuple[str, ...] = tuple(facet.name for facet in FACETS)


def diff_with_extraction(a: Any, b: Any, extract: Extractor) -> PatchSet:
    """Extract the same part of two records and diff the results."""
    return diff(extract(a), extract(b))


def compare_records(
    a: Any, b: Any, facets: Optional[Iterable[str]] = None
) -> List[FacetDiff]:
    """
    Diff two records facet by facet, in display order.

    Args:
        a: First record
        b: Second record
        facets: Facet names to include (default: all)

    Returns:
        One FacetDiff per selected facet.

    Raises:
        ValueError: an unknown facet name was requested
        RecordShapeError: a record lacks a field a facet requires
    """
    selected = set(FACET_NAMES if facets is None else facets)
    unknown = selected.difference(FACET_NAMES)
    if unknown:
        raise ValueError(f"Unknown facet(s): {', '.join(sorted(unknown))}")

    results: List[FacetDiff] = []
    for facet in FACETS:
        if facet.name not in selected:
            continue
        patches = diff_with_extraction(a, b, facet.extract)
        logger.debug("Facet %s: %r", facet.name, patches)
        results.append(FacetDiff(name=facet.name, title=facet.title, patches=patches))
    return results
