"""Loading captured HTTP request/response records.

A records file is a JSON array of objects shaped like::

    {"version": "HTTP/1.1",
     "request": {"method": "GET", "url": "https://...",
                 "headers": [{"name": "...", "value": "..."}], "body": null},
     "response": {"status_code": 200, "headers": [...], "body": "..."}}

Objects are decoded into OrderedTree so key order survives decoding.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional
from urllib.parse import SplitResult, urlsplit

from .core.errors import (
    DuplicateKeyError,
    InvalidUrlError,
    RecordDecodeError,
    RecordReadError,
    RecordShapeError,
)
from .core.tree import OrderedTree

logger = logging.getLogger(__name__)


def decode_json(text: str) -> Any:
    """Decode JSON text, turning every object into an ordered tree.

    Raises:
        json.JSONDecodeError: text is not valid JSON
        DuplicateKeyError: an object repeats a key
    """
    return json.loads(text, object_pairs_hook=OrderedTree.from_pairs)


def load_records(path: str) -> List[OrderedTree]:
    """Read and decode a records file.

    Raises:
        RecordReadError: the file cannot be read
        RecordDecodeError: the contents are not a JSON array of objects
    """
    try:
        with open(path, encoding="utf-8") as handle:
            contents = handle.read()
    except OSError as exc:
        raise RecordReadError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise RecordDecodeError(path, "file is not valid UTF-8") from exc

    try:
        decoded = decode_json(contents)
    except json.JSONDecodeError as exc:
        raise RecordDecodeError(path, f"line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
    except DuplicateKeyError as exc:
        raise RecordDecodeError(path, str(exc)) from exc

    if not isinstance(decoded, list):
        raise RecordDecodeError(path, "expected a JSON array of records")
    for idx, record in enumerate(decoded):
        if not isinstance(record, OrderedTree):
            raise RecordDecodeError(path, f"record {idx} is not a JSON object")

    logger.debug("Loaded %d records from %s", len(decoded), path)
    return decoded


def describe_record(record: OrderedTree) -> str:
    """One-line label for a record: ``METHOD scheme://host/path``."""
    request = record.get("request")
    if not isinstance(request, OrderedTree) or not isinstance(request.get("url"), str):
        raise RecordShapeError("request.url")
    method = request.get("method") or ""
    parts = split_url(request["url"])
    return f"{method} {parts.scheme}://{url_host(parts) or ''}{parts.path}"


def split_url(url: str) -> SplitResult:
    """urlsplit, raising InvalidUrlError instead of ValueError."""
    try:
        return urlsplit(url)
    except ValueError as exc:
        raise InvalidUrlError(url, str(exc)) from exc


def url_host(parts: SplitResult) -> Optional[str]:
    """Host of a split URL as written: no userinfo, no port, case kept."""
    host = parts.netloc.rpartition("@")[2]
    end = host.find("]")
    if host.startswith("[") and end != -1:
        return host[1:end] or None
    return host.partition(":")[0] or None
