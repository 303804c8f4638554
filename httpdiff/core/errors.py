"""Exception hierarchy for httpdiff.

Core errors (``DuplicateKeyError``, ``InvalidPatchKind``) signal malformed
in-memory structures or programming mistakes and are never recovered from
inside the library. Record errors belong to the file/extraction layer and
are turned into user-facing messages by the CLI.
"""

from __future__ import annotations

from typing import Any, Optional


class HttpDiffError(Exception):
    """Base exception for httpdiff errors."""

    pass


class DuplicateKeyError(HttpDiffError, ValueError):
    """Raised when an OrderedTree is constructed with a repeated key."""

    def __init__(self, key: str):
        super().__init__(f"Duplicate key in tree: {key!r}")
        self.key = key


class InvalidPatchKind(HttpDiffError, ValueError):
    """Raised when a patch kind is not insert, delete, update or reorder."""

    def __init__(self, kind: Any):
        super().__init__(f"Unknown patch type: {kind!r}")
        self.kind = kind


class RecordFileError(HttpDiffError):
    """Base class for failures loading a records file."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class RecordReadError(RecordFileError):
    """The records file could not be read from disk."""

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"The following error occurred when trying to read {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message, path)
        self.reason = reason


class RecordDecodeError(RecordFileError):
    """The records file is not a JSON array of HTTP record objects."""

    def __init__(self, path: str, detail: Optional[str] = None):
        message = f"Could not decode the file {path}"
        if detail:
            message += f" ({detail})"
        super().__init__(message, path)
        self.detail = detail


class RecordShapeError(HttpDiffError, KeyError):
    """A required field is missing from an HTTP record."""

    def __init__(self, field_path: str):
        super().__init__(field_path)
        self.field_path = field_path

    def __str__(self) -> str:
        return f"Record is missing required field '{self.field_path}'"


class InvalidUrlError(RecordShapeError):
    """The request URL of an HTTP record cannot be parsed."""

    def __init__(self, url: str, reason: str):
        super().__init__("request.url")
        self.url = url
        self.reason = reason

    def __str__(self) -> str:
        return f"Record field '{self.field_path}' is not a valid URL: {self.url!r} ({self.reason})"
