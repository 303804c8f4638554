"""Terminal rendering of patch sets.

Inserts are green, deletes red, updates show the old value in red and the
new value in green, reorders show the old and new positions.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Sequence

from .core.patches import PatchSet
from .core.tree import is_tree, to_plain
from .core.types import Patch, PatchKind
from .extract import FacetDiff
from .version import HTTPDIFF_VERSION, REPORT_SCHEMA_VERSION

RED = "\033[31m"
GREEN = "\033[32m"
RESET = "\033[0m"

END_BANNER = "------  END ------"


def _paint(text: str, color: str, enabled: bool) -> str:
    if not enabled:
        return text
    return f"{color}{text}{RESET}"


def format_path(path: Sequence[str]) -> str:
    """["info", "age"] -> "info.age:"; the root path renders as ""."""
    if not path:
        return ""
    return ".".join(str(key) for key in path) + ":"


def format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if is_tree(value):
        return json.dumps(to_plain(value), indent=2, ensure_ascii=False, default=str)
    return json.dumps(to_plain(value), ensure_ascii=False, default=str)


def format_patch(patch: Patch, color: bool = True) -> List[str]:
    """Lines for one patch, including the trailing blank line."""
    path = format_path(patch.path)

    if patch.kind is PatchKind.INSERT:
        lines = [_paint(f"+ {path} {format_value(patch.new_value)}", GREEN, color)]
    elif patch.kind is PatchKind.DELETE:
        lines = [_paint(f"- {path} {format_value(patch.old_value)}", RED, color)]
    elif patch.kind is PatchKind.UPDATE:
        lines = [
            path,
            _paint(f"- {format_value(patch.old_value)}", RED, color),
            _paint(f"+ {format_value(patch.new_value)}", GREEN, color),
        ]
    else:
        lines = [
            _paint(f"[{patch.old_value}]", RED, color)
            + " -> "
            + _paint(f"[{patch.new_value}] ", GREEN, color)
            + f"{path} ..."
        ]

    lines.append("")
    return lines


def format_patches(patches: PatchSet, title: str, color: bool = True) -> str:
    """A titled section for one patch set; empty string when nothing changed."""
    if patches.is_empty():
        return ""

    lines = [f"----- {title} -----"]
    for name, collection in patches.collections():
        if not collection:
            continue
        lines.append(name.upper())
        for patch in collection:
            lines.extend(format_patch(patch, color=color))
    return "\n".join(lines)


def format_comparison(results: Iterable[FacetDiff], color: bool = True) -> str:
    sections = [format_patches(r.patches, r.title, color=color) for r in results]
    sections = [section for section in sections if section]
    sections.append(END_BANNER)
    return "\n".join(sections)


def comparison_to_dict(results: Iterable[FacetDiff]) -> Dict[str, Any]:
    return {
        "httpdiff_version": HTTPDIFF_VERSION,
        "schema_version": REPORT_SCHEMA_VERSION,
        "facets": [r.to_dict() for r in results],
    }
