from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .extract import FACET_NAMES


@dataclass(frozen=True)
class Settings:
    """
    Configuration for a httpdiff session.

    Attributes:
        color: Emit ANSI colour codes in text output.
        output_format: "text" or "json".
        facets: Facet names to compare, in display order.
        first: Index of the record to take from the first file (None = prompt).
        second: Index of the record to take from the second file (None = prompt).
    """

    color: bool = True
    output_format: str = "text"
    facets: Tuple[str, ...] = FACET_NAMES
    first: Optional[int] = None
    second: Optional[int] = None

    @property
    def interactive(self) -> bool:
        return self.first is None or self.second is None

    @classmethod
    def default(cls) -> "Settings":
        """Create default settings: interactive, coloured text, all facets."""
        return cls()

    @classmethod
    def from_args(
        cls,
        args: argparse.Namespace,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Build settings from parsed CLI arguments and the environment.

        A non-empty ``NO_COLOR`` environment variable disables colour.
        """
        env = os.environ if environ is None else environ
        requested = set(args.facet or FACET_NAMES)
        return cls(
            color=not args.no_color and not env.get("NO_COLOR"),
            output_format=args.format,
            facets=tuple(name for name in FACET_NAMES if name in requested),
            first=args.first,
            second=args.second,
        )
