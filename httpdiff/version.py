"""
httpdiff version constants.

This module defines version constants for the httpdiff library and the
JSON report format it emits with ``--format json``.
"""

# Library version (matches pyproject.toml)
HTTPDIFF_VERSION = "0.1.0"

# Schema version for JSON comparison reports
# Increment when the report format changes in a breaking way
REPORT_SCHEMA_VERSION = "comparison_v0"
