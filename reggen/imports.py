"""Literal import path extraction for JavaScript and TypeScript sources.

Extraction is lexical: only quoted string literals are recognised, so
computed or templated specifiers (``import(`./${name}`)``) are invisible.
"""

from __future__ import annotations

import re
from typing import Set

# `import x from "a"`, `export { y } from "a"`, `import "a"` at the start of a line.
_STATIC_RE = re.compile(
    r"""(?:^|\n)\s*(?:import|export)\s+(?:.*?\s+from\s+)?['"]([^'"]+)['"]"""
)
# `require("a")` and `import("a")`.
_CALL_RE = re.compile(r"""(?:require|import)\s*\(\s*['"]([^'"]+)['"]\s*\)""")


def extract_import_paths(source: str) -> Set[str]:
    """Return the distinct literal specifiers imported by ``source``."""
    results: Set[str] = set()
    for match in _STATIC_RE.finditer(source):
        results.add(match.group(1))
    for match in _CALL_RE.finditer(source):
        results.add(match.group(1))
    return results


__all__ = ["extract_import_paths"]
