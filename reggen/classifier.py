"""Import path classification helpers."""

from __future__ import annotations

from re import Pattern
from typing import FrozenSet, Optional, Sequence

NODE_BUILTINS: FrozenSet[str] = frozenset(
    {
        "assert",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "worker_threads",
        "zlib",
    }
)


class PathClassifier:
    """Answers questions about a single import specifier."""

    def __init__(
        self,
        local_aliases: Sequence[str],
        ui_patterns: Sequence[Pattern[str]],
        builtins: FrozenSet[str] = NODE_BUILTINS,
    ) -> None:
        self.local_aliases = tuple(local_aliases)
        self.ui_patterns = tuple(ui_patterns)
        self.builtins = builtins

    def is_local(self, import_path: str) -> bool:
        """Return True for relative paths and configured project aliases."""
        if import_path.startswith("."):
            return True
        return any(import_path.startswith(alias) for alias in self.local_aliases)

    def is_builtin(self, package_name: str) -> bool:
        # `node:fs` style specifiers name the same built-in modules.
        if package_name.startswith("node:"):
            package_name = package_name[len("node:"):]
        return package_name in self.builtins

    def extract_ui_component(self, import_path: str) -> Optional[str]:
        """Return the UI component name captured by the first matching pattern."""
        for pattern in self.ui_patterns:
            match = pattern.search(import_path)
            if match:
                return match.group(1)
        return None

    def match_alias(self, import_path: str) -> Optional[str]:
        """Return the remainder after the first alias prefix ``import_path`` starts with."""
        for alias in self.local_aliases:
            if import_path.startswith(alias):
                return import_path[len(alias):]
        return None


def to_package_name(import_path: str) -> str:
    """Return the installable package name for a bare specifier.

    ``@scope/pkg/sub`` becomes ``@scope/pkg``; ``pkg/sub`` becomes ``pkg``.
    Only meaningful for paths that are not local or aliased.
    """
    parts = import_path.split("/")
    if import_path.startswith("@"):
        return "/".join(parts[:2])
    return parts[0]


__all__ = ["NODE_BUILTINS", "PathClassifier", "to_package_name"]
