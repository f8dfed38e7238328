"""package.json loading and the installed-package lookup table."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Mapping

from .logging import get_logger

_DEPENDENCY_SECTIONS = ("dependencies", "devDependencies", "peerDependencies")

logger = get_logger("packages")


class PackageJsonError(RuntimeError):
    """Raised when package.json exists but cannot be parsed."""


def load_package_json(path: Path) -> Dict[str, object]:
    """Return the parsed package.json contents, or an empty dict when missing."""
    if not path.exists():
        logger.warning("No package.json found at %s; dependency versions will be omitted", path)
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PackageJsonError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise PackageJsonError(f"{path} must contain a JSON object")
    return data


def build_package_map(package_json: Mapping[str, object]) -> Dict[str, str]:
    """Map each declared package name to its ``name@version`` string.

    Later sections win, so a peer dependency overrides the same name
    declared under ``dependencies``.
    """
    packages: Dict[str, str] = {}
    for section in _DEPENDENCY_SECTIONS:
        deps = package_json.get(section)
        if not isinstance(deps, dict):
            continue
        for name, version in deps.items():
            if isinstance(name, str) and isinstance(version, str):
                packages[name] = f"{name}@{version}"
    return packages


__all__ = ["PackageJsonError", "build_package_map", "load_package_json"]
