"""Classification of import specifiers into registry and package dependencies."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Mapping, Optional

from .classifier import PathClassifier, to_package_name
from .imports import extract_import_paths
from .logging import get_logger
from .models import FileDependencies

logger = get_logger("resolver")


class DependencyKind(enum.Enum):
    PACKAGE = "package"
    REGISTRY = "registry"
    UNRESOLVED = "unresolved"
    IGNORED = "ignored"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one import specifier."""

    kind: DependencyKind
    value: Optional[str] = None


_IGNORED = Resolution(DependencyKind.IGNORED)


class DependencyResolver:
    """Resolves import specifiers against the package table and entity index."""

    def __init__(
        self,
        classifier: PathClassifier,
        packages: Mapping[str, str],
        entity_index: Mapping[str, str],
    ) -> None:
        self.classifier = classifier
        self.packages = packages
        self.entity_index = entity_index

    def resolve(self, import_path: str) -> Resolution:
        """Classify ``import_path``; the first matching rule wins.

        Order: UI component pattern, aliased registry entity, local path,
        built-in module, known package, unresolved.
        """
        component = self.classifier.extract_ui_component(import_path)
        if component:
            return Resolution(DependencyKind.REGISTRY, component)

        if not import_path.startswith("."):
            entity = self.resolve_alias(import_path)
            if entity:
                return Resolution(DependencyKind.REGISTRY, entity)

        # Aliased paths that miss the entity index are dropped here as well.
        if self.classifier.is_local(import_path):
            return _IGNORED

        package_name = to_package_name(import_path)
        if self.classifier.is_builtin(package_name):
            return _IGNORED
        versioned = self.packages.get(package_name)
        if versioned is not None:
            return Resolution(DependencyKind.PACKAGE, versioned)
        return Resolution(DependencyKind.UNRESOLVED, package_name)

    def resolve_alias(self, import_path: str) -> Optional[str]:
        """Return the entity name an aliased import points at, if any.

        Only the first alias prefix that matches is consulted.
        """
        rest = self.classifier.match_alias(import_path)
        if rest is None:
            return None
        if rest in self.entity_index:
            return self.entity_index[rest]
        parts = rest.split("/")
        if len(parts) >= 2:
            return self.entity_index.get(f"{parts[0]}/{parts[1]}")
        return None

    def analyze_source(self, source: str) -> FileDependencies:
        """Resolve every import found in ``source``."""
        deps = FileDependencies()
        for import_path in sorted(extract_import_paths(source)):
            resolution = self.resolve(import_path)
            logger.debug("%s -> %s %s", import_path, resolution.kind.value, resolution.value or "")
            if resolution.kind is DependencyKind.PACKAGE:
                deps.packages.add(resolution.value)  # type: ignore[arg-type]
            elif resolution.kind is DependencyKind.REGISTRY:
                deps.registry.add(resolution.value)  # type: ignore[arg-type]
            elif resolution.kind is DependencyKind.UNRESOLVED:
                deps.unresolved.add(resolution.value)  # type: ignore[arg-type]
        return deps


__all__ = ["DependencyKind", "DependencyResolver", "Resolution"]
