"""Per-entity dependency analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional

from .logging import get_logger
from .models import CategoryConfig, FileDependencies, RegistryFile, RegistryItem
from .naming import to_kebab_case, to_title
from .resolver import DependencyResolver
from .scanner import EntityRef, RegistryScanner

_HOOK_PREFIX = "use-"
_HOOK_SUFFIX = "-hook"
_LIB_STEMS = {"utils", "helpers", "lib"}


@dataclass
class EntityResult:
    """Registry item built for one entity plus diagnostics that are never persisted."""

    item: RegistryItem
    unresolved: List[str] = field(default_factory=list)


class EntityAnalyzer:
    """Builds a registry item for one entity directory."""

    def __init__(self, scanner: RegistryScanner, resolver: DependencyResolver) -> None:
        self.scanner = scanner
        self.resolver = resolver
        self.logger = get_logger("analyzer")

    def analyze(self, entity: EntityRef) -> Optional[EntityResult]:
        """Return the item for ``entity`` or None when it has no eligible files."""
        rel_paths = self.scanner.list_eligible_files(entity)
        if not rel_paths:
            self.logger.warning("Skipping %s: no source files found", entity.key)
            return None

        deps = FileDependencies()
        files: List[RegistryFile] = []
        for rel_path in rel_paths:
            if not self.scanner.is_style(rel_path):
                content = self.scanner.read_source(entity.path / rel_path)
                deps.update(self.resolver.analyze_source(content))
            files.append(self._describe_file(entity, rel_path))

        name = to_kebab_case(entity.name)
        deps.registry.discard(name)

        unresolved = sorted(deps.unresolved)
        if unresolved:
            self.logger.warning(
                "%s has imports not found in package.json (skipped): %s",
                entity.key,
                ", ".join(unresolved),
            )

        item = RegistryItem(
            name=name,
            type=entity.category.item_type,
            title=to_title(entity.name),
            files=files,
            dependencies=sorted(deps.packages),
            registry_dependencies=sorted(deps.registry),
        )
        return EntityResult(item=item, unresolved=unresolved)

    def _describe_file(self, entity: EntityRef, rel_path: str) -> RegistryFile:
        category = entity.category
        registry_root = _relative_root(self.scanner)
        return RegistryFile(
            path=f"{registry_root}/{category.name}/{entity.name}/{rel_path}",
            type=self.infer_file_type(rel_path, category),
            target=f"{category.target_dir}/{entity.name}/{rel_path}",
        )

    def infer_file_type(self, rel_path: str, category: CategoryConfig) -> str:
        if self.scanner.is_style(rel_path):
            return "registry:style"
        stem = PurePosixPath(rel_path).stem.lower()
        if stem.startswith(_HOOK_PREFIX) or stem.endswith(_HOOK_SUFFIX):
            return "registry:hook"
        if stem in _LIB_STEMS:
            return "registry:lib"
        return category.file_type


def _relative_root(scanner: RegistryScanner) -> str:
    """Return the registry directory relative to the project root, in POSIX form."""
    try:
        return scanner.root.relative_to(scanner.config.root).as_posix()
    except ValueError:
        return scanner.root.name


__all__ = ["EntityAnalyzer", "EntityResult"]
