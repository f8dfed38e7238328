"""Registry directory scanning utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

from .config import RegistryConfig
from .models import CategoryConfig

_EXCLUDED_DIRS = {
    ".git",
    "node_modules",
    "__snapshots__",
    ".turbo",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


@dataclass(frozen=True)
class EntityRef:
    """Location of one entity directory inside the registry tree."""

    category: CategoryConfig
    name: str
    path: Path

    @property
    def key(self) -> str:
        return f"{self.category.name}/{self.name}"


class RegistryScanner:
    """Lists categories, entities and entity files under the registry root."""

    def __init__(self, config: RegistryConfig) -> None:
        self.config = config
        self.root = config.registry_dir

    def validate_root(self) -> Path:
        if not self.root.exists():
            raise FileNotFoundError(f"Registry directory not found: {self.root}")
        if not self.root.is_dir():
            raise NotADirectoryError(f"Registry path is not a directory: {self.root}")
        return self.root

    def active_categories(self) -> List[CategoryConfig]:
        """Return configured categories whose directory exists, in configuration order."""
        return [
            category
            for category in self.config.categories
            if (self.root / category.name).is_dir()
        ]

    def list_entity_names(self, category: CategoryConfig) -> List[str]:
        category_dir = self.root / category.name
        if not category_dir.is_dir():
            return []
        return sorted(entry.name for entry in category_dir.iterdir() if entry.is_dir())

    def iter_entities(self, category: CategoryConfig) -> Iterator[EntityRef]:
        for name in self.list_entity_names(category):
            yield EntityRef(category=category, name=name, path=self.root / category.name / name)

    def has_entity(self, category: CategoryConfig, name: str) -> bool:
        return (self.root / category.name / name).is_dir()

    def list_files(self, entity: EntityRef) -> List[str]:
        """Return every regular file below the entity directory as sorted POSIX paths."""
        files: List[str] = []
        for dirpath, dirnames, filenames in os.walk(entity.path):
            current_dir = Path(dirpath)
            dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
            for filename in filenames:
                if filename in _EXCLUDED_FILES:
                    continue
                files.append((current_dir / filename).relative_to(entity.path).as_posix())
        return sorted(files)

    def list_eligible_files(self, entity: EntityRef) -> List[str]:
        return [rel_path for rel_path in self.list_files(entity) if self.is_eligible(rel_path)]

    def is_eligible(self, rel_path: str) -> bool:
        """Return True for source and style files not matched by an exclusion pattern."""
        if not (self.is_source(rel_path) or self.is_style(rel_path)):
            return False
        return not any(pattern.search(rel_path) for pattern in self.config.exclude_patterns)

    def is_source(self, rel_path: str) -> bool:
        return _suffix(rel_path) in self.config.source_extensions

    def is_style(self, rel_path: str) -> bool:
        return _suffix(rel_path) in self.config.style_extensions

    @staticmethod
    def read_source(path: Path) -> str:
        return path.read_text(encoding="utf-8", errors="replace")


def _suffix(rel_path: str) -> str:
    return Path(rel_path).suffix.lower()


__all__ = ["EntityRef", "RegistryScanner"]
