"""Core data models shared across reggen components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set


@dataclass(frozen=True)
class CategoryConfig:
    """Static metadata for one registry category directory."""

    name: str
    item_type: str
    file_type: str
    target_dir: str


@dataclass
class RegistryFile:
    """A single file entry within a registry item."""

    path: str
    type: str
    target: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "type": self.type, "target": self.target}


@dataclass
class RegistryItem:
    """Manifest record describing one registry entity."""

    name: str
    type: str
    title: str
    files: List[RegistryFile] = field(default_factory=list)
    description: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)
    registry_dependencies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "title": self.title,
        }
        if self.description:
            payload["description"] = self.description
        if self.dependencies:
            payload["dependencies"] = sorted(set(self.dependencies))
        if self.registry_dependencies:
            payload["registryDependencies"] = sorted(set(self.registry_dependencies))
        payload["files"] = [file.to_dict() for file in self.files]
        return payload


@dataclass
class Registry:
    """Top-level manifest document.

    ``items`` holds raw mappings so entries untouched by a run are written
    back exactly as they were read.
    """

    schema: str
    name: str
    homepage: str
    items: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "$schema": self.schema,
            "name": self.name,
            "homepage": self.homepage,
            "items": list(self.items.values()),
        }


@dataclass
class FileDependencies:
    """Dependencies discovered in one file or aggregated across an entity."""

    packages: Set[str] = field(default_factory=set)
    registry: Set[str] = field(default_factory=set)
    unresolved: Set[str] = field(default_factory=set)

    def update(self, other: "FileDependencies") -> None:
        self.packages.update(other.packages)
        self.registry.update(other.registry)
        self.unresolved.update(other.unresolved)
