"""Pipeline orchestration for registry builds."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from .analyzer import EntityAnalyzer
from .classifier import PathClassifier
from .config import RegistryConfig, load_config
from .entity_index import build_entity_index
from .logging import get_logger
from .manifest import ManifestStore
from .models import RegistryItem
from .naming import to_kebab_case
from .packages import build_package_map, load_package_json
from .resolver import DependencyResolver
from .scanner import RegistryScanner


@dataclass
class RunSummary:
    """Result of one registry build.

    Entity lists hold ``category/entity`` keys. ``no_sources`` are entities
    skipped for having no eligible files; ``collisions`` maps an entity that
    was left out to the entity that already claimed its item name.
    """

    output_path: Path
    added: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    no_sources: List[str] = field(default_factory=list)
    collisions: Dict[str, str] = field(default_factory=dict)
    unnamed: List[str] = field(default_factory=list)
    unresolved: Dict[str, List[str]] = field(default_factory=dict)
    total_items: int = 0
    written: bool = False
    dry_run: bool = False
    diff: str = ""


class Orchestrator:
    """Coordinates scanning, analysis and manifest merging for one run."""

    def __init__(self, config: RegistryConfig | None = None) -> None:
        self._config = config
        self.logger = get_logger("orchestrator")

    def run_build(
        self,
        path: str = ".",
        targets: Optional[Iterable[str]] = None,
        *,
        no_override: bool = False,
        dry_run: bool = False,
        registry_dir: Optional[str] = None,
        output: Optional[str] = None,
        package_json: Optional[str] = None,
    ) -> RunSummary:
        """Scan the registry tree and write the merged manifest."""
        config = self._config or load_config(Path(path))
        config = config.with_overrides(
            registry_dir=registry_dir, output=output, package_json=package_json
        )

        scanner = RegistryScanner(config)
        scanner.validate_root()
        self.logger.info("Starting registry build for %s", config.registry_dir)

        packages = build_package_map(load_package_json(config.package_json))
        self.logger.info("Loaded %d packages from %s", len(packages), config.package_json.name)

        entity_index = build_entity_index(scanner)
        self.logger.info("Found %d registry entities for dependency detection", len(entity_index))

        store = ManifestStore(config.output_path)
        if store.existing is not None:
            self.logger.info(
                "Found existing %s with %d item(s)", config.output_path.name, len(store.items)
            )
        if no_override:
            self.logger.info("--no-override enabled; existing items will be kept as-is")

        selected = self.resolve_targets(scanner, targets or [])
        if selected:
            self.logger.info("Targeting: %s", ", ".join(sorted(selected)))

        summary = RunSummary(output_path=config.output_path, dry_run=dry_run)

        categories = scanner.active_categories()
        if not categories:
            self.logger.warning(
                "No recognised category directories found. Expected: %s",
                ", ".join(config.category_names),
            )
            return summary

        classifier = PathClassifier(config.local_aliases, config.ui_patterns)
        resolver = DependencyResolver(classifier, packages, entity_index)
        analyzer = EntityAnalyzer(scanner, resolver)

        fresh_items: Dict[str, RegistryItem] = {}
        claimed: Dict[str, str] = {}
        for category in categories:
            entities = [
                entity
                for entity in scanner.iter_entities(category)
                if not selected or entity.key in selected
            ]
            if not entities:
                continue
            self.logger.info("%s/", category.name)

            for entity in entities:
                name = to_kebab_case(entity.name)
                if not name:
                    self.logger.warning(
                        "Skipping %s: directory name has no letters or digits", entity.key
                    )
                    summary.unnamed.append(entity.key)
                    continue
                if name in claimed:
                    self.logger.warning(
                        "Skipping %s: item name %r is already used by %s",
                        entity.key,
                        name,
                        claimed[name],
                    )
                    summary.collisions[entity.key] = claimed[name]
                    continue
                already_exists = store.has(name)
                if no_override and already_exists:
                    claimed[name] = entity.key
                    self.logger.info("  - %s (skipped, already exists)", name)
                    summary.skipped.append(entity.key)
                    continue

                result = analyzer.analyze(entity)
                if result is None:
                    summary.no_sources.append(entity.key)
                    continue

                claimed[name] = entity.key
                fresh_items[name] = result.item
                if result.unresolved:
                    summary.unresolved[entity.key] = result.unresolved

                status = "updated" if already_exists else "added"
                deps_log = _describe_dependencies(result.item)
                self.logger.info("  %s (%s)%s", name, status, f" - {deps_log}" if deps_log else "")
                if already_exists:
                    summary.updated.append(entity.key)
                else:
                    summary.added.append(entity.key)

        registry = store.merge(
            fresh_items, schema=config.schema, name=config.name, homepage=config.homepage
        )
        summary.total_items = len(registry.items)

        if dry_run:
            summary.diff = store.render_diff(registry)
            self.logger.info("Dry-run completed; %s not written", config.output_path.name)
        else:
            store.persist(registry)
            summary.written = True
            self.logger.info("%s updated", config.output_path.name)

        self._log_summary(summary)
        return summary

    def resolve_targets(self, scanner: RegistryScanner, targets: Iterable[str]) -> Set[str]:
        """Expand target selectors into ``category/entity`` keys.

        Selectors containing a slash are taken verbatim; bare names are looked
        up in every configured category.
        """
        selected: Set[str] = set()
        for target in targets:
            if "/" in target:
                selected.add(target)
                continue
            found = False
            for category in scanner.config.categories:
                if scanner.has_entity(category, target):
                    selected.add(f"{category.name}/{target}")
                    found = True
            if not found:
                self.logger.warning("Target %r not found in any category; skipping", target)
        return selected

    def _log_summary(self, summary: RunSummary) -> None:
        if summary.added:
            self.logger.info("%d added", len(summary.added))
        if summary.updated:
            self.logger.info("%d updated", len(summary.updated))
        if summary.skipped:
            self.logger.info("%d skipped (--no-override)", len(summary.skipped))
        if summary.no_sources:
            self.logger.info("%d skipped (no source files)", len(summary.no_sources))
        if summary.collisions:
            self.logger.info("%d skipped (duplicate item name)", len(summary.collisions))
        if summary.unnamed:
            self.logger.info("%d skipped (empty item name)", len(summary.unnamed))
        self.logger.info("%d total item(s) in registry", summary.total_items)


def _describe_dependencies(item: RegistryItem) -> str:
    parts = []
    if item.dependencies:
        parts.append(f"npm: {', '.join(item.dependencies)}")
    if item.registry_dependencies:
        parts.append(f"registry: {', '.join(item.registry_dependencies)}")
    return " | ".join(parts)


__all__ = ["RunSummary", "Orchestrator"]
