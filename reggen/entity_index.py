"""Lookup table of every entity directory in the registry."""

from __future__ import annotations

from typing import Dict

from .naming import to_kebab_case
from .scanner import RegistryScanner


def build_entity_index(scanner: RegistryScanner) -> Dict[str, str]:
    """Map ``category/entityName`` to the entity's canonical item name.

    Only the configured categories are listed and only one level deep.
    """
    index: Dict[str, str] = {}
    for category in scanner.config.categories:
        for name in scanner.list_entity_names(category):
            index[f"{category.name}/{name}"] = to_kebab_case(name)
    return index


__all__ = ["build_entity_index"]
