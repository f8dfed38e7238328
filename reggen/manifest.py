"""Loading, merging and persisting the registry manifest (registry.json)."""

from __future__ import annotations

import difflib
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .logging import get_logger
from .models import Registry, RegistryItem

logger = get_logger("manifest")


class ManifestStore:
    """Holds the previously persisted manifest and writes the merged result."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._original_text = ""
        self.existing: Optional[Registry] = None
        self._load(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def items(self) -> Dict[str, Dict[str, Any]]:
        return self.existing.items if self.existing is not None else {}

    def has(self, name: str) -> bool:
        return name in self.items

    def merge(
        self,
        fresh_items: Mapping[str, RegistryItem],
        *,
        schema: str,
        name: str,
        homepage: str,
    ) -> Registry:
        """Overlay freshly built items onto the persisted ones.

        Persisted items keep their position and form unless replaced; new
        items are appended. Top-level metadata comes from the persisted
        manifest when present, otherwise from the supplied defaults.
        """
        items: Dict[str, Dict[str, Any]] = dict(self.items)
        for item_name, item in fresh_items.items():
            items[item_name] = item.to_dict()

        existing = self.existing or Registry(schema="", name="", homepage="")
        return Registry(
            schema=existing.schema or schema,
            name=existing.name or name,
            homepage=existing.homepage or homepage,
            items=items,
        )

    @staticmethod
    def render(registry: Registry) -> str:
        return json.dumps(registry.to_dict(), indent=2, ensure_ascii=False) + "\n"

    def render_diff(self, registry: Registry) -> str:
        diff = difflib.unified_diff(
            self._original_text.splitlines(keepends=True),
            self.render(registry).splitlines(keepends=True),
            fromfile=f"{self._path.name} (original)",
            tofile=f"{self._path.name} (updated)",
        )
        return "".join(diff)

    def persist(self, registry: Registry) -> None:
        text = self.render(registry)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(text, encoding="utf-8")
        self._original_text = text

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return
        self._original_text = raw.decode("utf-8", errors="replace")
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Existing %s could not be parsed; it will be overwritten", path.name)
            return
        if not isinstance(data, dict):
            logger.warning("Existing %s is not a JSON object; it will be overwritten", path.name)
            return
        raw_items = data.get("items", [])
        if not isinstance(raw_items, list):
            logger.warning("Existing %s has no items list; it will be overwritten", path.name)
            return

        items: Dict[str, Dict[str, Any]] = {}
        for raw in raw_items:
            if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
                logger.warning("Dropping malformed item from %s: %r", path.name, raw)
                continue
            items[raw["name"]] = raw

        self.existing = Registry(
            schema=_as_str(data.get("$schema")),
            name=_as_str(data.get("name")),
            homepage=_as_str(data.get("homepage")),
            items=items,
        )


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


__all__ = ["ManifestStore"]
