"""Configuration loading for reggen (.reggen.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from re import Pattern
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from .models import CategoryConfig

CONFIG_FILENAME = ".reggen.yml"

DEFAULT_SCHEMA = "https://ui.shadcn.com/schema/registry.json"
DEFAULT_NAME = "my-registry"
DEFAULT_HOMEPAGE = "https://your-registry-url.com"

DEFAULT_CATEGORIES: Tuple[CategoryConfig, ...] = (
    CategoryConfig("components", "registry:component", "registry:component", "components"),
    CategoryConfig("hooks", "registry:hook", "registry:hook", "hooks"),
    CategoryConfig("lib", "registry:lib", "registry:lib", "lib"),
    CategoryConfig("types", "registry:lib", "registry:lib", "types"),
    CategoryConfig("styles", "registry:component", "registry:style", "styles"),
)

# Import prefixes that point at files inside the consuming project.
DEFAULT_LOCAL_ALIASES: Tuple[str, ...] = ("@/", "~/", "#")

# The first capture group of each pattern is the UI component name.
DEFAULT_UI_PATTERNS: Tuple[str, ...] = (
    r"^@/components/ui/(.+)$",
    r"^~/components/ui/(.+)$",
    r"^components/ui/(.+)$",
)

DEFAULT_EXCLUDE_PATTERNS: Tuple[str, ...] = (
    r"\.stories\.[tj]sx?$",
    r"\.test\.[tj]sx?$",
    r"\.spec\.[tj]sx?$",
)

DEFAULT_SOURCE_EXTENSIONS: Tuple[str, ...] = (".tsx", ".ts", ".js", ".jsx")
DEFAULT_STYLE_EXTENSIONS: Tuple[str, ...] = (".css",)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class RegistryConfig:
    """Immutable settings shared by every stage of a registry build."""

    root: Path
    registry_dir: Path
    output_path: Path
    package_json: Path
    schema: str = DEFAULT_SCHEMA
    name: str = DEFAULT_NAME
    homepage: str = DEFAULT_HOMEPAGE
    categories: Tuple[CategoryConfig, ...] = DEFAULT_CATEGORIES
    local_aliases: Tuple[str, ...] = DEFAULT_LOCAL_ALIASES
    ui_patterns: Tuple[Pattern[str], ...] = field(
        default_factory=lambda: _compile_patterns(DEFAULT_UI_PATTERNS, "ui_patterns", groups=1)
    )
    exclude_patterns: Tuple[Pattern[str], ...] = field(
        default_factory=lambda: _compile_patterns(DEFAULT_EXCLUDE_PATTERNS, "exclude_patterns")
    )
    source_extensions: Tuple[str, ...] = DEFAULT_SOURCE_EXTENSIONS
    style_extensions: Tuple[str, ...] = DEFAULT_STYLE_EXTENSIONS

    @classmethod
    def for_root(cls, root: Path) -> "RegistryConfig":
        root = root.expanduser().resolve()
        return cls(
            root=root,
            registry_dir=root / "registry",
            output_path=root / "registry.json",
            package_json=root / "package.json",
        )

    def category(self, name: str) -> Optional[CategoryConfig]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    @property
    def category_names(self) -> List[str]:
        return [category.name for category in self.categories]

    def with_overrides(
        self,
        *,
        registry_dir: Optional[str] = None,
        output: Optional[str] = None,
        package_json: Optional[str] = None,
    ) -> "RegistryConfig":
        """Return a copy with command-line path overrides applied."""
        changes: Dict[str, Path] = {}
        if registry_dir:
            changes["registry_dir"] = self.root / registry_dir
        if output:
            changes["output_path"] = self.root / output
        if package_json:
            changes["package_json"] = self.root / package_json
        return replace(self, **changes) if changes else self


def load_config(config_path: Path) -> RegistryConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    defaults = RegistryConfig.for_root(config_file.parent)
    root = defaults.root

    if not config_file.exists():
        return defaults

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    registry_dir = _as_str(data.get("registry_dir"))
    output = _as_str(data.get("output"))
    package_json = _as_str(data.get("package_json"))

    categories = defaults.categories
    if data.get("categories") is not None:
        categories = _parse_categories(data.get("categories"))

    local_aliases = defaults.local_aliases
    if data.get("local_aliases") is not None:
        local_aliases = tuple(_as_str_list(data.get("local_aliases")))

    ui_patterns = defaults.ui_patterns
    if data.get("ui_patterns") is not None:
        ui_patterns = _compile_patterns(
            _as_str_list(data.get("ui_patterns")), "ui_patterns", groups=1
        )

    exclude_patterns = defaults.exclude_patterns
    if data.get("exclude_patterns") is not None:
        exclude_patterns = _compile_patterns(
            _as_str_list(data.get("exclude_patterns")), "exclude_patterns"
        )

    source_extensions = defaults.source_extensions
    if data.get("source_extensions") is not None:
        source_extensions = _normalise_extensions(data.get("source_extensions"))

    style_extensions = defaults.style_extensions
    if data.get("style_extensions") is not None:
        style_extensions = _normalise_extensions(data.get("style_extensions"))

    return RegistryConfig(
        root=root,
        registry_dir=root / (registry_dir or "registry"),
        output_path=root / (output or "registry.json"),
        package_json=root / (package_json or "package.json"),
        schema=_as_str(data.get("schema")) or DEFAULT_SCHEMA,
        name=_as_str(data.get("name")) or DEFAULT_NAME,
        homepage=_as_str(data.get("homepage")) or DEFAULT_HOMEPAGE,
        categories=categories,
        local_aliases=local_aliases,
        ui_patterns=ui_patterns,
        exclude_patterns=exclude_patterns,
        source_extensions=source_extensions,
        style_extensions=style_extensions,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_categories(value: Any) -> Tuple[CategoryConfig, ...]:
    if not isinstance(value, Mapping) or not value:
        raise ConfigError("categories must be a non-empty mapping of name -> settings")

    categories: List[CategoryConfig] = []
    for name, raw in value.items():
        settings = _as_dict(raw)
        item_type = _as_str(settings.get("item_type"))
        if not item_type:
            raise ConfigError(f"Category '{name}' is missing item_type")
        categories.append(
            CategoryConfig(
                name=str(name),
                item_type=item_type,
                file_type=_as_str(settings.get("file_type")) or item_type,
                target_dir=_as_str(settings.get("target_dir")) or str(name),
            )
        )
    return tuple(categories)


def _compile_patterns(
    patterns: Sequence[str], key: str, *, groups: int = 0
) -> Tuple[Pattern[str], ...]:
    compiled: List[Pattern[str]] = []
    for pattern in patterns:
        try:
            regex = re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"Invalid regular expression in {key}: {pattern!r} ({exc})") from exc
        if regex.groups < groups:
            raise ConfigError(f"Pattern in {key} needs a capture group: {pattern!r}")
        compiled.append(regex)
    return tuple(compiled)


def _normalise_extensions(value: Any) -> Tuple[str, ...]:
    extensions = []
    for item in _as_str_list(value):
        item = item.strip().lower()
        if not item:
            continue
        extensions.append(item if item.startswith(".") else f".{item}")
    return tuple(extensions)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        result = [str(item) for item in value if isinstance(item, (str, int, float, bool))]
        return result
    return []
