"""Tests for reggen.scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from reggen.scanner import RegistryScanner


def test_validate_root_rejects_missing_directory(registry_builder) -> None:
    scanner = RegistryScanner(registry_builder.config())

    with pytest.raises(FileNotFoundError) as excinfo:
        scanner.validate_root()

    assert str(registry_builder.path() / "registry") in str(excinfo.value)


def test_validate_root_rejects_file(registry_builder) -> None:
    registry_builder.write({"registry": "not a directory\n"})

    with pytest.raises(NotADirectoryError):
        RegistryScanner(registry_builder.config()).validate_root()


def test_active_categories_follow_configuration_order(registry_builder) -> None:
    for name in ("styles", "components", "unknown"):
        (registry_builder.path() / "registry" / name).mkdir(parents=True)

    scanner = RegistryScanner(registry_builder.config())

    assert [category.name for category in scanner.active_categories()] == ["components", "styles"]


def test_list_files_walks_entity_recursively(registry_builder) -> None:
    registry_builder.write(
        {
            "registry/components/card/card.tsx": "export {}\n",
            "registry/components/card/parts/header.tsx": "export {}\n",
            "registry/components/card/.DS_Store": "",
            "registry/components/card/node_modules/x/index.js": "module.exports = 1\n",
        }
    )
    scanner = RegistryScanner(registry_builder.config())
    entity = next(scanner.iter_entities(scanner.config.category("components")))

    assert entity.key == "components/card"
    assert scanner.list_files(entity) == ["card.tsx", "parts/header.tsx"]


def test_eligible_files_exclude_stories_tests_and_unknown_types(registry_builder) -> None:
    registry_builder.write(
        {
            "registry/components/button/button.tsx": "export {}\n",
            "registry/components/button/button.module.css": ".root {}\n",
            "registry/components/button/button.stories.tsx": "export {}\n",
            "registry/components/button/button.test.tsx": "export {}\n",
            "registry/components/button/button.spec.js": "export {}\n",
            "registry/components/button/README.md": "# Button\n",
        }
    )
    scanner = RegistryScanner(registry_builder.config())
    entity = next(scanner.iter_entities(scanner.config.category("components")))

    assert scanner.list_eligible_files(entity) == ["button.module.css", "button.tsx"]


def test_read_source_replaces_undecodable_bytes(tmp_path: Path) -> None:
    path = tmp_path / "broken.ts"
    path.write_bytes(b'import x from "react"\n\xff\n')

    assert 'from "react"' in RegistryScanner.read_source(path)
