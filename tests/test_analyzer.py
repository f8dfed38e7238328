"""Tests for reggen.analyzer."""

from __future__ import annotations

import logging

from reggen.analyzer import EntityAnalyzer
from reggen.classifier import PathClassifier
from reggen.entity_index import build_entity_index
from reggen.resolver import DependencyResolver
from reggen.scanner import EntityRef, RegistryScanner

PACKAGES = {"react": "react@18.2.0", "clsx": "clsx@2.1.0"}


def _analyzer(registry_builder) -> tuple[EntityAnalyzer, RegistryScanner]:
    config = registry_builder.config()
    scanner = RegistryScanner(config)
    classifier = PathClassifier(config.local_aliases, config.ui_patterns)
    resolver = DependencyResolver(classifier, PACKAGES, build_entity_index(scanner))
    return EntityAnalyzer(scanner, resolver), scanner


def _entity(scanner: RegistryScanner, category: str, name: str) -> EntityRef:
    category_config = scanner.config.category(category)
    assert category_config is not None
    return EntityRef(category_config, name, scanner.root / category / name)


def test_hook_with_package_and_registry_dependency(registry_builder) -> None:
    registry_builder.write(
        {
            "registry/hooks/use-debounce/use-debounce.ts": """
                import { useEffect, useState } from "react"
                import { cn } from "@/lib/utils/utils"
            """,
            "registry/lib/utils/utils.ts": "export const cn = () => ''\n",
        }
    )
    analyzer, scanner = _analyzer(registry_builder)

    result = analyzer.analyze(_entity(scanner, "hooks", "use-debounce"))

    assert result is not None
    payload = result.item.to_dict()
    assert payload["name"] == "use-debounce"
    assert payload["type"] == "registry:hook"
    assert payload["title"] == "Use Debounce"
    assert payload["dependencies"] == ["react@18.2.0"]
    assert payload["registryDependencies"] == ["utils"]
    assert payload["files"] == [
        {
            "path": "registry/hooks/use-debounce/use-debounce.ts",
            "type": "registry:hook",
            "target": "hooks/use-debounce/use-debounce.ts",
        }
    ]


def test_ui_component_import_becomes_registry_dependency(registry_builder) -> None:
    registry_builder.write(
        {
            "registry/components/button/button.tsx": """
                import { Input } from "@/components/ui/input"
            """,
        }
    )
    analyzer, scanner = _analyzer(registry_builder)

    result = analyzer.analyze(_entity(scanner, "components", "button"))

    assert result is not None
    payload = result.item.to_dict()
    assert payload["registryDependencies"] == ["input"]
    assert "dependencies" not in payload


def test_self_reference_is_removed(registry_builder) -> None:
    registry_builder.write(
        {
            "registry/components/card/card.tsx": """
                import { helper } from "@/components/card/helpers"
                import { Badge } from "@/components/ui/badge"
            """,
            "registry/components/card/helpers.ts": "export const helper = 1\n",
        }
    )
    analyzer, scanner = _analyzer(registry_builder)

    result = analyzer.analyze(_entity(scanner, "components", "card"))

    assert result is not None
    assert result.item.registry_dependencies == ["badge"]
    assert "card" not in result.item.to_dict()["registryDependencies"]


def test_entity_with_only_test_files_is_skipped(registry_builder, caplog) -> None:
    registry_builder.write(
        {"registry/components/widget/widget.test.tsx": "import 'react'\n"}
    )
    analyzer, scanner = _analyzer(registry_builder)

    with caplog.at_level(logging.WARNING, logger="reggen"):
        result = analyzer.analyze(_entity(scanner, "components", "widget"))

    assert result is None
    assert "components/widget" in caplog.text


def test_style_files_are_listed_but_not_parsed(registry_builder) -> None:
    registry_builder.write(
        {
            "registry/styles/animations/animations.css": '@import "tailwind-animate";\n',
        }
    )
    analyzer, scanner = _analyzer(registry_builder)

    result = analyzer.analyze(_entity(scanner, "styles", "animations"))

    assert result is not None
    assert result.unresolved == []
    assert result.item.to_dict() == {
        "name": "animations",
        "type": "registry:component",
        "title": "Animations",
        "files": [
            {
                "path": "registry/styles/animations/animations.css",
                "type": "registry:style",
                "target": "styles/animations/animations.css",
            }
        ],
    }


def test_file_types_are_inferred_from_names(registry_builder) -> None:
    registry_builder.write(
        {
            "registry/components/data-table/data-table.tsx": "export {}\n",
            "registry/components/data-table/use-sorting.ts": "export {}\n",
            "registry/components/data-table/table-hook.ts": "export {}\n",
            "registry/components/data-table/helpers.ts": "export {}\n",
            "registry/components/data-table/table.css": ".t {}\n",
        }
    )
    analyzer, scanner = _analyzer(registry_builder)

    result = analyzer.analyze(_entity(scanner, "components", "data-table"))

    assert result is not None
    types = {file.path.rsplit("/", 1)[1]: file.type for file in result.item.files}
    assert types == {
        "data-table.tsx": "registry:component",
        "helpers.ts": "registry:lib",
        "table-hook.ts": "registry:hook",
        "table.css": "registry:style",
        "use-sorting.ts": "registry:hook",
    }


def test_unresolved_packages_are_reported_not_persisted(registry_builder, caplog) -> None:
    registry_builder.write(
        {
            "registry/components/chart/chart.tsx": """
                import { LineChart } from "recharts"
                import clsx from "clsx"
                import path from "path"
            """,
        }
    )
    analyzer, scanner = _analyzer(registry_builder)

    with caplog.at_level(logging.WARNING, logger="reggen"):
        result = analyzer.analyze(_entity(scanner, "components", "chart"))

    assert result is not None
    assert result.unresolved == ["recharts"]
    assert result.item.dependencies == ["clsx@2.1.0"]
    assert "recharts" in caplog.text
    assert "recharts" not in str(result.item.to_dict())


def test_nested_files_keep_relative_paths(registry_builder) -> None:
    registry_builder.write(
        {
            "registry/components/form/form.tsx": "export {}\n",
            "registry/components/form/fields/text-field.tsx": "export {}\n",
        }
    )
    analyzer, scanner = _analyzer(registry_builder)

    result = analyzer.analyze(_entity(scanner, "components", "form"))

    assert result is not None
    assert [file.target for file in result.item.files] == [
        "components/form/fields/text-field.tsx",
        "components/form/form.tsx",
    ]
