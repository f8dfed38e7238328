"""CLI entrypoints for reggen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .packages import PackageJsonError


def _add_logging_options(parser: argparse.ArgumentParser, *, inherited: bool = False) -> None:
    """Add console/file logging switches.

    Sub-commands accept the same switches; their defaults are suppressed so a
    value given before the sub-command is not reset.
    """

    def default(value: object) -> object:
        return argparse.SUPPRESS if inherited else value

    volume = parser.add_mutually_exclusive_group()
    volume.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default(False),
        help="Show how every import was classified.",
    )
    volume.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default(False),
        help="Only print warnings and errors, not per-item status lines.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=default(None),
        help="Also write a timestamped DEBUG log of the run to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reggen",
        description="Generate and update a registry.json manifest from a registry directory.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Scan the registry directory and write registry.json.",
    )
    _add_logging_options(build_parser, inherited=True)
    build_parser.add_argument(
        "targets",
        nargs="*",
        help="Limit processing to items given as category/entity or a bare entity name.",
    )
    build_parser.add_argument(
        "--project",
        default=".",
        help="Project root containing .reggen.yml, package.json and the registry (defaults to current directory).",
    )
    build_parser.add_argument(
        "--no-override",
        action="store_true",
        help="Skip items that already exist in registry.json.",
    )
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview registry.json changes without writing.",
    )
    build_parser.add_argument(
        "--registry-dir",
        default=None,
        help="Registry directory relative to the project root.",
    )
    build_parser.add_argument(
        "--output",
        default=None,
        help="Manifest path relative to the project root.",
    )
    build_parser.add_argument(
        "--package-json",
        default=None,
        help="package.json path relative to the project root.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for reggen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    orchestrator = Orchestrator()

    if args.command == "build":
        try:
            summary = orchestrator.run_build(
                args.project,
                args.targets,
                no_override=bool(args.no_override),
                dry_run=bool(args.dry_run),
                registry_dir=args.registry_dir,
                output=args.output,
                package_json=args.package_json,
            )
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, PackageJsonError) as exc:
            parser.exit(1, f"reggen build failed: {exc}\n")
        except OSError as exc:
            parser.exit(1, f"reggen build failed: {exc}\nRun with --verbose for more details.\n")
        if summary.dry_run:
            print("registry.json changes (dry-run):")
            print(summary.diff or "(no diff)")
        elif summary.written:
            print(f"Registry written to {_relativize(summary.output_path)}")
        else:
            print("No registry categories found; nothing written")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
