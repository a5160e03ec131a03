"""Command line entry points: ``slicekit-orchestrate`` and ``slicekit-setup``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from .config import SlicekitSettings
from .git import CommandRunnerError
from .layout import LayoutLoadError
from .orchestrator import OperationReport, SliceOrchestrator
from .scaffold import ProjectScaffolder, ScaffoldError
from .server import configure_logging

ORCHESTRATE_USAGE = "Usage: slicekit-orchestrate [status|create-all|sync|clean]"
EXIT_USAGE = 2

_GLYPHS = {
    "created": "✓",
    "skipped": "⏭",
    "failed": "✗",
    "rebased": "✓",
    "unchanged": "✓",
    "conflict": "⚠",
    "removed": "✓",
}


def _print_report(report: OperationReport) -> None:
    for outcome in report.outcomes:
        glyph = _GLYPHS.get(outcome.status, "?")
        if outcome.status == "created":
            print(f"{glyph}  {outcome.slice} created")
        elif outcome.status == "skipped":
            print(f"{glyph}  {outcome.slice} (exists)")
        elif report.operation == "sync":
            print(f"Rebasing {Path(outcome.path).name}...")
            if outcome.status == "conflict":
                print(f"  {glyph} Conflict")
            elif outcome.status == "unchanged":
                print(f"  {glyph} Up to date")
            else:
                print(f"  {glyph} Rebased")
        elif outcome.status == "removed":
            print(f"Removed: {outcome.path}")
        else:
            print(f"{glyph}  {outcome.slice} failed: {outcome.detail or 'unknown error'}")


def cmd_status(orchestrator: SliceOrchestrator, settings: SlicekitSettings) -> int:
    print("📊 Worktree Status")
    print("")
    print(orchestrator.status(), end="")
    return 0


def cmd_create_all(orchestrator: SliceOrchestrator, settings: SlicekitSettings) -> int:
    print("🔨 Creating all standard slices")
    print("")
    report = orchestrator.create_all()
    _print_report(report)

    ready = [slice_ for slice_ in orchestrator.slices() if slice_.path.is_dir()]
    if ready:
        print("")
        print("Start agents in separate terminals:")
        for slice_ in ready:
            print(f"  cd {slice_.path} && {settings.agent_command}")
    return 0 if report.ok else 1


def cmd_sync(orchestrator: SliceOrchestrator, settings: SlicekitSettings) -> int:
    print("🔄 Syncing contracts to all slices")
    report = orchestrator.sync()
    _print_report(report)
    return 0 if report.ok else 1


def cmd_clean(orchestrator: SliceOrchestrator, settings: SlicekitSettings) -> int:
    print("🧹 Removing all worktrees")
    report = orchestrator.clean()
    _print_report(report)
    return 0 if report.ok else 1


COMMANDS: dict[str, Callable[[SliceOrchestrator, SlicekitSettings], int]] = {
    "status": cmd_status,
    "create-all": cmd_create_all,
    "sync": cmd_sync,
    "clean": cmd_clean,
}


def build_orchestrate_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slicekit-orchestrate",
        description="Manage one git worktree per slice for parallel agents",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="status",
        help="status (default), create-all, sync or clean",
    )
    parser.add_argument(
        "--repo",
        type=Path,
        default=None,
        help="Main repository checkout (default: current directory)",
    )
    return parser


def orchestrate_main(argv: list[str] | None = None) -> int:
    parser = build_orchestrate_parser()
    args = parser.parse_args(argv)

    handler = COMMANDS.get(args.command)
    if handler is None:
        print(ORCHESTRATE_USAGE)
        return EXIT_USAGE

    try:
        settings = SlicekitSettings()
        configure_logging(settings.log_level)
        orchestrator = SliceOrchestrator.from_settings(args.repo or Path.cwd(), settings)
        return handler(orchestrator, settings)
    except (CommandRunnerError, LayoutLoadError, ValidationError) as exc:
        print(f"slicekit-orchestrate: {exc}", file=sys.stderr)
        return 1


def build_setup_parser(default_project: str = "my-app") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slicekit-setup",
        description="Create a web app skeleton with the agent template overlaid",
    )
    parser.add_argument("project_name", nargs="?", default=default_project)
    parser.add_argument(
        "--parent",
        type=Path,
        default=None,
        help="Directory the project is created in (default: current directory)",
    )
    parser.add_argument(
        "--template-dir",
        type=Path,
        default=None,
        help="Template root to copy agent files from (default: bundled template)",
    )
    parser.add_argument(
        "--skip-generators",
        action="store_true",
        help="Do not run create-next-app / create amplify; only overlay the template",
    )
    return parser


def setup_main(argv: list[str] | None = None) -> int:
    try:
        settings = SlicekitSettings()
    except ValidationError as exc:
        print(f"slicekit-setup: {exc}", file=sys.stderr)
        return 1
    parser = build_setup_parser(settings.default_project)
    args = parser.parse_args(argv)
    if args.template_dir is not None:
        settings.template_dir = args.template_dir
    configure_logging(settings.log_level)

    print("🤖 Agent Template Setup")
    print(f"Creating: {args.project_name}")

    scaffolder = ProjectScaffolder(settings)
    try:
        result = scaffolder.scaffold(
            args.project_name,
            parent=args.parent,
            skip_generators=args.skip_generators,
        )
    except ScaffoldError as exc:
        print(f"slicekit-setup: {exc}", file=sys.stderr)
        return 1

    print("✓ Setup complete!")
    print("")
    print("Next steps:")
    print(f"  cd {result.project_dir}")
    print("  slicekit-orchestrate create-all")
    print(f"  cd ../slice-contracts && {settings.agent_command}")
    return 0


if __name__ == "__main__":
    sys.exit(orchestrate_main())
