"""Project scaffolding: generate a web app skeleton and overlay the agent template."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Literal, Sequence

from .config import SlicekitSettings
from .git import CommandRunner, CommandRunnerError, GitRunner

logger = logging.getLogger(__name__)

PLACEHOLDER = "{{PROJECT_NAME}}"
SUBSTITUTION_FILE = "AGENTS.md"
INITIAL_COMMIT_MESSAGE = "Initial setup with agent orchestration"

TEMPLATE_ENTRIES: tuple[str, ...] = (
    "AGENTS.md",
    "CLAUDE.md",
    ".claude",
    "openspec",
    "docs",
    ".slicekit.yaml",
)

PACKAGE_DIRS: tuple[str, ...] = ("packages/contracts/src", "packages/ui/src")


class ScaffoldError(RuntimeError):
    """Raised when any setup step fails; the partial project is left in place."""


@dataclass(slots=True, frozen=True)
class GeneratorStep:
    """One external generator invocation.

    ``cwd`` selects where it runs: the parent directory (before the project
    exists) or the project directory itself.
    """

    program: str
    args: tuple[str, ...]
    cwd: Literal["parent", "project"]

    def render(self, project_name: str) -> tuple[str, ...]:
        return tuple(arg.replace(PLACEHOLDER, project_name) for arg in self.args)


DEFAULT_GENERATORS: tuple[GeneratorStep, ...] = (
    GeneratorStep(
        program="npx",
        args=(
            "create-next-app@latest",
            PLACEHOLDER,
            "--typescript",
            "--tailwind",
            "--eslint",
            "--app",
            "--src-dir",
            "--import-alias",
            "@/*",
            "--use-pnpm",
        ),
        cwd="parent",
    ),
    GeneratorStep(program="npm", args=("create", "amplify@latest", "--", "--yes"), cwd="project"),
)


@dataclass(slots=True)
class ScaffoldResult:
    project_dir: Path
    copied: list[str] = field(default_factory=list)
    commit: str | None = None


class ProjectScaffolder:
    """Run the setup flow, stopping at the first failing step."""

    def __init__(
        self,
        settings: SlicekitSettings,
        *,
        runner_factory: Callable[[str], CommandRunner] | None = None,
        git: GitRunner | None = None,
        generators: Sequence[GeneratorStep] = DEFAULT_GENERATORS,
        template_entries: Sequence[str] = TEMPLATE_ENTRIES,
    ) -> None:
        self._settings = settings
        self._runner_factory = runner_factory or CommandRunner
        self._git = git
        self._generators = tuple(generators)
        self._template_entries = tuple(template_entries)

    @property
    def template_dir(self) -> Path:
        return Path(self._settings.template_dir)

    def scaffold(
        self,
        project_name: str | None = None,
        *,
        parent: Path | None = None,
        skip_generators: bool = False,
    ) -> ScaffoldResult:
        name = project_name or self._settings.default_project
        parent_dir = Path(parent) if parent is not None else Path.cwd()
        project_dir = parent_dir / name
        logger.info("Scaffolding project", extra={"project": name, "parent": str(parent_dir)})

        if skip_generators:
            project_dir.mkdir(parents=True, exist_ok=True)
        else:
            for step in self._generators:
                self._run_generator(step, name, parent_dir, project_dir)

        for relative in PACKAGE_DIRS:
            (project_dir / relative).mkdir(parents=True, exist_ok=True)

        result = ScaffoldResult(project_dir=project_dir)
        result.copied = self._copy_template(project_dir)
        self._substitute_name(project_dir, name)
        result.commit = self._initial_commit(project_dir)
        logger.info("Scaffold complete", extra={"project": name, "commit": result.commit})
        return result

    def _run_generator(self, step: GeneratorStep, name: str, parent_dir: Path, project_dir: Path) -> None:
        cwd = parent_dir if step.cwd == "parent" else project_dir
        try:
            runner = self._runner_factory(step.program)
            runner.run(*step.render(name), cwd=cwd).check()
        except CommandRunnerError as exc:
            raise ScaffoldError(f"Generator step '{step.program}' failed: {exc}") from exc

    def _copy_template(self, project_dir: Path) -> list[str]:
        template_dir = self.template_dir
        copied: list[str] = []
        for entry in self._template_entries:
            source = template_dir / entry
            target = project_dir / entry
            if source.is_dir():
                shutil.copytree(source, target, dirs_exist_ok=True)
            elif source.is_file():
                shutil.copy2(source, target)
            else:
                raise ScaffoldError(f"Template entry '{entry}' not found in {template_dir}")
            copied.append(entry)
        return copied

    def _substitute_name(self, project_dir: Path, name: str) -> None:
        path = project_dir / SUBSTITUTION_FILE
        if not path.is_file():
            raise ScaffoldError(f"{SUBSTITUTION_FILE} missing from {project_dir}")
        text = path.read_text(encoding="utf-8")
        path.write_text(text.replace(PLACEHOLDER, name), encoding="utf-8")

    def _initial_commit(self, project_dir: Path) -> str | None:
        try:
            git = self._git or GitRunner(Path(self._settings.git_path) if self._settings.git_path else None)
            git.init(project_dir).check()
            git.add_all(project_dir).check()
            git.commit(project_dir, INITIAL_COMMIT_MESSAGE).check()
        except CommandRunnerError as exc:
            raise ScaffoldError(f"Initial commit failed: {exc}") from exc
        return git.rev_parse(project_dir)


__all__ = [
    "DEFAULT_GENERATORS",
    "GeneratorStep",
    "INITIAL_COMMIT_MESSAGE",
    "PACKAGE_DIRS",
    "PLACEHOLDER",
    "ProjectScaffolder",
    "ScaffoldError",
    "ScaffoldResult",
    "TEMPLATE_ENTRIES",
]
