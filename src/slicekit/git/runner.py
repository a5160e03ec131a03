"""Synchronous runners for git and the external project generators."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .utils import sanitize_environment

logger = logging.getLogger(__name__)


class CommandRunnerError(RuntimeError):
    """Base class for command runner errors."""


class CommandNotFoundError(CommandRunnerError):
    """Raised when an executable cannot be located."""


class CommandFailedError(CommandRunnerError):
    """Raised by fail-fast callers when a command exits non-zero."""

    def __init__(self, result: "CommandResult") -> None:
        self.result = result
        detail = result.stderr.strip() or result.stdout.strip() or "no output"
        super().__init__(f"{' '.join(result.args)} exited with {result.returncode}: {detail}")


@dataclass(slots=True)
class CommandResult:
    """Holds the outcome of an external command invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def check(self) -> "CommandResult":
        if not self.ok:
            raise CommandFailedError(self)
        return self


class CommandRunner:
    """Execute one external program, blocking until it exits."""

    def __init__(self, name: str, executable: Path | None = None) -> None:
        self._name = name
        self._executable_path = self._resolve_executable(name, executable)

    @staticmethod
    def _resolve_executable(name: str, explicit: Path | None) -> Path:
        if explicit is not None:
            candidate = Path(explicit)
            if candidate.exists() and candidate.is_file():
                return candidate
            raise CommandNotFoundError(f"{name} executable not found at {candidate}")

        binary = shutil.which(name)
        if binary is None:
            raise CommandNotFoundError(f"{name} executable not found on PATH")
        return Path(binary)

    @property
    def executable(self) -> Path:
        return self._executable_path

    def run(self, *args: str, cwd: Path | None = None) -> CommandResult:
        cmd = [str(self._executable_path), *args]
        logger.debug("Running command", extra={"command": cmd, "cwd": str(cwd) if cwd else None})
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=sanitize_environment(),
        )
        return CommandResult(
            args=tuple(cmd),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


class GitRunner(CommandRunner):
    """Git operations used by the slice orchestrator and the scaffolder.

    Every call is scoped to a directory with ``git -C`` so the caller's
    working directory never matters.
    """

    def __init__(self, executable: Path | None = None) -> None:
        super().__init__("git", executable)

    def git(self, directory: Path, *args: str) -> CommandResult:
        return self.run("-C", str(directory), *args)

    def worktree_list(self, repo: Path) -> CommandResult:
        return self.git(repo, "worktree", "list")

    def create_branch(self, repo: Path, branch: str) -> CommandResult:
        return self.git(repo, "branch", branch)

    def worktree_add(self, repo: Path, path: Path, branch: str) -> CommandResult:
        return self.git(repo, "worktree", "add", str(path), branch)

    def worktree_remove(self, repo: Path, path: Path, *, force: bool = True) -> CommandResult:
        args = ["worktree", "remove", str(path)]
        if force:
            args.append("--force")
        return self.git(repo, *args)

    def rebase(self, worktree: Path, onto: str) -> CommandResult:
        return self.git(worktree, "rebase", onto)

    def rev_parse(self, directory: Path, ref: str = "HEAD") -> str | None:
        result = self.git(directory, "rev-parse", ref)
        return result.stdout.strip() if result.ok else None

    def init(self, directory: Path) -> CommandResult:
        return self.git(directory, "init")

    def add_all(self, directory: Path) -> CommandResult:
        return self.git(directory, "add", ".")

    def commit(self, directory: Path, message: str) -> CommandResult:
        return self.git(directory, "commit", "-m", message)


class FakeGitRunner(GitRunner):
    """Test double that records git invocations and replays queued results."""

    def __init__(self, responses: Iterable[CommandResult] | None = None) -> None:  # type: ignore[override]
        self._name = "git"
        self._responses = list(responses or [])
        self._invocations: list[tuple[str, ...]] = []
        self._executable_path = Path("/tmp/fake-git")

    def run(self, *args: str, cwd: Path | None = None) -> CommandResult:  # type: ignore[override]
        self._invocations.append(tuple(args))
        if self._responses:
            return self._responses.pop(0)
        return CommandResult(args=tuple(args), returncode=0, stdout="", stderr="")

    @property
    def invocations(self) -> list[tuple[str, ...]]:
        return self._invocations


__all__ = [
    "CommandFailedError",
    "CommandNotFoundError",
    "CommandResult",
    "CommandRunner",
    "CommandRunnerError",
    "FakeGitRunner",
    "GitRunner",
]
