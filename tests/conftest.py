from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


def run_git(directory: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", "-C", str(directory), *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return completed.stdout


def commit_file(directory: Path, name: str, content: str, message: str) -> str:
    (directory / name).write_text(content, encoding="utf-8")
    run_git(directory, "add", name)
    run_git(directory, "commit", "-m", message)
    return run_git(directory, "rev-parse", "HEAD").strip()


@pytest.fixture(autouse=True)
def git_identity(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Slice Tester")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "slices@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Slice Tester")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "slices@example.com")
    for name in ("SLICEKIT_WORKTREE_ROOT", "SLICEKIT_LAYOUT_FILE", "SLICEKIT_GIT_PATH", "SLICEKIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def git_repo(workspace: Path) -> Path:
    repo = workspace / "app"
    repo.mkdir()
    run_git(repo, "init")
    commit_file(repo, "README.md", "# app\n", "Initial commit")
    return repo
