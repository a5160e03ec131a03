from __future__ import annotations

from pathlib import Path

import pytest

from slicekit.config import SlicekitSettings
from slicekit.git import CommandResult
from slicekit.scaffold import (
    INITIAL_COMMIT_MESSAGE,
    TEMPLATE_ENTRIES,
    ProjectScaffolder,
    ScaffoldError,
)

from conftest import run_git


class RecordingRunner:
    calls: list[tuple[str, tuple[str, ...], Path | None]] = []
    fail_program: str | None = None

    def __init__(self, name: str) -> None:
        self.name = name

    def run(self, *args: str, cwd: Path | None = None) -> CommandResult:
        RecordingRunner.calls.append((self.name, args, cwd))
        returncode = 1 if self.name == RecordingRunner.fail_program else 0
        return CommandResult(args=(self.name, *args), returncode=returncode, stdout="", stderr="generator broke")


@pytest.fixture
def recording_runner():
    RecordingRunner.calls = []
    RecordingRunner.fail_program = None
    yield RecordingRunner
    RecordingRunner.calls = []
    RecordingRunner.fail_program = None


def test_scaffold_overlays_bundled_template(tmp_path: Path) -> None:
    scaffolder = ProjectScaffolder(SlicekitSettings())

    result = scaffolder.scaffold("shop", parent=tmp_path, skip_generators=True)

    project = tmp_path / "shop"
    assert result.project_dir == project
    assert result.copied == list(TEMPLATE_ENTRIES)
    agents = (project / "AGENTS.md").read_text(encoding="utf-8")
    assert "shop" in agents
    assert "{{PROJECT_NAME}}" not in agents
    assert (project / ".claude" / "skills" / "slice-agent" / "SKILL.md").is_file()
    assert (project / ".slicekit.yaml").is_file()
    assert (project / "packages" / "contracts" / "src").is_dir()
    assert (project / "packages" / "ui" / "src").is_dir()
    assert result.commit == run_git(project, "rev-parse", "HEAD").strip()
    assert run_git(project, "log", "-1", "--format=%s").strip() == INITIAL_COMMIT_MESSAGE
    assert run_git(project, "status", "--porcelain").strip() == ""


def test_scaffold_uses_default_project_name(tmp_path: Path) -> None:
    result = ProjectScaffolder(SlicekitSettings()).scaffold(parent=tmp_path, skip_generators=True)

    assert result.project_dir == tmp_path / "my-app"


def test_scaffold_runs_generators_in_order(tmp_path: Path, recording_runner) -> None:
    scaffolder = ProjectScaffolder(SlicekitSettings(), runner_factory=recording_runner)

    scaffolder.scaffold("shop", parent=tmp_path)

    programs = [call[0] for call in recording_runner.calls]
    assert programs == ["npx", "npm"]
    npx_args, npx_cwd = recording_runner.calls[0][1], recording_runner.calls[0][2]
    assert npx_args[:2] == ("create-next-app@latest", "shop")
    assert "--use-pnpm" in npx_args
    assert npx_cwd == tmp_path
    assert recording_runner.calls[1][2] == tmp_path / "shop"


def test_generator_failure_stops_setup(tmp_path: Path, recording_runner) -> None:
    recording_runner.fail_program = "npx"
    scaffolder = ProjectScaffolder(SlicekitSettings(), runner_factory=recording_runner)

    with pytest.raises(ScaffoldError) as excinfo:
        scaffolder.scaffold("shop", parent=tmp_path)

    assert "generator broke" in str(excinfo.value)
    assert [call[0] for call in recording_runner.calls] == ["npx"]
    assert not (tmp_path / "shop").exists()


def test_missing_template_entry_is_fatal(tmp_path: Path) -> None:
    template = tmp_path / "template"
    template.mkdir()
    (template / "AGENTS.md").write_text("# {{PROJECT_NAME}}\n", encoding="utf-8")
    settings = SlicekitSettings(SLICEKIT_TEMPLATE_DIR=str(template))

    with pytest.raises(ScaffoldError) as excinfo:
        ProjectScaffolder(settings).scaffold("shop", parent=tmp_path, skip_generators=True)

    assert "CLAUDE.md" in str(excinfo.value)
    assert not (tmp_path / "shop" / ".git").exists()


def test_custom_template_entries(tmp_path: Path) -> None:
    template = tmp_path / "template"
    (template / "docs").mkdir(parents=True)
    (template / "docs" / "intro.md").write_text("hello\n", encoding="utf-8")
    (template / "AGENTS.md").write_text("Project: {{PROJECT_NAME}}\n", encoding="utf-8")
    settings = SlicekitSettings(SLICEKIT_TEMPLATE_DIR=str(template))

    result = ProjectScaffolder(settings, template_entries=("AGENTS.md", "docs")).scaffold(
        "blog", parent=tmp_path / "out", skip_generators=True
    )

    assert (result.project_dir / "AGENTS.md").read_text(encoding="utf-8") == "Project: blog\n"
    assert (result.project_dir / "docs" / "intro.md").is_file()
