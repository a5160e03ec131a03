from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from slicekit.layout import (
    DEFAULT_SLICES,
    LayoutLoadError,
    LayoutLoader,
    SliceLayout,
    load_layout,
    render_note,
)


def test_default_layout_resolves_five_slices(tmp_path: Path) -> None:
    slices = SliceLayout().resolve(tmp_path)

    assert [slice_.name for slice_ in slices] == DEFAULT_SLICES
    assert slices[0].branch == "slice/contracts"
    assert slices[0].path == tmp_path / "slice-contracts"
    assert slices[-1].path == tmp_path / "slice-data"


def test_render_note_names_the_slice(tmp_path: Path) -> None:
    layout = SliceLayout()
    backend = layout.resolve(tmp_path)[3]

    note = render_note(backend, layout)

    assert note.splitlines() == [
        "# Slice: backend",
        "Only modify files in your slice directory.",
        "Import types from @repo/contracts (read-only).",
    ]


def test_layout_rejects_duplicate_slices() -> None:
    with pytest.raises(ValidationError):
        SliceLayout(slices=["contracts", "ui", "ui"])


def test_layout_requires_contracts_slice() -> None:
    with pytest.raises(ValidationError):
        SliceLayout(slices=["frontend", "ui"])


def test_layout_rejects_names_with_separators() -> None:
    with pytest.raises(ValidationError):
        SliceLayout(slices=["contracts", "web/app"])


def test_loader_returns_default_without_file(tmp_path: Path) -> None:
    assert LayoutLoader(tmp_path).load() == SliceLayout()


def test_loader_reads_custom_layout(tmp_path: Path) -> None:
    (tmp_path / ".slicekit.yaml").write_text(
        textwrap.dedent(
            """
            slices:
              - api
              - web
            contracts: api
            directory_prefix: lane-
            rules:
              - Stay in your lane.
            """
        ),
        encoding="utf-8",
    )

    layout = load_layout(tmp_path)

    assert layout.slices == ["api", "web"]
    assert layout.contracts_branch == "slice/api"
    assert layout.directory_for("web") == "lane-web"
    assert layout.rules == ["Stay in your lane."]


def test_loader_treats_empty_file_as_default(tmp_path: Path) -> None:
    (tmp_path / "layout.yaml").write_text("", encoding="utf-8")
    assert LayoutLoader(tmp_path, "layout.yaml").load() == SliceLayout()


def test_loader_reports_validation_error(tmp_path: Path) -> None:
    (tmp_path / ".slicekit.yaml").write_text("slices: [frontend]\ncontracts: contracts\n", encoding="utf-8")

    with pytest.raises(LayoutLoadError) as excinfo:
        LayoutLoader(tmp_path).load()
    assert ".slicekit.yaml" in str(excinfo.value)


def test_loader_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".slicekit.yaml").write_text("slices: [contracts\n", encoding="utf-8")

    with pytest.raises(LayoutLoadError):
        LayoutLoader(tmp_path).load()


def test_loader_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".slicekit.yaml").write_text("- contracts\n- ui\n", encoding="utf-8")

    with pytest.raises(LayoutLoadError):
        LayoutLoader(tmp_path).load()
