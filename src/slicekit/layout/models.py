"""Slice layout models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_SLICES = ["contracts", "frontend", "ui", "backend", "data"]
DEFAULT_RULES = [
    "Only modify files in your slice directory.",
    "Import types from @repo/contracts (read-only).",
]


@dataclass(slots=True, frozen=True)
class Slice:
    """A named slice resolved to its branch and worktree directory."""

    name: str
    branch: str
    path: Path


class SliceLayout(BaseModel):
    """The slice set every orchestrator operation iterates."""

    slices: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SLICES),
        description="Ordered slice names; create-all walks them in this order.",
    )
    contracts: str = Field(
        default="contracts",
        description="Slice whose branch the other slices rebase onto during sync.",
    )
    branch_prefix: str = Field(default="slice/", description="Prefix joined to a slice name to form its branch.")
    directory_prefix: str = Field(
        default="slice-",
        description="Prefix joined to a slice name to form its sibling worktree directory.",
    )
    note_filename: str = Field(default="CLAUDE.local.md", description="Note file written into each new worktree.")
    rules: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RULES),
        description="Static rules repeated in every slice note.",
    )

    @field_validator("slices", "rules", mode="before")
    @classmethod
    def _ensure_list(cls, value: Any):  # type: ignore[override]
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        raise TypeError("slices and rules must be sequences of strings")

    @field_validator("slices")
    @classmethod
    def _normalize_slices(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value]
        if not names:
            raise ValueError("Slice layout must name at least one slice")
        for name in names:
            if not name:
                raise ValueError("Slice names must not be empty")
            if "/" in name or any(char.isspace() for char in name):
                raise ValueError(f"Slice name '{name}' must not contain '/' or whitespace")
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate slice names: {', '.join(duplicates)}")
        return names

    @field_validator("directory_prefix", "note_filename")
    @classmethod
    def _reject_separators(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped or "/" in stripped:
            raise ValueError("directory_prefix and note_filename must be non-empty names without '/'")
        return stripped

    @model_validator(mode="after")
    def _contracts_is_a_slice(self) -> "SliceLayout":
        self.contracts = self.contracts.strip()
        if self.contracts not in self.slices:
            raise ValueError(f"Contracts slice '{self.contracts}' is not one of {self.slices}")
        return self

    def branch_for(self, name: str) -> str:
        return f"{self.branch_prefix}{name}"

    def directory_for(self, name: str) -> str:
        return f"{self.directory_prefix}{name}"

    @property
    def contracts_branch(self) -> str:
        return self.branch_for(self.contracts)

    def resolve(self, worktree_root: Path) -> list[Slice]:
        """Return every slice in layout order, anchored under ``worktree_root``."""

        root = Path(worktree_root)
        return [
            Slice(name=name, branch=self.branch_for(name), path=root / self.directory_for(name))
            for name in self.slices
        ]


def render_note(slice_: Slice, layout: SliceLayout) -> str:
    """Return the note file content written into a freshly created slice."""

    lines = [f"# Slice: {slice_.name}", *layout.rules]
    return "\n".join(lines) + "\n"


__all__ = ["DEFAULT_RULES", "DEFAULT_SLICES", "Slice", "SliceLayout", "render_note"]
