"""Slice layout loading utilities."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import SliceLayout


class LayoutLoadError(RuntimeError):
    """Raised when a layout file cannot be parsed or validated."""


class LayoutLoader:
    """Loads the slice layout from an optional YAML file in the repository root."""

    def __init__(self, repo: Path, filename: str = ".slicekit.yaml") -> None:
        self._path = Path(repo) / filename

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> SliceLayout:
        """Return the configured layout, or the default one when no file exists."""

        if not self._path.is_file():
            return SliceLayout()

        try:
            document = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise LayoutLoadError(f"Failed to parse YAML in {self._path}: {exc}") from exc

        if document is None:
            return SliceLayout()
        if not isinstance(document, dict):
            raise LayoutLoadError(f"Layout file {self._path} must contain a mapping")

        try:
            return SliceLayout.model_validate(document)
        except ValidationError as exc:
            raise LayoutLoadError(f"Layout validation error in {self._path}: {exc}") from exc


def load_layout(repo: Path, filename: str = ".slicekit.yaml") -> SliceLayout:
    """Convenience wrapper for loading the layout of ``repo``."""

    return LayoutLoader(repo, filename).load()


__all__ = ["LayoutLoadError", "LayoutLoader", "load_layout"]
