"""Slice layout models and loader exports."""

from .loader import LayoutLoadError, LayoutLoader, load_layout
from .models import DEFAULT_RULES, DEFAULT_SLICES, Slice, SliceLayout, render_note

__all__ = [
    "DEFAULT_RULES",
    "DEFAULT_SLICES",
    "LayoutLoadError",
    "LayoutLoader",
    "Slice",
    "SliceLayout",
    "load_layout",
    "render_note",
]
