"""slicekit: scaffold a project and manage per-slice agent worktrees."""

__version__ = "0.1.0"

__all__ = ["__version__"]
