"""FastMCP server bootstrap for slicekit."""

from __future__ import annotations

import logging
from pathlib import Path

from fastmcp import FastMCP

from . import __version__
from .config import SlicekitSettings, get_settings
from .git import GitRunner
from .orchestrator import SliceOrchestrator
from .tools import register_tools


def configure_logging(level: str) -> None:
    """Configure root logging for slicekit entry points."""

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def create_server(
    settings: SlicekitSettings | None = None,
    *,
    repo: Path | None = None,
    git: GitRunner | None = None,
) -> FastMCP:
    """Instantiate the FastMCP server with the slice tools registered."""

    settings = settings or get_settings()
    orchestrator = SliceOrchestrator.from_settings(repo or Path.cwd(), settings, git=git)

    server = FastMCP(
        name="slicekit",
        instructions=(
            "slicekit keeps one git worktree per slice of the repository so that "
            "several agents can work side by side. Use the tools to inspect the "
            "layout, create slice worktrees, rebase them onto the contracts slice "
            "and remove them."
        ),
    )

    handles = register_tools(server, orchestrator=orchestrator)

    setattr(server, "orchestrator", orchestrator)
    setattr(server, "tool_handles", handles)
    return server


def main() -> None:
    """Entry point for running the slicekit MCP server via CLI."""

    settings = get_settings()
    configure_logging(settings.log_level)

    server = create_server(settings)
    logging.getLogger(__name__).info(
        "Launching slicekit MCP server",
        extra={
            "version": __version__,
            "log_level": settings.log_level,
            "repo": str(server.orchestrator.repo),
        },
    )
    server.run()


if __name__ == "__main__":
    main()
