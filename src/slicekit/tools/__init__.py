"""Tool registration for the slicekit MCP server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastmcp import Context, FastMCP

from ..git import CommandRunnerError
from ..orchestrator import SliceOrchestrator


@dataclass(slots=True)
class ToolHandles:
    worktree_status: Any
    slice_layout: Any
    create_slices: Any
    sync_slices: Any
    clean_slices: Any


def register_tools(server: FastMCP, *, orchestrator: SliceOrchestrator) -> ToolHandles:
    """Register the slice orchestration tools on the server."""

    async def _worktree_status(context: Context | None = None) -> dict[str, Any]:
        """List the repository's registered worktrees."""

        try:
            listing = orchestrator.status()
        except CommandRunnerError as exc:
            await _emit_log(context, "error", "Worktree listing failed", extra={"error": str(exc)})
            return {"repo": str(orchestrator.repo), "worktrees": [], "error": str(exc)}
        lines = [line for line in listing.splitlines() if line.strip()]
        await _emit_log(context, "debug", "Listed worktrees", extra={"count": len(lines)})
        return {"repo": str(orchestrator.repo), "worktrees": lines, "error": None}

    async def _slice_layout(context: Context | None = None) -> dict[str, Any]:
        """Describe every configured slice with its branch and directory."""

        layout = orchestrator.layout
        slices = [
            {
                "name": slice_.name,
                "branch": slice_.branch,
                "path": str(slice_.path),
                "exists": slice_.path.is_dir(),
                "contracts": slice_.name == layout.contracts,
            }
            for slice_ in orchestrator.slices()
        ]
        await _emit_log(context, "debug", "Described slice layout", extra={"count": len(slices)})
        return {
            "worktree_root": str(orchestrator.worktree_root),
            "contracts_branch": layout.contracts_branch,
            "note_filename": layout.note_filename,
            "slices": slices,
        }

    async def _create_slices(context: Context | None = None) -> dict[str, Any]:
        report = orchestrator.create_all()
        await _emit_log(
            context,
            "info" if report.ok else "warning",
            "Created slices",
            extra={"created_slices": report.names("created"), "failed_slices": report.names("failed")},
        )
        return report.to_dict()

    async def _sync_slices(context: Context | None = None) -> dict[str, Any]:
        report = orchestrator.sync()
        await _emit_log(
            context,
            "info" if report.ok else "warning",
            "Synced slices",
            extra={"conflict_slices": report.names("conflict")},
        )
        return report.to_dict()

    async def _clean_slices(context: Context | None = None) -> dict[str, Any]:
        report = orchestrator.clean()
        await _emit_log(
            context,
            "warning",
            "Removed slice worktrees",
            extra={"removed_slices": report.names("removed"), "failed_slices": report.names("failed")},
        )
        return report.to_dict()

    tool_status = server.tool(
        name="worktree_status",
        description="List the git worktrees registered for this repository.",
    )(_worktree_status)

    tool_layout = server.tool(
        name="slice_layout",
        description="Describe the configured slices: branch, worktree directory and whether it exists.",
    )(_slice_layout)

    tool_create = server.tool(
        name="create_slices",
        description=(
            "Create a branch and worktree for every slice that does not exist yet. "
            "Returns a per-slice outcome: created, skipped or failed."
        ),
    )(_create_slices)

    tool_sync = server.tool(
        name="sync_slices",
        description=(
            "Rebase every slice worktree onto the contracts branch. Conflicts are reported "
            "per slice and left in progress for a human to resolve."
        ),
    )(_sync_slices)

    tool_clean = server.tool(
        name="clean_slices",
        description="Force-remove every slice worktree. Uncommitted changes inside them are lost.",
        annotations={"destructiveHint": True},
    )(_clean_slices)

    return ToolHandles(
        worktree_status=tool_status,
        slice_layout=tool_layout,
        create_slices=tool_create,
        sync_slices=tool_sync,
        clean_slices=tool_clean,
    )


__all__ = ["register_tools", "ToolHandles"]

logger = logging.getLogger(__name__)


async def _emit_log(
    context: Context | None,
    level: str,
    message: str,
    *,
    extra: dict[str, Any] | None = None,
) -> None:
    """Log to the module logger and forward the message to the MCP client when a context is attached."""

    payload = extra or {}

    local = getattr(logger, level, logger.info)
    local(message, extra=payload)

    if context is None:
        return
    client_log = getattr(context, level, None)
    if callable(client_log):
        details = ", ".join(f"{key}={value}" for key, value in payload.items())
        await client_log(f"{message} ({details})" if details else message)
