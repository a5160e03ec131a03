"""Slice worktree operations: status, create-all, sync and clean."""

from __future__ import annotations

import glob
import logging
from pathlib import Path

from ..config import SlicekitSettings
from ..git import GitRunner
from ..layout import LayoutLoader, Slice, SliceLayout, render_note
from .models import OperationReport, SliceOutcome

logger = logging.getLogger(__name__)


class SliceOrchestrator:
    """Manage one worktree per slice next to the main repository checkout.

    Each call re-derives its view of the slices from what git and the
    filesystem report, so no state is kept between invocations.
    """

    def __init__(
        self,
        repo: Path,
        *,
        layout: SliceLayout | None = None,
        git: GitRunner | None = None,
        worktree_root: Path | None = None,
    ) -> None:
        self._repo = Path(repo).resolve()
        self._layout = layout or SliceLayout()
        self._git = git or GitRunner()
        self._worktree_root = (
            Path(worktree_root).resolve() if worktree_root is not None else self._repo.parent
        )

    @classmethod
    def from_settings(
        cls,
        repo: Path,
        settings: SlicekitSettings,
        *,
        git: GitRunner | None = None,
    ) -> "SliceOrchestrator":
        layout = LayoutLoader(repo, settings.layout_file).load()
        if git is None:
            git = GitRunner(Path(settings.git_path) if settings.git_path else None)
        return cls(repo, layout=layout, git=git, worktree_root=settings.worktree_root)

    @property
    def repo(self) -> Path:
        return self._repo

    @property
    def layout(self) -> SliceLayout:
        return self._layout

    @property
    def worktree_root(self) -> Path:
        return self._worktree_root

    def slices(self) -> list[Slice]:
        return self._layout.resolve(self._worktree_root)

    def status(self) -> str:
        """Return ``git worktree list`` output unchanged."""

        return self._git.worktree_list(self._repo).check().stdout

    def create_all(self) -> OperationReport:
        report = OperationReport(operation="create-all")
        for slice_ in self.slices():
            if slice_.path.is_dir():
                report.add(SliceOutcome(slice_.name, str(slice_.path), "skipped", "directory exists"))
                logger.info("Slice exists, skipping", extra={"slice": slice_.name})
                continue

            # Expected to fail when the branch survives from an earlier run.
            branch_result = self._git.create_branch(self._repo, slice_.branch)
            if not branch_result.ok:
                logger.debug(
                    "Branch not created",
                    extra={"slice": slice_.name, "branch": slice_.branch, "stderr": branch_result.stderr.strip()},
                )

            added = self._git.worktree_add(self._repo, slice_.path, slice_.branch)
            if not added.ok:
                detail = added.stderr.strip() or f"git worktree add exited with {added.returncode}"
                report.add(SliceOutcome(slice_.name, str(slice_.path), "failed", detail))
                logger.error(
                    "Worktree creation failed",
                    extra={"slice": slice_.name, "path": str(slice_.path), "returncode": added.returncode},
                )
                continue

            note_path = slice_.path / self._layout.note_filename
            note_path.write_text(render_note(slice_, self._layout), encoding="utf-8")
            report.add(SliceOutcome(slice_.name, str(slice_.path), "created"))
            logger.info("Slice created", extra={"slice": slice_.name, "branch": slice_.branch})
        return report

    def _existing_slice_dirs(self) -> list[Path]:
        prefix = self._layout.directory_prefix
        if not self._worktree_root.is_dir():
            return []
        pattern = f"{glob.escape(prefix)}*"
        return sorted(
            path
            for path in self._worktree_root.glob(pattern)
            if path.is_dir() and path.resolve() != self._repo
        )

    def _slice_name(self, directory: Path) -> str:
        return directory.name[len(self._layout.directory_prefix):]

    def sync(self) -> OperationReport:
        """Rebase every slice worktree except contracts onto the contracts branch."""

        report = OperationReport(operation="sync")
        onto = self._layout.contracts_branch
        contracts_dir = self._layout.directory_for(self._layout.contracts)
        for directory in self._existing_slice_dirs():
            if directory.name == contracts_dir:
                continue
            name = self._slice_name(directory)
            before = self._git.rev_parse(directory)
            result = self._git.rebase(directory, onto)
            if not result.ok:
                detail = result.stderr.strip() or result.stdout.strip() or None
                report.add(SliceOutcome(name, str(directory), "conflict", detail))
                logger.warning("Rebase conflict", extra={"slice": name, "onto": onto})
                continue
            after = self._git.rev_parse(directory)
            status = "unchanged" if before == after else "rebased"
            report.add(SliceOutcome(name, str(directory), status))
            logger.info("Slice synced", extra={"slice": name, "onto": onto, "status": status})
        return report

    def clean(self) -> OperationReport:
        """Force-remove every slice worktree, discarding uncommitted changes."""

        report = OperationReport(operation="clean")
        for directory in self._existing_slice_dirs():
            name = self._slice_name(directory)
            result = self._git.worktree_remove(self._repo, directory, force=True)
            if result.ok:
                report.add(SliceOutcome(name, str(directory), "removed"))
                logger.info("Worktree removed", extra={"slice": name, "path": str(directory)})
            else:
                report.add(SliceOutcome(name, str(directory), "failed", result.stderr.strip() or None))
                logger.error("Worktree removal failed", extra={"slice": name, "path": str(directory)})
        return report


__all__ = ["SliceOrchestrator"]
