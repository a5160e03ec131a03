"""Worktree orchestration over the configured slice layout."""

from .models import FAILURE_STATUSES, OperationReport, OutcomeStatus, SliceOutcome
from .slices import SliceOrchestrator

__all__ = [
    "FAILURE_STATUSES",
    "OperationReport",
    "OutcomeStatus",
    "SliceOrchestrator",
    "SliceOutcome",
]
