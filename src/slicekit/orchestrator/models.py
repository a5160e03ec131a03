"""Per-slice outcome records returned by bulk orchestrator operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutcomeStatus = Literal["created", "skipped", "failed", "rebased", "unchanged", "conflict", "removed"]

FAILURE_STATUSES = frozenset({"failed", "conflict"})


@dataclass(slots=True)
class SliceOutcome:
    slice: str
    path: str
    status: OutcomeStatus
    detail: str | None = None


@dataclass(slots=True)
class OperationReport:
    """Ordered outcomes of one bulk operation."""

    operation: str
    outcomes: list[SliceOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(outcome.status in FAILURE_STATUSES for outcome in self.outcomes)

    def add(self, outcome: SliceOutcome) -> SliceOutcome:
        self.outcomes.append(outcome)
        return outcome

    def by_status(self, status: OutcomeStatus) -> list[SliceOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status == status]

    def names(self, status: OutcomeStatus | None = None) -> list[str]:
        return [
            outcome.slice
            for outcome in self.outcomes
            if status is None or outcome.status == status
        ]

    def to_dict(self) -> dict[str, object]:
        return {
            "operation": self.operation,
            "ok": self.ok,
            "outcomes": [
                {
                    "slice": outcome.slice,
                    "path": outcome.path,
                    "status": outcome.status,
                    "detail": outcome.detail,
                }
                for outcome in self.outcomes
            ],
        }


__all__ = ["FAILURE_STATUSES", "OperationReport", "OutcomeStatus", "SliceOutcome"]
