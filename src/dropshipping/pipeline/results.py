"""Typed outcomes of pipeline operations.

Failures of single orders are values here, not exceptions: a batch always
completes and reports what happened to each order it touched.
"""

from dataclasses import dataclass, field
from enum import Enum


class Outcome(Enum):
    SENT = "sent"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class DispatchResult:
    order_id: str
    outcome: Outcome
    supplier_order_id: str | None = None
    error: str | None = None
    reason: str | None = None

    @property
    def sent(self) -> bool:
        return self.outcome == Outcome.SENT


@dataclass(frozen=True)
class ItemOutcome:
    order_id: str
    outcome: Outcome
    error: str | None = None


@dataclass
class BatchResult:
    processed: int = 0
    updated: int = 0
    outcomes: list[ItemOutcome] = field(default_factory=list)

    def record(self, order_id: str, outcome: Outcome, error: str | None = None) -> None:
        self.processed += 1
        if outcome in (Outcome.UPDATED, Outcome.SENT):
            self.updated += 1
        self.outcomes.append(ItemOutcome(order_id=order_id, outcome=outcome, error=error))

    @property
    def failures(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.outcome == Outcome.FAILED]

    def to_dict(self) -> dict:
        return {
            "processed": self.processed,
            "updated": self.updated,
            "failed": len(self.failures),
        }
