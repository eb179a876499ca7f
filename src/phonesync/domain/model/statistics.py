"""Run statistics and rejection audit entries."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True)
class RejectedRow:
    identifier: str
    raw_phone: str
    reason: str


@dataclass(slots=True)
class RunStatistics:
    """Counters for one reconciliation run.

    Every observed row lands in exactly one of the four outcome buckets, so
    ``total_rows`` equals their sum once a run has finished.
    """

    total_rows: int = 0
    updated: int = 0
    unchanged: int = 0
    invalid_format: int = 0
    missing_patient: int = 0
    rejected_rows: list[RejectedRow] = field(default_factory=list)

    @property
    def outcome_total(self) -> int:
        return self.updated + self.unchanged + self.invalid_format + self.missing_patient

    @property
    def is_balanced(self) -> bool:
        return self.total_rows == self.outcome_total

    def snapshot(self) -> RunStatistics:
        return replace(self, rejected_rows=list(self.rejected_rows))
