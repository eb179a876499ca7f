"""Run reporter: outcome counters, rejection audit and output hand-off."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from phonesync.domain.model import RejectedRow, RejectionReason, RunStatistics

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phonesync.domain.model import ChangeRow, PatientRecord
    from phonesync.domain.ports.persistence import OutputWriter

log = getLogger(__name__)

MISSING_PATIENT_REASON = RejectionReason.MISSING_PATIENT.value


class UpdateReporter:
    """Accumulates run statistics and forwards final artifacts to a writer."""

    def __init__(self, writer: OutputWriter) -> None:
        self._writer = writer
        self._stats = RunStatistics()

    def inc_total(self) -> None:
        self._stats.total_rows += 1

    def inc_updated(self) -> None:
        self._stats.updated += 1

    def inc_unchanged(self) -> None:
        self._stats.unchanged += 1

    def record_invalid(self, row: ChangeRow, reason: str) -> None:
        """Audit a rejected row and count it as a lookup miss or a format failure."""

        self._stats.rejected_rows.append(
            RejectedRow(identifier=row.identifier, raw_phone=row.raw_phone, reason=str(reason))
        )
        if reason == MISSING_PATIENT_REASON:
            self._stats.missing_patient += 1
        else:
            self._stats.invalid_format += 1

    def build_stats(self) -> RunStatistics:
        return self._stats.snapshot()

    def write_outputs(self, records: Sequence[PatientRecord]) -> None:
        stats = self.build_stats()
        if not stats.is_balanced:
            log.error(
                "Row outcomes do not add up: total=%s, outcomes=%s",
                stats.total_rows,
                stats.outcome_total,
            )
        self._writer.write(records, stats)


__all__ = ["MISSING_PATIENT_REASON", "UpdateReporter"]
