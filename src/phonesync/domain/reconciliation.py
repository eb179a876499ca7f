"""Reconciliation loop: replay ordered change rows against the record store."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from phonesync.domain.model import RejectionReason

if TYPE_CHECKING:
    from collections.abc import Iterable

    from phonesync.domain.model import ChangeRow
    from phonesync.domain.ports import PatientRepository, PhoneNormalizerPort, UpdateReporterPort

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Apply each row's phone to its patient, routing every outcome to the reporter.

    Rows must already be ordered oldest first. A row sees the mutations of all
    earlier rows for the same identifier and nothing else.
    """

    normalizer: PhoneNormalizerPort
    repository: PatientRepository
    reporter: UpdateReporterPort

    def run(self, ordered_rows: Iterable[ChangeRow]) -> None:
        for row in ordered_rows:
            self._process(row)
        self.reporter.write_outputs(self.repository.list_all())

    def _process(self, row: ChangeRow) -> None:
        self.reporter.inc_total()

        phone = self.normalizer.normalize(row.raw_phone)
        if not phone.is_valid or phone.value is None:
            reason = phone.rejection_reason or RejectionReason.NON_DIGIT
            log.debug("Rejected phone %r for %s: %s", row.raw_phone, row.identifier, reason)
            self.reporter.record_invalid(row, reason)
            return

        record = self.repository.find_by_key(row.identifier)
        if record is None:
            log.debug("No patient for identifier %s", row.identifier)
            self.reporter.record_invalid(row, RejectionReason.MISSING_PATIENT)
            return

        if self.repository.apply_phone(record, phone.value):
            self.reporter.inc_updated()
        else:
            self.reporter.inc_unchanged()


def reconcile(
    ordered_rows: Iterable[ChangeRow],
    *,
    normalizer: PhoneNormalizerPort,
    repository: PatientRepository,
    reporter: UpdateReporterPort,
) -> None:
    """Functional shorthand for ``ReconciliationEngine(...).run(rows)``."""

    ReconciliationEngine(normalizer=normalizer, repository=repository, reporter=reporter).run(
        ordered_rows
    )


__all__ = ["ReconciliationEngine", "reconcile"]
