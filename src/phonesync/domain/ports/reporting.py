"""Port for run reporting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phonesync.domain.model import ChangeRow, PatientRecord, RunStatistics


@runtime_checkable
class UpdateReporterPort(Protocol):
    def inc_total(self) -> None: ...

    def inc_updated(self) -> None: ...

    def inc_unchanged(self) -> None: ...

    def record_invalid(self, row: ChangeRow, reason: str) -> None: ...

    def build_stats(self) -> RunStatistics: ...

    def write_outputs(self, records: Sequence[PatientRecord]) -> None: ...


__all__ = ["UpdateReporterPort"]
