"""Ports for loading, mutating and persisting patient records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phonesync.domain.model import PatientRecord, RunStatistics


@runtime_checkable
class PatientSource(Protocol):
    """Loads the initial record collection for a run."""

    def load_patients(self) -> list[PatientRecord]: ...


@runtime_checkable
class PatientRepository(Protocol):
    """Record store contract used by the reconciliation loop.

    ``apply_phone`` is the only mutation path and reports whether the record
    actually changed.
    """

    def find_by_key(self, identifier: str) -> PatientRecord | None: ...

    def list_all(self) -> list[PatientRecord]: ...

    def apply_phone(self, record: PatientRecord, canonical_value: str) -> bool: ...


@runtime_checkable
class OutputWriter(Protocol):
    """Persists the final record collection and run statistics."""

    def write(self, records: Sequence[PatientRecord], statistics: RunStatistics) -> None: ...


__all__ = ["OutputWriter", "PatientRepository", "PatientSource"]
