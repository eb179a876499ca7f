"""Output writer forwarding one run's artifacts to several writers in order."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from phonesync.domain.model import PatientRecord, RunStatistics
    from phonesync.domain.ports.persistence import OutputWriter


class FanOutOutputWriter:
    def __init__(self, writers: Iterable[OutputWriter]) -> None:
        self.writers: tuple[OutputWriter, ...] = tuple(writers)

    def write(self, records: Sequence[PatientRecord], statistics: RunStatistics) -> None:
        for writer in self.writers:
            writer.write(records, statistics)
