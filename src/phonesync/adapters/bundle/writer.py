"""Directory output writer: updated bundle, run report and rejection audit."""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .schema import AFTER_UPDATE_KEY, RunReport
from .translator import dump_patient

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phonesync.domain.model import PatientRecord, RejectedRow, RunStatistics

log = getLogger(__name__)

PATIENTS_FILENAME: Final[str] = "patients_updated.json"
REPORT_FILENAME: Final[str] = "report.json"
REJECTIONS_FILENAME: Final[str] = "invalid_rows.csv"
REJECTIONS_HEADER: Final[tuple[str, ...]] = ("nik", "raw_phone", "reason")


def render_patient_bundle(records: Sequence[PatientRecord]) -> str:
    payload = {AFTER_UPDATE_KEY: [{"resource": dump_patient(record)} for record in records]}
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_report(stats: RunStatistics) -> str:
    return json.dumps(RunReport.from_statistics(stats).as_payload(), indent=2)


def write_rejections(path: Path, rejected: Sequence[RejectedRow]) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(REJECTIONS_HEADER)
        writer.writerows((row.identifier, row.raw_phone, row.reason) for row in rejected)


@dataclass(slots=True)
class DirectoryOutputWriter:
    """Writes run artifacts into ``output_dir``, creating it when needed."""

    output_dir: Path

    def write(self, records: Sequence[PatientRecord], statistics: RunStatistics) -> None:
        out = Path(self.output_dir)
        out.mkdir(parents=True, exist_ok=True)

        (out / PATIENTS_FILENAME).write_text(render_patient_bundle(records), encoding="utf-8")
        (out / REPORT_FILENAME).write_text(render_report(statistics), encoding="utf-8")

        rejections_path = out / REJECTIONS_FILENAME
        if statistics.rejected_rows:
            write_rejections(rejections_path, statistics.rejected_rows)
        elif rejections_path.exists():
            # Stale audit from an earlier run.
            rejections_path.unlink()

        log.info("Wrote %d patients and run report to %s", len(records), out)


if TYPE_CHECKING:
    from phonesync.domain.ports.persistence import OutputWriter

    _writer_check: OutputWriter = DirectoryOutputWriter(Path("output"))
