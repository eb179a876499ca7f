"""File-backed patient source reading the JSON patient bundle."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from phonesync.domain.errors import SourceError

from .schema import PatientBundle
from .translator import parse_patient

if TYPE_CHECKING:
    from phonesync.domain.model import PatientRecord

log = getLogger(__name__)


def parse_patient_bundle(text: str | bytes) -> list[PatientRecord]:
    """Parse bundle JSON into domain records, preserving bundle order.

    Raises:
        SourceError: if the document is not a well-formed patient bundle.
    """

    try:
        bundle = PatientBundle.model_validate_json(text)
    except ValidationError as exc:
        raise SourceError(f"Malformed patient bundle: {exc}") from exc
    return [parse_patient(entry.resource) for entry in bundle.entries]


@dataclass(slots=True)
class JsonBundlePatientSource:
    path: Path

    def load_patients(self) -> list[PatientRecord]:
        try:
            raw = Path(self.path).read_bytes()
        except OSError as exc:
            raise SourceError(
                f"Cannot read patient bundle {self.path}: {exc}", location=str(self.path)
            ) from exc
        try:
            records = parse_patient_bundle(raw)
        except SourceError as exc:
            exc.location = str(self.path)
            raise
        log.info("Loaded %d patients from %s", len(records), self.path)
        return records


if TYPE_CHECKING:
    from phonesync.domain.ports.persistence import PatientSource

    _source_check: PatientSource = JsonBundlePatientSource(Path("patients.json"))
