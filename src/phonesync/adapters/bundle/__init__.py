"""Public interface for the JSON patient bundle adapter."""

from __future__ import annotations

from .schema import PatientBundle, PatientResourcePayload, RunReport
from .source import JsonBundlePatientSource, parse_patient_bundle
from .translator import dump_patient, parse_patient
from .writer import (
    PATIENTS_FILENAME,
    REJECTIONS_FILENAME,
    REPORT_FILENAME,
    DirectoryOutputWriter,
    render_patient_bundle,
    render_report,
)

__all__ = [
    "PATIENTS_FILENAME",
    "REJECTIONS_FILENAME",
    "REPORT_FILENAME",
    "DirectoryOutputWriter",
    "JsonBundlePatientSource",
    "PatientBundle",
    "PatientResourcePayload",
    "RunReport",
    "dump_patient",
    "parse_patient",
    "parse_patient_bundle",
    "render_patient_bundle",
    "render_report",
]
