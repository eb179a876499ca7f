"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from phonesync.adapters.bundle import DirectoryOutputWriter, JsonBundlePatientSource
from phonesync.adapters.fanout import FanOutOutputWriter
from phonesync.adapters.inmemory import InMemoryPatientRepository
from phonesync.adapters.sheets import CsvSheetSource, HttpSheetSource
from phonesync.adapters.sqlalchemy import (
    SqlAlchemyOutputWriter,
    SqlAlchemyPatientStore,
    create_store_engine,
)
from phonesync.domain.model import NATIONAL_ID_SYSTEM, PhoneFormat
from phonesync.domain.ordering import order_change_rows
from phonesync.domain.phone import create_default_phone_normalizer
from phonesync.domain.reconciliation import ReconciliationEngine
from phonesync.domain.reporting import UpdateReporter

if TYPE_CHECKING:
    from phonesync.config import StorageConfig
    from phonesync.domain.model import RunStatistics
    from phonesync.domain.ports import ChangeRowSource, OutputWriter, PatientSource
    from phonesync.domain.versioning import MetadataStamper


log = getLogger(__name__)


def sync_whatsapp_numbers(
    *,
    row_source: ChangeRowSource,
    patient_source: PatientSource,
    writer: OutputWriter,
    phone_format: PhoneFormat = PhoneFormat.INTERNATIONAL,
    national_id_system: str = NATIONAL_ID_SYSTEM,
    stamper: MetadataStamper | None = None,
) -> RunStatistics:
    """Apply the change-log to the loaded patients and write the run's outputs."""

    patients = patient_source.load_patients()
    rows = order_change_rows(row_source.load_rows())
    log.info(
        "Starting phone sync: patients=%s, rows=%s, format=%s",
        len(patients),
        len(rows),
        phone_format,
    )

    reporter = UpdateReporter(writer)
    engine = ReconciliationEngine(
        normalizer=create_default_phone_normalizer(phone_format),
        repository=InMemoryPatientRepository(
            patients,
            national_id_system=national_id_system,
            stamper=stamper,
        ),
        reporter=reporter,
    )
    engine.run(rows)

    stats = reporter.build_stats()
    log.info(
        "Finished phone sync: total=%s, updated=%s, unchanged=%s, invalid_format=%s, "
        "missing_patient=%s",
        stats.total_rows,
        stats.updated,
        stats.unchanged,
        stats.invalid_format,
        stats.missing_patient,
    )
    return stats


def build_row_source(storage: StorageConfig) -> ChangeRowSource:
    if storage.sheet_url:
        return HttpSheetSource(storage.sheet_url)
    return CsvSheetSource(storage.sheet_path)


def build_patient_io(
    storage: StorageConfig,
    *,
    national_id_system: str = NATIONAL_ID_SYSTEM,
) -> tuple[PatientSource, OutputWriter]:
    """Pick the patient source and output writer for ``storage``.

    With a database configured, patients are read from and written back to it
    and the report files still land in the output directory.
    """

    directory_writer = DirectoryOutputWriter(storage.output_dir)
    if storage.database_uri is None:
        return JsonBundlePatientSource(storage.patients_path), directory_writer

    engine = create_store_engine(storage.database_uri)
    source = SqlAlchemyPatientStore(engine, national_id_system=national_id_system)
    writer = FanOutOutputWriter(
        (SqlAlchemyOutputWriter(engine, national_id_system=national_id_system), directory_writer)
    )
    return source, writer


def import_patient_bundle(
    patients_path: Path,
    database_uri: str,
    *,
    national_id_system: str = NATIONAL_ID_SYSTEM,
) -> int:
    """Copy a JSON patient bundle into the database store; return the patient count."""

    records = JsonBundlePatientSource(Path(patients_path)).load_patients()
    store = SqlAlchemyPatientStore(
        create_store_engine(database_uri),
        national_id_system=national_id_system,
    )
    store.save_patients(records)
    log.info("Imported %d patients into the database store", len(records))
    return len(records)
