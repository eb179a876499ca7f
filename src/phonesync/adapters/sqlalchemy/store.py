"""Database-backed patient source and output writer."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError
from sqlalchemy import create_engine, delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from phonesync.adapters.bundle.schema import PatientResourcePayload
from phonesync.adapters.bundle.translator import dump_patient, parse_patient
from phonesync.domain.errors import SourceError
from phonesync.domain.model import NATIONAL_ID_SYSTEM

from .tables import metadata, patient_table, rejected_row_table, sync_run_table

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy.engine import Connection, Engine

    from phonesync.domain.model import PatientRecord, RunStatistics

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def create_store_engine(database_uri: str) -> Engine:
    """Create an engine for ``database_uri`` with the store's tables in place."""

    engine = create_engine(database_uri, future=True)
    metadata.create_all(engine, checkfirst=True)
    return engine


def _replace_patients(
    connection: Connection,
    records: Sequence[PatientRecord],
    national_id_system: str,
) -> None:
    ids = [record.id for record in records]
    if ids:
        connection.execute(delete(patient_table).where(patient_table.c.id.in_(ids)))
        connection.execute(
            insert(patient_table),
            [
                {
                    "id": record.id,
                    "national_id": record.identifier_value(national_id_system),
                    "position": position,
                    "resource": dump_patient(record),
                }
                for position, record in enumerate(records)
            ],
        )


class SqlAlchemyPatientStore:
    """Loads patients stored as JSON resources in the ``patients`` table."""

    def __init__(self, engine: Engine, *, national_id_system: str = NATIONAL_ID_SYSTEM) -> None:
        self.engine = engine
        self.national_id_system = national_id_system
        metadata.create_all(engine, checkfirst=True)

    def load_patients(self) -> list[PatientRecord]:
        stmt = select(patient_table.c.id, patient_table.c.resource).order_by(
            patient_table.c.position, patient_table.c.id
        )
        try:
            with self.engine.connect() as connection:
                rows = connection.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise SourceError(f"Cannot load patients from database: {exc}") from exc

        records: list[PatientRecord] = []
        for patient_id, resource in rows:
            try:
                payload = PatientResourcePayload.model_validate(resource)
            except ValidationError as exc:
                raise SourceError(
                    f"Malformed patient resource {patient_id}: {exc}", location=patient_id
                ) from exc
            records.append(parse_patient(payload))
        log.info("Loaded %d patients from database", len(records))
        return records

    def save_patients(self, records: Sequence[PatientRecord]) -> None:
        """Insert or replace ``records``, keeping their order for later loads."""

        with self.engine.begin() as connection:
            _replace_patients(connection, records, self.national_id_system)


class SqlAlchemyOutputWriter:
    """Persists updated patients plus one ``sync_runs`` row and its rejections."""

    def __init__(
        self,
        engine: Engine,
        *,
        national_id_system: str = NATIONAL_ID_SYSTEM,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.engine = engine
        self.national_id_system = national_id_system
        self.clock = clock
        metadata.create_all(engine, checkfirst=True)

    def write(self, records: Sequence[PatientRecord], statistics: RunStatistics) -> None:
        with self.engine.begin() as connection:
            _replace_patients(connection, records, self.national_id_system)
            result = connection.execute(
                insert(sync_run_table).values(
                    finished_at=self.clock(),
                    total_rows=statistics.total_rows,
                    updated=statistics.updated,
                    unchanged=statistics.unchanged,
                    invalid_format=statistics.invalid_format,
                    missing_patient=statistics.missing_patient,
                )
            )
            run_id = result.inserted_primary_key[0]
            if statistics.rejected_rows:
                connection.execute(
                    insert(rejected_row_table),
                    [
                        {
                            "run_id": run_id,
                            "position": position,
                            "identifier": row.identifier,
                            "raw_phone": row.raw_phone,
                            "reason": row.reason,
                        }
                        for position, row in enumerate(statistics.rejected_rows)
                    ],
                )
        log.info("Stored %d patients and sync run %s", len(records), run_id)

