"""SQLAlchemy table metadata for the database-backed patient store."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
)

metadata = MetaData()


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


patient_table = Table(
    "patients",
    metadata,
    Column("id", String(128), primary_key=True),
    Column("national_id", String(64), nullable=True, index=True),
    Column("position", Integer, nullable=False),
    Column("resource", JSON, nullable=False),
)

sync_run_table = Table(
    "sync_runs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("finished_at", UTCDateTime(), nullable=False),
    Column("total_rows", Integer, nullable=False),
    Column("updated", Integer, nullable=False),
    Column("unchanged", Integer, nullable=False),
    Column("invalid_format", Integer, nullable=False),
    Column("missing_patient", Integer, nullable=False),
)

rejected_row_table = Table(
    "rejected_rows",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("run_id", ForeignKey("sync_runs.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("position", Integer, nullable=False),
    Column("identifier", String(64), nullable=False),
    Column("raw_phone", String(255), nullable=False),
    Column("reason", String(32), nullable=False),
)
