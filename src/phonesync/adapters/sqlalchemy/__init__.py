"""SQLAlchemy adapter package for phonesync."""

from __future__ import annotations

from .store import SqlAlchemyOutputWriter, SqlAlchemyPatientStore, create_store_engine
from .tables import metadata, patient_table, rejected_row_table, sync_run_table

__all__ = [
    "SqlAlchemyOutputWriter",
    "SqlAlchemyPatientStore",
    "create_store_engine",
    "metadata",
    "patient_table",
    "rejected_row_table",
    "sync_run_table",
]
