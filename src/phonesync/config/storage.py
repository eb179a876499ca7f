"""Input and output location configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

DEFAULT_PATIENTS_PATH: Final[str] = "data/repo/patients-data.json"
DEFAULT_SHEET_PATH: Final[str] = "data/sheets/Whatsapp Data - Sheet.csv"
DEFAULT_OUTPUT_DIR: Final[str] = "data/output"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    patients_path: Path
    sheet_path: Path
    output_dir: Path
    sheet_url: str | None = None
    database_uri: str | None = None


def get_storage_config() -> StorageConfig:
    return StorageConfig(
        patients_path=Path(optional_env_var("PHONESYNC_PATIENTS_PATH", DEFAULT_PATIENTS_PATH)),
        sheet_path=Path(optional_env_var("PHONESYNC_SHEET_PATH", DEFAULT_SHEET_PATH)),
        output_dir=Path(optional_env_var("PHONESYNC_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
        sheet_url=os.getenv("PHONESYNC_SHEET_URL") or None,
        database_uri=os.getenv("DATABASE_URI") or None,
    )
