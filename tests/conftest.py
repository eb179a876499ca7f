from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from phonesync.adapters.sqlalchemy import create_store_engine

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine

_ENV_VARS = (
    "PHONESYNC_PHONE_FORMAT",
    "PHONESYNC_NATIONAL_ID_SYSTEM",
    "PHONESYNC_PATIENTS_PATH",
    "PHONESYNC_SHEET_PATH",
    "PHONESYNC_SHEET_URL",
    "PHONESYNC_OUTPUT_DIR",
    "PHONESYNC_HTTP_TIMEOUT",
    "PHONESYNC_HTTP_RETRIES",
    "DATABASE_URI",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sqlite_engine(tmp_path: Path) -> Iterator[Engine]:
    engine = create_store_engine(f"sqlite+pysqlite:///{tmp_path / 'phonesync.sqlite'}")
    try:
        yield engine
    finally:
        engine.dispose()
