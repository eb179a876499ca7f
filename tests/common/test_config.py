from __future__ import annotations

import logging
from pathlib import Path  # noqa: TC003

import pytest

from phonesync.config import (
    ConfigurationError,
    configure_logging,
    get_http_config,
    get_storage_config,
    get_sync_config,
    optional_env_var,
)
from phonesync.config.logging import LOG_FORMAT
from phonesync.domain.model import NATIONAL_ID_SYSTEM, PhoneFormat


def test_optional_env_var_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONESYNC_OUTPUT_DIR", "   ")

    assert optional_env_var("PHONESYNC_OUTPUT_DIR", "fallback") == "fallback"


def test_storage_defaults() -> None:
    storage = get_storage_config()

    assert storage.patients_path == Path("data/repo/patients-data.json")
    assert storage.sheet_path == Path("data/sheets/Whatsapp Data - Sheet.csv")
    assert storage.output_dir == Path("data/output")
    assert storage.sheet_url is None
    assert storage.database_uri is None


def test_storage_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PHONESYNC_PATIENTS_PATH", str(tmp_path / "p.json"))
    monkeypatch.setenv("PHONESYNC_SHEET_URL", "https://sheets.example.test/x.csv")
    monkeypatch.setenv("DATABASE_URI", "sqlite:///override.db")

    storage = get_storage_config()

    assert storage.patients_path == tmp_path / "p.json"
    assert storage.sheet_url == "https://sheets.example.test/x.csv"
    assert storage.database_uri == "sqlite:///override.db"


def test_sync_config_defaults() -> None:
    config = get_sync_config()

    assert config.phone_format is PhoneFormat.INTERNATIONAL
    assert config.national_id_system == NATIONAL_ID_SYSTEM


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("national", PhoneFormat.NATIONAL),
        ("LOCAL0", PhoneFormat.NATIONAL),
        ("e164", PhoneFormat.INTERNATIONAL),
    ],
)
def test_sync_config_phone_format_aliases(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: PhoneFormat
) -> None:
    monkeypatch.setenv("PHONESYNC_PHONE_FORMAT", raw)

    assert get_sync_config().phone_format is expected


def test_sync_config_rejects_unknown_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONESYNC_PHONE_FORMAT", "morse")

    with pytest.raises(ConfigurationError, match="morse"):
        get_sync_config()


def test_http_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONESYNC_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("PHONESYNC_HTTP_RETRIES", "1")

    config = get_http_config()

    assert config.timeout_seconds == 2.5
    assert config.retry.total == 1


def test_http_config_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONESYNC_HTTP_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError, match="PHONESYNC_HTTP_TIMEOUT"):
        get_http_config()


def test_configure_logging_passes_level_and_format(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    configure_logging(level=logging.DEBUG, force=True)

    assert captured["level"] == logging.DEBUG
    assert captured["force"] is True
    assert captured["format"] == LOG_FORMAT
