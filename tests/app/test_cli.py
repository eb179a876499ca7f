from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from phonesync.adapters.bundle import DirectoryOutputWriter, JsonBundlePatientSource
from phonesync.adapters.sheets import CsvSheetSource, HttpSheetSource
from phonesync.domain.model import PhoneFormat, RunStatistics
from phonesync.ui import cli


def _fake_sync(captured: dict[str, object]) -> Callable[..., RunStatistics]:
    def fake_sync(**kwargs: object) -> RunStatistics:
        captured.update(kwargs)
        return RunStatistics(total_rows=4, updated=2, unchanged=1, invalid_format=1)

    return fake_sync


def test_sync_defaults(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli, "sync_whatsapp_numbers", _fake_sync(captured))

    cli.main(["sync"])

    row_source = captured["row_source"]
    patient_source = captured["patient_source"]
    writer = captured["writer"]
    assert isinstance(row_source, CsvSheetSource)
    assert row_source.path == Path("data/sheets/Whatsapp Data - Sheet.csv")
    assert isinstance(patient_source, JsonBundlePatientSource)
    assert patient_source.path == Path("data/repo/patients-data.json")
    assert isinstance(writer, DirectoryOutputWriter)
    assert writer.output_dir == Path("data/output")
    assert captured["phone_format"] is PhoneFormat.INTERNATIONAL

    out = capsys.readouterr().out
    assert "Rows processed: 4, updated: 2, unchanged: 1" in out
    summary = json.loads(out[out.index("{") :])
    assert summary == {
        "summary": {
            "totalRows": 4,
            "validUpdated": 2,
            "validUnchanged": 1,
            "invalidFormat": 1,
            "missingPatient": 0,
        },
        "output_dir": "data/output",
    }


def test_sync_with_flags(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli, "sync_whatsapp_numbers", _fake_sync(captured))

    cli.main(
        [
            "sync",
            "--patients",
            str(tmp_path / "patients.json"),
            "--sheet-url",
            "https://sheets.example.test/export.csv",
            "--outdir",
            str(tmp_path / "out"),
            "--phone-format",
            "local0",
        ]
    )

    row_source = captured["row_source"]
    assert isinstance(row_source, HttpSheetSource)
    assert row_source.url == "https://sheets.example.test/export.csv"
    writer = captured["writer"]
    assert isinstance(writer, DirectoryOutputWriter)
    assert writer.output_dir == tmp_path / "out"
    assert captured["phone_format"] is PhoneFormat.NATIONAL


def test_environment_overrides_defaults(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli, "sync_whatsapp_numbers", _fake_sync(captured))
    monkeypatch.setenv("PHONESYNC_PHONE_FORMAT", "national")
    monkeypatch.setenv("PHONESYNC_OUTPUT_DIR", str(tmp_path / "env-out"))
    monkeypatch.setenv("PHONESYNC_NATIONAL_ID_SYSTEM", "urn:nik")

    cli.main(["sync"])

    assert captured["phone_format"] is PhoneFormat.NATIONAL
    assert captured["national_id_system"] == "urn:nik"
    writer = captured["writer"]
    assert isinstance(writer, DirectoryOutputWriter)
    assert writer.output_dir == tmp_path / "env-out"


def test_invalid_phone_format_env_exits_with_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "sync_whatsapp_numbers", _fake_sync({}))
    monkeypatch.setenv("PHONESYNC_PHONE_FORMAT", "morse")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync"])

    assert excinfo.value.code == 2


def test_invalid_phone_format_flag_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sync", "--phone-format", "morse"])

    assert excinfo.value.code == 2


def test_import_without_database_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["import-patients"])

    assert excinfo.value.code == 2


def test_missing_input_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            [
                "sync",
                "--patients",
                str(tmp_path / "missing.json"),
                "--sheet",
                str(tmp_path / "missing.csv"),
                "--outdir",
                str(tmp_path / "out"),
            ]
        )

    assert excinfo.value.code == 1
    assert not (tmp_path / "out").exists()


def test_import_patients_command(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    patients_path = tmp_path / "patients.json"
    patients_path.write_text(
        json.dumps({"patients_before_phone_update": [{"resource": {"id": "p1"}}]}),
        encoding="utf-8",
    )
    database_uri = f"sqlite+pysqlite:///{tmp_path / 'store.sqlite'}"

    cli.main(["import-patients", "--patients", str(patients_path), "--database-uri", database_uri])

    assert "Imported 1 patients" in capsys.readouterr().out
