from __future__ import annotations

import json
from typing import TYPE_CHECKING

from phonesync.adapters.bundle import (
    PATIENTS_FILENAME,
    REJECTIONS_FILENAME,
    REPORT_FILENAME,
    DirectoryOutputWriter,
    parse_patient_bundle,
)
from phonesync.domain.model import RejectedRow, RunStatistics
from tests.helpers.patients import fixed_stamper, make_patient

if TYPE_CHECKING:
    from pathlib import Path


def _stats(*rejected: RejectedRow) -> RunStatistics:
    return RunStatistics(
        total_rows=3 + len(rejected),
        updated=2,
        unchanged=1,
        invalid_format=sum(1 for item in rejected if item.reason != "missing_patient"),
        missing_patient=sum(1 for item in rejected if item.reason == "missing_patient"),
        rejected_rows=list(rejected),
    )


def test_writes_bundle_and_report(tmp_path: Path) -> None:
    patient = make_patient("p1", "3171044203920001")
    patient.apply_mobile_phone("+6281234567890", stamper=fixed_stamper())
    out = tmp_path / "nested" / "output"

    DirectoryOutputWriter(out).write([patient, make_patient("p2", "2")], _stats())

    bundle = json.loads((out / PATIENTS_FILENAME).read_text(encoding="utf-8"))
    resources = [entry["resource"] for entry in bundle["patients_after_phone_update"]]
    assert [item["id"] for item in resources] == ["p1", "p2"]
    assert resources[0]["meta"]["versionId"] == "v002"
    assert resources[0]["telecom"] == [
        {"system": "phone", "use": "mobile", "value": "+6281234567890", "rank": 1}
    ]
    assert "telecom" not in resources[1]

    report = json.loads((out / REPORT_FILENAME).read_text(encoding="utf-8"))
    assert report == {
        "totalRows": 3,
        "validUpdated": 2,
        "validUnchanged": 1,
        "invalidFormat": 0,
        "missingPatient": 0,
    }
    assert not (out / REJECTIONS_FILENAME).exists()


def test_written_bundle_uses_after_update_key(tmp_path: Path) -> None:
    DirectoryOutputWriter(tmp_path).write([make_patient("p1", "1")], _stats())

    text = (tmp_path / PATIENTS_FILENAME).read_text(encoding="utf-8")
    reread = text.replace("patients_after_phone_update", "patients_before_phone_update")

    assert [record.id for record in parse_patient_bundle(reread)] == ["p1"]


def test_rejections_audit_is_written_in_row_order(tmp_path: Path) -> None:
    rejected = (
        RejectedRow("1", "62abc123", "non_digit"),
        RejectedRow("9", "081234567890", "missing_patient"),
        RejectedRow("2", "0812, 34", "length"),
    )

    DirectoryOutputWriter(tmp_path).write([], _stats(*rejected))

    lines = (tmp_path / REJECTIONS_FILENAME).read_text(encoding="utf-8").splitlines()
    assert lines == [
        "nik,raw_phone,reason",
        "1,62abc123,non_digit",
        "9,081234567890,missing_patient",
        '2,"0812, 34",length',
    ]


def test_stale_rejections_audit_is_removed(tmp_path: Path) -> None:
    writer = DirectoryOutputWriter(tmp_path)
    writer.write([], _stats(RejectedRow("1", "", "empty")))
    assert (tmp_path / REJECTIONS_FILENAME).exists()

    writer.write([], _stats())

    assert not (tmp_path / REJECTIONS_FILENAME).exists()
