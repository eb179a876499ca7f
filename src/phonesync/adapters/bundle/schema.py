"""Pydantic models describing the patient bundle and report files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from phonesync.domain.model import RunStatistics

BEFORE_UPDATE_KEY = "patients_before_phone_update"
AFTER_UPDATE_KEY = "patients_after_phone_update"


class BundleBaseModel(BaseModel):
    # Unknown resource fields are kept and written back verbatim.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def extensions(self) -> dict[str, object]:
        return dict(self.model_extra or {})


class IdentifierPayload(BundleBaseModel):
    system: str | None = None
    value: str | None = None


class TelecomPayload(BundleBaseModel):
    system: str | None = None
    use: str | None = None
    # Numeric values from hand-edited bundles are kept as numbers.
    value: str | int | None = None
    rank: int | None = None


class MetaPayload(BundleBaseModel):
    version_id: str | None = Field(default=None, alias="versionId")
    last_updated: str | None = Field(default=None, alias="lastUpdated")


class PatientResourcePayload(BundleBaseModel):
    resource_type: str = Field(default="Patient", alias="resourceType")
    id: str
    meta: MetaPayload | None = None
    identifier: list[IdentifierPayload] | None = None
    telecom: list[TelecomPayload] | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


class PatientEntry(BundleBaseModel):
    resource: PatientResourcePayload


class PatientBundle(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entries: list[PatientEntry] = Field(alias=BEFORE_UPDATE_KEY)


class RunReport(BaseModel):
    """Flat statistics document (``report.json``)."""

    model_config = ConfigDict(populate_by_name=True)

    total_rows: int = Field(alias="totalRows")
    valid_updated: int = Field(alias="validUpdated")
    valid_unchanged: int = Field(alias="validUnchanged")
    invalid_format: int = Field(alias="invalidFormat")
    missing_patient: int = Field(alias="missingPatient")

    @classmethod
    def from_statistics(cls, stats: RunStatistics) -> RunReport:
        return cls(
            total_rows=stats.total_rows,
            valid_updated=stats.updated,
            valid_unchanged=stats.unchanged,
            invalid_format=stats.invalid_format,
            missing_patient=stats.missing_patient,
        )

    def as_payload(self) -> dict[str, int]:
        return self.model_dump(by_alias=True)
