"""Domain model exports."""

from __future__ import annotations

from .enums import ContactSystem, ContactUse, PhoneFormat, RejectionReason
from .patient import (
    MOBILE_RANK,
    NATIONAL_ID_SYSTEM,
    ContactPoint,
    Identifier,
    PatientRecord,
    RecordMetadata,
)
from .rows import CanonicalPhone, ChangeRow
from .statistics import RejectedRow, RunStatistics

__all__ = [
    "MOBILE_RANK",
    "NATIONAL_ID_SYSTEM",
    "CanonicalPhone",
    "ChangeRow",
    "ContactPoint",
    "ContactSystem",
    "ContactUse",
    "Identifier",
    "PatientRecord",
    "PhoneFormat",
    "RecordMetadata",
    "RejectedRow",
    "RejectionReason",
    "RunStatistics",
]
