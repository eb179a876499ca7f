"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class PhoneFormat(StrEnum):
    """Canonical output projection for normalized phone numbers."""

    INTERNATIONAL = "international"
    NATIONAL = "national"

    @classmethod
    def parse(cls, value: str) -> PhoneFormat:
        """Resolve a format name, accepting the legacy ``e164``/``local0`` spellings."""

        key = value.strip().lower()
        resolved = _PHONE_FORMAT_ALIASES.get(key)
        if resolved is None:
            choices = ", ".join(sorted(_PHONE_FORMAT_ALIASES))
            raise ValueError(f"Unknown phone format {value!r} (expected one of: {choices})")
        return resolved


_PHONE_FORMAT_ALIASES: dict[str, PhoneFormat] = {
    "international": PhoneFormat.INTERNATIONAL,
    "e164": PhoneFormat.INTERNATIONAL,
    "national": PhoneFormat.NATIONAL,
    "local0": PhoneFormat.NATIONAL,
}


class RejectionReason(StrEnum):
    EMPTY = "empty"
    NON_DIGIT = "non_digit"
    LENGTH = "length"
    BAD_PREFIX = "bad_prefix"
    # Lookup miss, never produced by the normalizer.
    MISSING_PATIENT = "missing_patient"


class ContactSystem(StrEnum):
    PHONE = "phone"
    FAX = "fax"
    EMAIL = "email"
    PAGER = "pager"
    URL = "url"
    SMS = "sms"
    OTHER = "other"


class ContactUse(StrEnum):
    HOME = "home"
    WORK = "work"
    TEMP = "temp"
    OLD = "old"
    MOBILE = "mobile"
