"""Value objects flowing through a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import RejectionReason


@dataclass(frozen=True, slots=True)
class ChangeRow:
    """One observed phone-number update from the change-log."""

    observed_date: str
    identifier: str
    display_name: str
    raw_phone: str


@dataclass(frozen=True, slots=True)
class CanonicalPhone:
    """Outcome of normalizing a raw phone string.

    ``value`` is set iff ``is_valid``; ``rejection_reason`` is set iff not.
    ``raw`` keeps the trimmed input for audit output either way.
    """

    raw: str
    value: str | None
    is_valid: bool
    rejection_reason: RejectionReason | None = None

    @classmethod
    def accepted(cls, raw: str, value: str) -> CanonicalPhone:
        return cls(raw=raw, value=value, is_valid=True)

    @classmethod
    def rejected(cls, raw: str, reason: RejectionReason) -> CanonicalPhone:
        return cls(raw=raw, value=None, is_valid=False, rejection_reason=reason)
