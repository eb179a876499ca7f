"""Indonesian mobile number normalization.

Raw sheet input is reduced to an internal ``+62`` form for validation and
then projected into the configured output format. The branch that first
matches the cleaned input decides how it is read; a committed branch is never
revisited, so ``62`` followed by a short local number is still read as a
country-code prefix. A foreign ``+`` prefix such as ``+1`` matches no branch
and is rejected as ``non_digit``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import Final

from phonesync.domain.model import CanonicalPhone, PhoneFormat, RejectionReason

COUNTRY_CODE: Final[str] = "62"
TRUNK_PREFIX: Final[str] = "0"
INTERNATIONAL_PREFIX: Final[str] = f"+{COUNTRY_CODE}"

log = getLogger(__name__)

# Digits after the leading "+".
MIN_DIGITS: Final[int] = 10
MAX_DIGITS: Final[int] = 15

# Bare numbers without any recognised prefix are assumed to be local mobiles.
LOCAL_MIN_DIGITS: Final[int] = 9
LOCAL_MAX_DIGITS: Final[int] = 13

# Visual separators only; any other stray character surfaces as non_digit.
_SEPARATORS = re.compile(r"[\s\-()./]")
_LEADING_PLUSES = re.compile(r"^\++")
_DIGITS = re.compile(r"[0-9]+")


def _all_digits(value: str) -> bool:
    return _DIGITS.fullmatch(value) is not None


def _clean(raw: str) -> str:
    cleaned = _SEPARATORS.sub("", raw)
    return _LEADING_PLUSES.sub("+", cleaned)


def _to_international(cleaned: str) -> str | RejectionReason:
    if cleaned.startswith(INTERNATIONAL_PREFIX):
        rest = cleaned[1:]
        return f"+{rest}" if _all_digits(rest) else RejectionReason.NON_DIGIT
    if cleaned.startswith(COUNTRY_CODE):
        rest = cleaned[len(COUNTRY_CODE) :]
        return INTERNATIONAL_PREFIX + rest if _all_digits(rest) else RejectionReason.NON_DIGIT
    if cleaned.startswith(TRUNK_PREFIX):
        rest = cleaned[len(TRUNK_PREFIX) :]
        return INTERNATIONAL_PREFIX + rest if _all_digits(rest) else RejectionReason.NON_DIGIT
    if not _all_digits(cleaned):
        return RejectionReason.NON_DIGIT
    if LOCAL_MIN_DIGITS <= len(cleaned) <= LOCAL_MAX_DIGITS:
        return INTERNATIONAL_PREFIX + cleaned
    return RejectionReason.LENGTH


def _project(international: str, output_format: PhoneFormat) -> str:
    if output_format is PhoneFormat.NATIONAL:
        return TRUNK_PREFIX + international[len(INTERNATIONAL_PREFIX) :]
    return international


def normalize(raw_input: str | None, output_format: PhoneFormat) -> CanonicalPhone:
    """Normalize ``raw_input`` into ``output_format`` or explain why it cannot be."""

    raw = (raw_input or "").strip()
    if not raw:
        return CanonicalPhone.rejected(raw, RejectionReason.EMPTY)

    intermediate = _to_international(_clean(raw))
    if isinstance(intermediate, RejectionReason):
        return CanonicalPhone.rejected(raw, intermediate)
    if not intermediate.startswith(INTERNATIONAL_PREFIX):
        return CanonicalPhone.rejected(raw, RejectionReason.BAD_PREFIX)
    if not MIN_DIGITS <= len(intermediate) - 1 <= MAX_DIGITS:
        return CanonicalPhone.rejected(raw, RejectionReason.LENGTH)

    return CanonicalPhone.accepted(raw, _project(intermediate, output_format))


@dataclass(frozen=True, slots=True)
class PhoneNormalizer:
    """Normalizer bound to a single output format."""

    output_format: PhoneFormat = PhoneFormat.INTERNATIONAL

    def normalize(self, raw_input: str | None) -> CanonicalPhone:
        return normalize(raw_input, self.output_format)


def create_default_phone_normalizer(
    output_format: PhoneFormat | str | None = None,
) -> PhoneNormalizer:
    """Build a normalizer, falling back to international for unknown formats."""

    if isinstance(output_format, PhoneFormat):
        return PhoneNormalizer(output_format)
    if output_format:
        try:
            return PhoneNormalizer(PhoneFormat.parse(output_format))
        except ValueError:
            log.warning("Unknown phone format %r, using international", output_format)
    return PhoneNormalizer(PhoneFormat.INTERNATIONAL)


__all__ = [
    "COUNTRY_CODE",
    "MAX_DIGITS",
    "MIN_DIGITS",
    "PhoneNormalizer",
    "create_default_phone_normalizer",
    "normalize",
]
