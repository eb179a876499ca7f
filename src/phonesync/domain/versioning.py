"""Record metadata versioning: version-tag bumps and last-modified stamps."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final, Protocol

INITIAL_VERSION_TAG: Final[str] = "v000"
FALLBACK_MARKER: Final[str] = "-updated"

_VERSION_TAG = re.compile(r"v([0-9]+)")


class Clock(Protocol):
    def __call__(self) -> datetime: ...


class FillerSource(Protocol):
    """Supplies the three sub-millisecond digits of a last-modified stamp (0-999)."""

    def __call__(self) -> int: ...


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _random_filler() -> int:
    return random.randrange(1000)  # noqa: S311


def bump_version_tag(tag: str | None) -> str:
    """Return the successor of ``tag``.

    ``v<digits>`` tags increment and keep their zero-padded width (``v010`` ->
    ``v011``); anything else gets the fallback marker appended, with a missing
    tag treated as ``v000``.
    """

    if tag:
        match = _VERSION_TAG.fullmatch(tag)
        if match is not None:
            digits = match.group(1)
            return f"v{int(digits) + 1:0{len(digits)}d}"
    return f"{tag or INITIAL_VERSION_TAG}{FALLBACK_MARKER}"


def format_last_modified(moment: datetime, *, filler: int) -> str:
    """Render ``YYYY-MM-DDTHH:MM:SS.ffffff+HH:MM``.

    The fractional part is the millisecond of ``moment`` followed by ``filler``.
    Naive datetimes are interpreted in the local timezone.
    """

    if not 0 <= filler < 1000:
        raise ValueError(f"Timestamp filler must be within 0-999, got {filler}")
    if moment.tzinfo is None:
        moment = moment.astimezone()
    offset = moment.utcoffset() or timedelta(0)
    offset_minutes = int(offset.total_seconds()) // 60
    sign = "+" if offset_minutes >= 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    millis = moment.microsecond // 1000
    return (
        f"{moment:%Y-%m-%dT%H:%M:%S}.{millis:03d}{filler:03d}"
        f"{sign}{hours:02d}:{minutes:02d}"
    )


@dataclass(frozen=True, slots=True)
class MetadataStamp:
    version_tag: str
    last_modified: str


@dataclass(frozen=True, slots=True)
class MetadataStamper:
    """Computes the metadata written alongside every effective phone change."""

    clock: Clock = _local_now
    filler: FillerSource = _random_filler

    def next_stamp(self, current_tag: str | None) -> MetadataStamp:
        return MetadataStamp(
            version_tag=bump_version_tag(current_tag),
            last_modified=format_last_modified(self.clock(), filler=self.filler()),
        )


__all__ = [
    "FALLBACK_MARKER",
    "INITIAL_VERSION_TAG",
    "Clock",
    "FillerSource",
    "MetadataStamp",
    "MetadataStamper",
    "bump_version_tag",
    "format_last_modified",
]
