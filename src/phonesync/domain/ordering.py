"""Deterministic processing order for change-log rows.

The reconciliation loop replays every row without temporal filtering, so this
ordering alone makes the newest observation for an identifier the one that
sticks.
"""

from __future__ import annotations

import re
from collections import defaultdict
from datetime import date, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from phonesync.domain.model import ChangeRow

log = getLogger(__name__)

OLDEST_DATE = date.min

_OBSERVED_DATE = re.compile(r"([0-9]{2})[/-]([0-9]{2})[/-]([0-9]{4})")


def parse_observed_date(value: str) -> date | None:
    """Parse ``DD-MM-YYYY`` or ``DD/MM/YYYY``; return ``None`` for any other shape.

    Out-of-range days and months roll over into the following (or preceding)
    month and year, so ``31-02-2025`` reads as 2025-03-03 and ``00-01-2025`` as
    2024-12-31.
    """

    match = _OBSERVED_DATE.fullmatch(value.strip())
    if match is None:
        return None
    day, month, year = (int(part) for part in match.groups())
    rolled_year, month_index = divmod(year * 12 + month - 1, 12)
    try:
        return date(rolled_year, month_index + 1, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def observed_sort_key(row: ChangeRow) -> date:
    return parse_observed_date(row.observed_date) or OLDEST_DATE


def order_change_rows(rows: Iterable[ChangeRow]) -> list[ChangeRow]:
    """Return rows oldest first; ties keep their input order.

    Rows with unparsable dates sort as the oldest possible date rather than
    being dropped.
    """

    ordered = sorted(rows, key=observed_sort_key)
    _warn_on_same_day_duplicates(ordered)
    return ordered


def _warn_on_same_day_duplicates(rows: list[ChangeRow]) -> None:
    phones_by_day: dict[tuple[str, date], set[str]] = defaultdict(set)
    for row in rows:
        phones_by_day[(row.identifier, observed_sort_key(row))].add(row.raw_phone.strip())
    for (identifier, day), phones in phones_by_day.items():
        if len(phones) > 1:
            log.warning(
                "Identifier %s has %d differing rows dated %s; input order decides which wins",
                identifier,
                len(phones),
                day.isoformat() if day != OLDEST_DATE else "<unparsable>",
            )


__all__ = ["OLDEST_DATE", "observed_sort_key", "order_change_rows", "parse_observed_date"]
