"""Change-log sources reading the WhatsApp sheet export."""

from __future__ import annotations

from .csv_source import SHEET_COLUMNS, CsvSheetSource, SheetColumns, parse_sheet_csv
from .http_source import HttpSheetSource

__all__ = [
    "SHEET_COLUMNS",
    "CsvSheetSource",
    "HttpSheetSource",
    "SheetColumns",
    "parse_sheet_csv",
]
