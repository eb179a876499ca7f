"""CSV change-log parsing and the file-backed sheet source."""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from phonesync.domain.errors import SourceError
from phonesync.domain.model import ChangeRow


@dataclass(frozen=True, slots=True)
class SheetColumns:
    """Header names of the sheet export."""

    observed_date: str = "last_updated_date"
    identifier: str = "nik_identifier"
    display_name: str = "name"
    raw_phone: str = "phone_number"


SHEET_COLUMNS = SheetColumns()


def _cell(cells: list[str], index: int | None) -> str:
    if index is None or index >= len(cells):
        return ""
    return cells[index].strip()


def parse_sheet_csv(text: str, *, columns: SheetColumns = SHEET_COLUMNS) -> list[ChangeRow]:
    """Parse a sheet export into rows, in file order.

    Blank lines are skipped and missing columns yield empty strings.

    Raises:
        SourceError: if the text is not valid CSV.
    """

    header: dict[str, int] | None = None
    rows: list[ChangeRow] = []
    try:
        for cells in csv.reader(io.StringIO(text.removeprefix("\ufeff"))):
            if not any(cell.strip() for cell in cells):
                continue
            if header is None:
                header = {}
                for index, name in enumerate(cells):
                    header.setdefault(name.strip(), index)
                continue
            rows.append(
                ChangeRow(
                    observed_date=_cell(cells, header.get(columns.observed_date)),
                    identifier=_cell(cells, header.get(columns.identifier)),
                    display_name=_cell(cells, header.get(columns.display_name)),
                    raw_phone=_cell(cells, header.get(columns.raw_phone)),
                )
            )
    except csv.Error as exc:
        raise SourceError(f"Malformed change-log CSV: {exc}") from exc
    return rows


@dataclass(slots=True)
class CsvSheetSource:
    path: Path
    columns: SheetColumns = field(default=SHEET_COLUMNS)
    encoding: str = "utf-8"

    def load_rows(self) -> list[ChangeRow]:
        try:
            text = Path(self.path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceError(
                f"Cannot read change-log {self.path}: {exc}", location=str(self.path)
            ) from exc
        return parse_sheet_csv(text, columns=self.columns)


if TYPE_CHECKING:
    from phonesync.domain.ports.sources import ChangeRowSource

    _source_check: ChangeRowSource = CsvSheetSource(Path("sheet.csv"))
