"""Extract worksheet names and header rows from a workbook."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import List, Tuple

from xlsxmerge_io.workbook import open_workbook

from .models import WorkbookSchema, WorksheetSchema

LOGGER = logging.getLogger(__name__)


def _header_text(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value).strip()


def _read_headers(worksheet) -> Tuple[str, ...]:
    first_row = next(worksheet.iter_rows(min_row=1, max_row=1, values_only=True), None)
    headers: List[str] = []
    for value in first_row or ():
        if value is None or value == "":
            continue
        headers.append(_header_text(value))
    return tuple(headers)


def read_workbook_schema(path: str | Path) -> WorkbookSchema:
    """Read every worksheet name and its row-1 headers, in workbook order.

    Empty worksheets yield an empty header tuple.

    Raises:
        FileAccessError: When the workbook cannot be opened or parsed. No
            partial schema is returned.
    """

    source = Path(path)
    with open_workbook(source) as workbook:
        sheets = [
            WorksheetSchema(name=worksheet.title, headers=_read_headers(worksheet))
            for worksheet in workbook.worksheets
        ]
    LOGGER.debug("Read schema of %s: %s", source.name, [sheet.name for sheet in sheets])
    return WorkbookSchema(source, sheets)
