"""Excel input helpers."""

# Module responsibilities:
# - Provide a thin wrapper around pandas.read_excel for previewing worksheets.
# - Emit structured logs for traceability.

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import pandas as pd

from xlsxmerge.core.errors import FileAccessError

from .utils.log import get_logger

logger = get_logger("excel_reader")

SheetType = Union[str, int, None]


def read_table(
    path: Path,
    sheet: SheetType = None,
    nrows: Optional[int] = None,
) -> pd.DataFrame:
    """Load a DataFrame from one worksheet of an Excel workbook.

    Args:
        path: Path to the workbook.
        sheet: Sheet name or index; defaults to the first sheet.
        nrows: Optional number of data rows to read.

    Returns:
        DataFrame whose columns come from the header row.

    Raises:
        FileAccessError: When the workbook does not exist.
        ValueError: When pandas fails to parse the requested sheet.
    """

    if not path.exists():
        raise FileAccessError(path, "file not found")

    sheet_name = 0 if sheet is None else sheet
    logger.info("Reading Excel workbook %s (sheet=%s)", path, sheet_name)

    try:
        df = pd.read_excel(path, sheet_name=sheet_name, nrows=nrows, engine="openpyxl")
    except ValueError as exc:
        logger.error("Failed to read Excel workbook %s: %s", path, exc)
        raise

    logger.info("Excel workbook loaded: %s rows, columns=%s", len(df.index), df.columns.tolist())
    return df
