"""Row-stream merge of structurally identical workbooks."""

from __future__ import annotations

import logging
from copy import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.cell import WriteOnlyCell

from xlsxmerge.core.errors import FileAccessError, MergeError
from xlsxmerge_io.workbook import atomic_save, find_worksheet, open_workbook

from .models import MergeSummary, ProgressCallback, SheetSummary
from .progress import ProgressReporter

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MergeOptions:
    """Knobs for the row copy.

    Attributes:
        copy_styles: Copy font, fill, border, alignment, number format and
            protection of every styled cell.
        data_only: Copy cached formula results instead of formula text.
    """

    copy_styles: bool = True
    data_only: bool = True


def _is_blank(row: Sequence[object]) -> bool:
    return all(getattr(cell, "value", None) is None for cell in row)


def _is_literal_text(cell, value: object) -> bool:
    # Text that merely looks like a formula, e.g. a string cell holding "=x".
    return (
        getattr(cell, "data_type", None) == "s"
        and isinstance(value, str)
        and value.startswith("=")
    )


def _copy_cell(target_ws, cell, copy_styles: bool):
    value = getattr(cell, "value", None)
    literal = _is_literal_text(cell, value)
    styled = copy_styles and getattr(cell, "has_style", False)
    if not literal and not styled:
        return value
    out = WriteOnlyCell(target_ws, value=value)
    if literal:
        # Assigning a value starting with "=" infers a formula.
        out.data_type = "s"
    if not styled:
        return out
    out.font = copy(cell.font)
    out.fill = copy(cell.fill)
    out.border = copy(cell.border)
    out.alignment = copy(cell.alignment)
    out.protection = copy(cell.protection)
    out.number_format = cell.number_format
    return out


def _append_rows(target_ws, rows: Iterable[Sequence[object]], copy_styles: bool) -> int:
    """Append ``rows`` up to the last non-blank one; return how many were written.

    Blank rows between used rows are kept, trailing blank rows are dropped.
    """

    written = 0
    pending_blank = 0
    for row in rows:
        if _is_blank(row):
            pending_blank += 1
            continue
        for _ in range(pending_blank):
            target_ws.append([])
        written += pending_blank
        pending_blank = 0
        target_ws.append([_copy_cell(target_ws, cell, copy_styles) for cell in row])
        written += 1
    return written


def _copy_sheet_from(
    path: Path,
    sheet_name: str,
    target_ws,
    start_row: int,
    options: MergeOptions,
) -> Optional[int]:
    """Copy one file's rows for one worksheet, or None when it lacks the sheet."""

    try:
        with open_workbook(path, data_only=options.data_only) as workbook:
            source_ws = find_worksheet(workbook, sheet_name)
            if source_ws is None:
                return None
            return _append_rows(
                target_ws,
                source_ws.iter_rows(min_row=start_row),
                options.copy_styles,
            )
    except FileAccessError as exc:
        raise MergeError(path, exc.cause) from exc


def _target_sheet_names(path: Path, options: MergeOptions) -> List[str]:
    try:
        with open_workbook(path, data_only=options.data_only) as workbook:
            return [worksheet.title for worksheet in workbook.worksheets]
    except FileAccessError as exc:
        raise MergeError(path, exc.cause) from exc


def merge_workbooks(
    input_paths: Sequence[str | Path],
    output_path: str | Path,
    progress: Optional[ProgressCallback] = None,
    *,
    options: Optional[MergeOptions] = None,
) -> MergeSummary:
    """Concatenate the rows of every input into one workbook at ``output_path``.

    Worksheets and their order come from the first input. Each file is read
    in input order; the first contributes its header row, later files start
    at row 2. A file lacking one of the worksheets is skipped for that sheet.
    Inputs are trusted to have passed ``validate_schema``.

    Args:
        input_paths: Ordered, non-empty list of workbooks.
        output_path: Destination; written once after all rows are assembled.
        progress: Optional callable receiving percentages 0-100.
        options: Copy options, defaults to :class:`MergeOptions`.

    Returns:
        Summary of rows written per worksheet and per source.

    Raises:
        ValueError: When ``input_paths`` is empty.
        MergeError: When an input cannot be read or the output cannot be saved.
    """

    paths = [Path(p) for p in input_paths]
    if not paths:
        raise ValueError("no input files provided")
    target = Path(output_path)
    opts = options or MergeOptions()

    sheet_names = _target_sheet_names(paths[0], opts)
    reporter = ProgressReporter(progress, len(sheet_names) * len(paths))
    summary = MergeSummary(output_path=target, input_paths=paths)

    LOGGER.info(
        "Merging %s files into %s (%s worksheets)", len(paths), target, len(sheet_names)
    )

    output = Workbook(write_only=True)
    for sheet_name in sheet_names:
        target_ws = output.create_sheet(title=sheet_name)
        sheet_summary = SheetSummary(name=sheet_name)
        for index, path in enumerate(paths):
            start_row = 1 if index == 0 else 2
            copied = _copy_sheet_from(path, sheet_name, target_ws, start_row, opts)
            if copied is None:
                LOGGER.debug("Worksheet %r not found in %s, skipped", sheet_name, path.name)
                sheet_summary.missing_in.append(str(path))
            else:
                sheet_summary.contributions.append((str(path), copied))
                sheet_summary.rows_written += copied
            reporter.advance()
        LOGGER.info("Worksheet %r: %s rows written", sheet_name, sheet_summary.rows_written)
        summary.sheets.append(sheet_summary)

    try:
        atomic_save(output, target)
    except (OSError, ValueError) as exc:
        LOGGER.error("Failed to save merged workbook %s: %s", target, exc)
        raise MergeError(target, exc) from exc

    reporter.finish()
    LOGGER.info("Merged workbook saved to %s (%s rows)", target, summary.total_rows)
    return summary
