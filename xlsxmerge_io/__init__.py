"""`xlsxmerge_io` top-level package exports the workbook IO helpers."""

# Module responsibilities:
# - Re-export scoped workbook access, atomic save and preview reading so consumers have a stable API surface.

from __future__ import annotations

from .excel_reader import read_table
from .utils.paths import auto_renamed_path, prepare_output_path, resolve_output_path
from .workbook import READ_ERRORS, atomic_save, find_worksheet, open_workbook

__all__ = [
    "READ_ERRORS",
    "atomic_save",
    "auto_renamed_path",
    "find_worksheet",
    "open_workbook",
    "prepare_output_path",
    "read_table",
    "resolve_output_path",
]

__version__ = "0.1.0"
