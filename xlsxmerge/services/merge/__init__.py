"""Workbook merge service package."""

from .api import MergeOutcome, run_merge
from .engine import MergeOptions, merge_workbooks
from .models import (
    InputFile,
    MergeSummary,
    SheetSummary,
    ValidationOutcome,
    WorkbookSchema,
    WorksheetSchema,
)
from .schema_reader import read_workbook_schema
from .validator import validate_schema
from .worker import MergeWorker

__all__ = [
    "InputFile",
    "MergeOptions",
    "MergeOutcome",
    "MergeSummary",
    "MergeWorker",
    "SheetSummary",
    "ValidationOutcome",
    "WorkbookSchema",
    "WorksheetSchema",
    "merge_workbooks",
    "read_workbook_schema",
    "run_merge",
    "validate_schema",
]
