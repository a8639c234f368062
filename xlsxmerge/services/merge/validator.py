"""Structural-consistency checks run before a merge."""

from __future__ import annotations

import logging
from typing import Sequence

from xlsxmerge.core.errors import FileAccessError

from .models import InputFile, ValidationOutcome, WorkbookSchema
from .schema_reader import read_workbook_schema

LOGGER = logging.getLogger(__name__)

HEADER_PREVIEW = 3


def _preview(headers: Sequence[str]) -> str:
    return ", ".join(headers[:HEADER_PREVIEW])


def _compare(
    reference: WorkbookSchema,
    reference_file: InputFile,
    current: WorkbookSchema,
    current_file: InputFile,
) -> ValidationOutcome | None:
    if current.sheet_names != reference.sheet_names:
        return ValidationOutcome.invalid(
            f"File '{current_file.display_name}' has different worksheets than "
            f"'{reference_file.display_name}'.\n"
            "All files must have the same worksheets in the same order."
        )

    for sheet_name, expected in reference.items():
        found = current[sheet_name]
        if found.headers != expected.headers:
            return ValidationOutcome.invalid(
                f"File '{current_file.display_name}', Sheet '{sheet_name}': "
                f"Headers do not match '{reference_file.display_name}'.\n"
                f"Expected: {_preview(expected.headers)}...\n"
                f"Found: {_preview(found.headers)}..."
            )
    return None


def validate_schema(files: Sequence[InputFile]) -> ValidationOutcome:
    """Check that every file matches the worksheet layout of the first one.

    Zero or one file is always valid. Otherwise the first mismatch wins:
    worksheet names must match in count, name and order, then every
    worksheet's header row must match value by value (case-sensitive).
    Unreadable files are reported as invalid rather than raised.
    """

    if len(files) < 2:
        return ValidationOutcome.valid()

    reference_file = files[0]
    LOGGER.info("Validating %s files against %s", len(files), reference_file.display_name)
    try:
        reference = read_workbook_schema(reference_file.path)
        for current_file in files[1:]:
            current = read_workbook_schema(current_file.path)
            outcome = _compare(reference, reference_file, current, current_file)
            if outcome is not None:
                LOGGER.warning("Schema mismatch: %s", outcome.message)
                return outcome
    except FileAccessError as exc:
        LOGGER.warning("Validation aborted on unreadable file %s: %s", exc.path, exc.cause)
        return ValidationOutcome.invalid(f"Validation failed due to file error: {exc}")

    LOGGER.info("All %s files share the same structure", len(files))
    return ValidationOutcome.valid()
