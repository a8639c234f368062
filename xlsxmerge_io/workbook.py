"""Scoped workbook access helpers."""

# Module responsibilities:
# - Open workbooks read-only inside a context manager that always releases the handle.
# - Translate openpyxl, zip and XML parse failures into FileAccessError.
# - Save workbooks through a temporary file swap so a failed save leaves no partial file.

from __future__ import annotations

import os
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional, Union
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from xlsxmerge.core.errors import FileAccessError

from .utils.log import get_logger

logger = get_logger("workbook")

PathLike = Union[str, Path]

# Raised by openpyxl while opening or lazily parsing a workbook. Malformed XML
# surfaces as ElementTree/lxml parse errors, both SyntaxError subclasses. A
# damaged deflate stream in an archive member raises zlib.error or EOFError.
READ_ERRORS: tuple[type[Exception], ...] = (
    OSError,
    BadZipFile,
    InvalidFileException,
    KeyError,
    ValueError,
    SyntaxError,
    zlib.error,
    EOFError,
)


@contextmanager
def open_workbook(path: PathLike, *, data_only: bool = True) -> Iterator[Workbook]:
    """Open ``path`` read-only and close it on every exit path.

    Read errors raised while the handle is open are reported as
    ``FileAccessError`` as well, since read-only worksheets parse lazily.
    """

    source = Path(path)
    try:
        workbook = load_workbook(source, read_only=True, data_only=data_only)
    except READ_ERRORS as exc:
        logger.error("Failed to open workbook %s: %s", source, exc)
        raise FileAccessError(source, exc) from exc

    try:
        yield workbook
    except FileAccessError:
        raise
    except READ_ERRORS as exc:
        logger.error("Failed to read workbook %s: %s", source, exc)
        raise FileAccessError(source, exc) from exc
    finally:
        workbook.close()


def find_worksheet(workbook: Workbook, title: str) -> Optional[Any]:
    """Return the worksheet whose title matches exactly, or None."""

    for worksheet in workbook.worksheets:
        if worksheet.title == title:
            if hasattr(worksheet, "reset_dimensions"):
                # Some writers declare a wrong dimension; force a full scan.
                worksheet.reset_dimensions()
            return worksheet
    return None


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def atomic_save(workbook: Workbook, path: PathLike) -> Path:
    """Save ``workbook`` to ``path`` through a temporary sibling file."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = _tmp_path(target)
    try:
        workbook.save(tmp_path)
        os.replace(tmp_path, target)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    return target
