"""Data models shared by the schema validator and the merge engine."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Tuple

from xlsxmerge.core.errors import FileAccessError

ProgressCallback = Callable[[int], None]


@dataclass(frozen=True, slots=True)
class InputFile:
    """A workbook selected for merging."""

    path: Path
    display_name: str
    size_bytes: int = 0

    @classmethod
    def from_path(cls, path: str | Path) -> "InputFile":
        source = Path(path)
        try:
            size = source.stat().st_size
        except OSError as exc:
            raise FileAccessError(source, exc) from exc
        return cls(path=source, display_name=source.name, size_bytes=size)

    @property
    def size_formatted(self) -> str:
        return f"{self.size_bytes // 1024} KB"


@dataclass(frozen=True, slots=True)
class WorksheetSchema:
    """Worksheet name plus the trimmed header values of row 1."""

    name: str
    headers: Tuple[str, ...] = ()


class WorkbookSchema(Mapping[str, WorksheetSchema]):
    """Worksheet schemas keyed by name, in the order the workbook declares them."""

    __slots__ = ("path", "_sheets")

    def __init__(self, path: Path, sheets: Iterable[WorksheetSchema]) -> None:
        self.path = path
        self._sheets: Dict[str, WorksheetSchema] = {}
        for sheet in sheets:
            self._sheets[sheet.name] = sheet

    def __getitem__(self, name: str) -> WorksheetSchema:
        return self._sheets[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sheets)

    def __len__(self) -> int:
        return len(self._sheets)

    @property
    def sheet_names(self) -> Tuple[str, ...]:
        return tuple(self._sheets)

    def __repr__(self) -> str:
        return f"WorkbookSchema(path={str(self.path)!r}, sheets={list(self._sheets.values())!r})"


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Result of comparing the structure of several workbooks."""

    is_valid: bool
    message: str = ""

    @classmethod
    def valid(cls) -> "ValidationOutcome":
        return cls(is_valid=True, message="Validation passed")

    @classmethod
    def invalid(cls, reason: str) -> "ValidationOutcome":
        return cls(is_valid=False, message=reason)


@dataclass(slots=True)
class SheetSummary:
    """Rows written to one output worksheet and where they came from."""

    name: str
    rows_written: int = 0
    # (source path, rows copied) in input order; the same file may appear twice.
    contributions: List[Tuple[str, int]] = field(default_factory=list)
    missing_in: List[str] = field(default_factory=list)


@dataclass(slots=True)
class MergeSummary:
    """Outcome of one merge call."""

    output_path: Path
    input_paths: List[Path]
    sheets: List[SheetSummary] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return sum(sheet.rows_written for sheet in self.sheets)


__all__ = [
    "InputFile",
    "MergeSummary",
    "ProgressCallback",
    "SheetSummary",
    "ValidationOutcome",
    "WorkbookSchema",
    "WorksheetSchema",
]
