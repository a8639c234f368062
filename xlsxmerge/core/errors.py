"""Custom exceptions used across xlsxmerge."""

from __future__ import annotations

from pathlib import Path


class XlsxMergeError(Exception):
    """Base error for the application."""


class ConfigError(XlsxMergeError):
    """Configuration related error."""


class FileAccessError(XlsxMergeError):
    """Raised when a workbook cannot be opened or parsed."""

    def __init__(self, path: str | Path, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot read workbook '{self.path.name}': {cause}")


class MergeError(XlsxMergeError):
    """Raised when copying rows or saving the merged workbook fails."""

    def __init__(self, path: str | Path, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Merge failed on '{self.path}': {cause}")


class OutputExistsError(XlsxMergeError):
    """Raised when the output file exists and the collision policy is abort."""
