"""Unit tests for Excel I/O utilities."""

# Module responsibilities:
# - Validate worksheet previews through pandas.
# - Assert workbook access errors are reported with the offending path.

from __future__ import annotations

from pathlib import Path

import pytest
from openpyxl import Workbook

from xlsxmerge.core.errors import FileAccessError
from xlsxmerge_io.excel_reader import read_table
from xlsxmerge_io.workbook import atomic_save, find_worksheet, open_workbook


def test_read_table_limits_rows(make_workbook) -> None:
    path = make_workbook("book.xlsx", {"Data": [["ID", "Value"], [1, 10], [2, 20], [3, 30]]})

    frame = read_table(path, nrows=2)

    assert frame.columns.tolist() == ["ID", "Value"]
    assert frame["Value"].tolist() == [10, 20]


def test_read_table_selects_sheet_by_name(make_workbook) -> None:
    path = make_workbook("book.xlsx", {"First": [["a"], [1]], "Second": [["b"], [2]]})

    frame = read_table(path, sheet="Second")

    assert frame.to_dict("records") == [{"b": 2}]


def test_read_table_unknown_sheet(make_workbook) -> None:
    path = make_workbook("book.xlsx", {"Data": [["ID"]]})

    with pytest.raises(ValueError):
        read_table(path, sheet="Missing")


def test_read_table_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileAccessError) as excinfo:
        read_table(tmp_path / "absent.xlsx")

    assert excinfo.value.path == tmp_path / "absent.xlsx"


def test_open_workbook_wraps_corrupt_file(tmp_path: Path) -> None:
    broken = tmp_path / "broken.xlsx"
    broken.write_bytes(b"not a zip archive")

    with pytest.raises(FileAccessError) as excinfo:
        with open_workbook(broken):
            pass

    assert "broken.xlsx" in str(excinfo.value)


def test_find_worksheet_matches_exact_title(make_workbook) -> None:
    path = make_workbook("book.xlsx", {"Data": [["ID"]]})

    with open_workbook(path) as workbook:
        assert find_worksheet(workbook, "Data") is not None
        assert find_worksheet(workbook, "data") is None


def test_atomic_save_leaves_no_temp_file(tmp_path: Path) -> None:
    workbook = Workbook()
    target = tmp_path / "nested" / "out.xlsx"

    atomic_save(workbook, target)

    assert target.exists()
    assert list(target.parent.glob("*.tmp")) == []
