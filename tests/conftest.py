from __future__ import annotations

import faulthandler
import os
import struct
import sys
import tempfile
import zipfile
from pathlib import Path
from typing import Callable, Dict, List, Sequence

import pytest
from openpyxl import Workbook, load_workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

faulthandler.enable()  # Ensure crashes emit tracebacks.

# Keep settings and logs of the test session out of the user's home directory.
os.environ["XLSXMERGE_HOME"] = tempfile.mkdtemp(prefix="xlsxmerge-tests-")

SheetRows = Sequence[Sequence[object]]
WorkbookFactory = Callable[[str, Dict[str, SheetRows]], Path]


def build_workbook(path: Path, sheets: Dict[str, SheetRows]) -> Path:
    """Write a workbook whose sheets (in dict order) hold the given rows."""

    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(list(row))
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def damage_member(path: Path, member: str = "xl/worksheets/sheet1.xml", span: int = 40) -> Path:
    """Flip bytes near the start of a member's compressed data in place."""

    with zipfile.ZipFile(path) as archive:
        info = archive.getinfo(member)
    data = bytearray(path.read_bytes())
    name_len, extra_len = struct.unpack_from("<HH", data, info.header_offset + 26)
    start = info.header_offset + 30 + name_len + extra_len
    end = start + info.compress_size
    for index in range(start + 2, min(start + 2 + span, end)):
        data[index] ^= 0xFF
    path.write_bytes(data)
    return path


@pytest.fixture
def make_workbook(tmp_path: Path) -> WorkbookFactory:
    def _make(name: str, sheets: Dict[str, SheetRows]) -> Path:
        return build_workbook(tmp_path / name, sheets)

    return _make


@pytest.fixture
def damaged_workbook(make_workbook) -> Callable[[str], Path]:
    """Return a factory for workbooks whose first worksheet member is corrupt."""

    def _make(name: str) -> Path:
        rows = [["ID", "Value"]] + [[i, f"row {i}"] for i in range(200)]
        return damage_member(make_workbook(name, {"Data": rows}))

    return _make


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv("XLSXMERGE_HOME", str(home))
    return home


@pytest.fixture
def read_rows() -> Callable[[Path, str], List[tuple]]:
    """Return every row of a saved worksheet as value tuples."""

    def _read(path: Path, sheet: str) -> List[tuple]:
        wb = load_workbook(path)
        try:
            return [tuple(row) for row in wb[sheet].iter_rows(values_only=True)]
        finally:
            wb.close()

    return _read
