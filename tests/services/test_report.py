"""Tests for merge reports."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from xlsxmerge.services.merge import merge_workbooks
from xlsxmerge.services.merge.report import contributions_frame, generate_report


def test_generate_report_writes_markdown_and_csv(make_workbook, tmp_path: Path) -> None:
    a = make_workbook("a.xlsx", {"Main": [["ID"], [1], [2]], "Notes": [["Text"], ["hi"]]})
    b = make_workbook("b.xlsx", {"Main": [["ID"], [3]]})
    summary = merge_workbooks([a, b], tmp_path / "merged.xlsx")

    report_path, csv_path = generate_report(tmp_path / "reports", summary)

    assert report_path.name == "merged_report.md"
    text = report_path.read_text(encoding="utf-8")
    assert "- Rows written: 6" in text
    assert "**Main**: 4 rows" in text
    assert "Not present in: b.xlsx" in text

    frame = pd.read_csv(csv_path)
    assert frame.columns.tolist() == ["sheet", "file", "rows_copied"]
    assert frame.to_dict("records") == [
        {"sheet": "Main", "file": "a.xlsx", "rows_copied": 3},
        {"sheet": "Main", "file": "b.xlsx", "rows_copied": 1},
        {"sheet": "Notes", "file": "a.xlsx", "rows_copied": 2},
        {"sheet": "Notes", "file": "b.xlsx", "rows_copied": 0},
    ]


def test_contributions_frame_for_single_file(make_workbook, tmp_path: Path) -> None:
    a = make_workbook("only.xlsx", {"S": [["h"], [1]]})
    summary = merge_workbooks([a], tmp_path / "merged.xlsx")

    frame = contributions_frame(summary)

    assert len(frame) == 1
    assert frame.iloc[0]["rows_copied"] == 2
