"""Reporting utilities for finished merges."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from .models import MergeSummary


def contributions_frame(summary: MergeSummary) -> pd.DataFrame:
    """One row per worksheet and source file with the number of rows copied."""

    records = []
    for sheet in summary.sheets:
        for source, rows in sheet.contributions:
            records.append({"sheet": sheet.name, "file": Path(source).name, "rows_copied": rows})
        for source in sheet.missing_in:
            records.append({"sheet": sheet.name, "file": Path(source).name, "rows_copied": 0})
    return pd.DataFrame(records, columns=["sheet", "file", "rows_copied"])


def generate_report(output_dir: Path, summary: MergeSummary) -> tuple[Path, Path]:
    """Generate a Markdown report and a CSV of per-file contributions."""

    output_dir.mkdir(parents=True, exist_ok=True)
    stem = summary.output_path.stem

    csv_path = output_dir / f"{stem}_contributions.csv"
    contributions_frame(summary).to_csv(csv_path, index=False)

    report_path = output_dir / f"{stem}_report.md"
    lines = ["# Merge Report", ""]
    lines.append(f"- Output: `{summary.output_path.name}`")
    lines.append(f"- Input files: {len(summary.input_paths)}")
    lines.append(f"- Worksheets: {len(summary.sheets)}")
    lines.append(f"- Rows written: {summary.total_rows}")
    lines.append("")

    lines.append("## Worksheets")
    for sheet in summary.sheets:
        lines.append(f"- **{sheet.name}**: {sheet.rows_written} rows")
        if sheet.missing_in:
            missing = ", ".join(Path(p).name for p in sheet.missing_in)
            lines.append(f"  - Not present in: {missing}")
    lines.append("")
    lines.append(f"Per-file row counts exported to `{csv_path.name}`.")

    report_path.write_text("\n".join(lines), encoding="utf-8")
    return report_path, csv_path
