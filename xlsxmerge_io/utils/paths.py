"""Filesystem helpers for output workbook locations."""

# Module responsibilities:
# - Join the generated file name with the chosen output directory.
# - Resolve collisions with an existing file (overwrite, numbered rename, abort).

from __future__ import annotations

from pathlib import Path
from typing import Optional

from xlsxmerge.core.errors import OutputExistsError

FALLBACK_FILENAME = "merged.xlsx"


def prepare_output_path(filename: str, out_dir: Optional[Path] = None) -> Path:
    """Prepare an output path inside ``out_dir`` (current directory by default).

    Args:
        filename: Desired file name; blank names fall back to ``merged.xlsx``.
        out_dir: Target directory, created when missing.

    Returns:
        Final path of the output workbook.
    """

    target_dir = out_dir or Path.cwd()
    target_dir.mkdir(parents=True, exist_ok=True)
    return target_dir / (filename.strip() or FALLBACK_FILENAME)


def auto_renamed_path(path: Path) -> Path:
    """Return the first ``<stem>_<n><suffix>`` sibling that does not exist yet."""

    counter = 1
    candidate = path
    while candidate.exists():
        candidate = path.with_name(f"{path.stem}_{counter}{path.suffix}")
        counter += 1
    return candidate


def resolve_output_path(path: Path, policy: str = "rename") -> Path:
    """Apply the collision policy to ``path``.

    Args:
        path: Planned output path.
        policy: ``overwrite`` keeps the path, ``rename`` picks a numbered
            sibling, ``abort`` refuses to touch an existing file.

    Returns:
        A path that is safe to create or overwrite.

    Raises:
        OutputExistsError: When the file exists and the policy is ``abort``.
        ValueError: For an unknown policy.
    """

    if policy not in {"overwrite", "rename", "abort"}:
        raise ValueError(f"Unknown collision policy: {policy}")
    if not path.exists() or policy == "overwrite":
        return path
    if policy == "abort":
        raise OutputExistsError(f"Output file already exists: {path}")
    return auto_renamed_path(path)
