"""Public API for the merge service: validate, then merge."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from .engine import MergeOptions, merge_workbooks
from .models import InputFile, MergeSummary, ProgressCallback, ValidationOutcome
from .validator import validate_schema

LOGGER = logging.getLogger(__name__)


class MergeOutcome(BaseModel):
    """Terminal result of one merge request."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: Literal["merged", "rejected"]
    message: str
    output_path: Optional[str] = None
    summary: Optional[MergeSummary] = None

    @property
    def merged(self) -> bool:
        return self.status == "merged"


def run_merge(
    files: Sequence[InputFile],
    output_path: str | Path,
    progress: Optional[ProgressCallback] = None,
    *,
    options: Optional[MergeOptions] = None,
) -> MergeOutcome:
    """Validate ``files`` and, when they conform, merge them into ``output_path``.

    A schema mismatch is returned as a ``rejected`` outcome and nothing is
    written. ``MergeError`` from the merge step propagates to the caller.
    """

    if not files:
        raise ValueError("no input files provided")

    validation: ValidationOutcome = validate_schema(files)
    if not validation.is_valid:
        LOGGER.warning("Merge rejected: %s", validation.message)
        return MergeOutcome(status="rejected", message=validation.message)

    summary = merge_workbooks(
        [item.path for item in files],
        output_path,
        progress,
        options=options,
    )
    return MergeOutcome(
        status="merged",
        message=f"File saved to {summary.output_path}",
        output_path=str(summary.output_path),
        summary=summary,
    )
