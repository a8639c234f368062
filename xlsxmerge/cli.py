"""Typer based command line entry points for xlsxmerge."""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import List, Optional

import typer
import yaml

from xlsxmerge.config import MergeSettings, load_settings, reset_settings, save_settings, settings_path
from xlsxmerge.core.errors import ConfigError, FileAccessError, OutputExistsError
from xlsxmerge.core.logger import get_logger
from xlsxmerge.services.merge import (
    InputFile,
    MergeOptions,
    MergeWorker,
    read_workbook_schema,
    validate_schema,
)
from xlsxmerge.services.merge.report import generate_report
from xlsxmerge.services.naming import generate_filename
from xlsxmerge_io.excel_reader import read_table
from xlsxmerge_io.utils.paths import prepare_output_path, resolve_output_path

COLLISION_POLICIES = {"overwrite", "rename", "abort"}

EXIT_MISMATCH = 1
EXIT_FAILURE = 2

app = typer.Typer(help="Merge Excel workbooks that share the same worksheets and headers.")
settings_app = typer.Typer(name="settings", help="Show or reset saved preferences.")
app.add_typer(settings_app, name="settings")


def _validate_on_exists(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.lower()
    if value not in COLLISION_POLICIES:
        raise typer.BadParameter("on-exists must be one of overwrite, rename, abort")
    return value


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logger.setLevel(level_value)


def _fail(message: str, code: int = EXIT_FAILURE) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=code)


def _expand_input_files(patterns: List[str]) -> list[Path]:
    collected: list[Path] = []
    for pattern in patterns:
        expanded = sorted(dict.fromkeys(glob.glob(str(Path(pattern).expanduser()))))
        if not expanded:
            raise typer.BadParameter(f"No files matched pattern: {pattern}")
        for item in expanded:
            path = Path(item)
            if not path.is_file():
                continue
            resolved = path.resolve()
            if resolved not in collected:
                collected.append(resolved)
    if not collected:
        raise typer.BadParameter("No files matched the provided patterns")
    return collected


def _load_inputs(patterns: List[str]) -> list[InputFile]:
    try:
        return [InputFile.from_path(path) for path in _expand_input_files(patterns)]
    except FileAccessError as exc:
        raise _fail(str(exc)) from exc


def _load_settings() -> MergeSettings:
    try:
        return load_settings()
    except ConfigError as exc:
        raise _fail(str(exc)) from exc


def _apply_overrides(settings: MergeSettings, **overrides: object) -> MergeSettings:
    update = {key: value for key, value in overrides.items() if value is not None}
    return settings.model_copy(update=update)


@app.command("validate")
def validate_command(
    files: List[str] = typer.Argument(..., help="Workbook paths or glob patterns, in merge order."),
) -> None:
    """Check that all workbooks share worksheets and header rows."""

    inputs = _load_inputs(files)
    for item in inputs:
        typer.echo(f"{item.display_name} ({item.size_formatted})")
    outcome = validate_schema(inputs)
    if not outcome.is_valid:
        raise _fail(outcome.message, EXIT_MISMATCH)
    typer.secho(f"{outcome.message}: {len(inputs)} file(s) share the same structure.", fg=typer.colors.GREEN)


@app.command("merge")
def merge_command(
    files: List[str] = typer.Argument(..., help="Workbook paths or glob patterns, in merge order."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Explicit output path."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Directory for the generated file name."),
    template: Optional[str] = typer.Option(None, "--template", help="File name template, e.g. merged_%d-%mo-%yyyy."),
    prefix: Optional[str] = typer.Option(None, "--prefix"),
    suffix: Optional[str] = typer.Option(None, "--suffix"),
    replace_spaces: Optional[bool] = typer.Option(None, "--replace-spaces/--keep-spaces"),
    on_exists: Optional[str] = typer.Option(
        None,
        "--on-exists",
        callback=_validate_on_exists,
        help="What to do when the output exists: overwrite, rename or abort.",
    ),
    copy_styles: Optional[bool] = typer.Option(None, "--styles/--no-styles", help="Copy cell styles."),
    report: bool = typer.Option(False, "--report", help="Write a Markdown report and a CSV next to the output."),
    save: bool = typer.Option(False, "--save-settings", help="Remember the naming options for next time."),
) -> None:
    """Validate the workbooks and merge them into one output workbook."""

    settings = _apply_overrides(
        _load_settings(),
        template=template,
        prefix=prefix,
        suffix=suffix,
        replace_spaces=replace_spaces,
        on_exists=on_exists,
        output_dir=str(output_dir) if output_dir else None,
        copy_styles=copy_styles,
    )
    inputs = _load_inputs(files)
    logger = get_logger()

    if output is None:
        filename = generate_filename(
            settings.template,
            settings.prefix,
            settings.suffix,
            settings.replace_spaces,
            len(inputs),
        )
        output = prepare_output_path(filename, settings.resolved_output_dir())

    try:
        target = resolve_output_path(output, settings.on_exists)
    except OutputExistsError as exc:
        raise _fail(str(exc)) from exc
    if target != output:
        typer.secho(f"{output.name} exists, saving as {target.name}", fg=typer.colors.YELLOW, err=True)

    if save:
        try:
            save_settings(settings)
        except ConfigError as exc:
            logger.warning("Settings not saved: %s", exc)

    logger.info("Starting merge of %s files to %s", len(inputs), target)
    worker = MergeWorker(inputs, target, options=MergeOptions(copy_styles=settings.copy_styles))
    worker.start()
    with typer.progressbar(length=100, label="Merging") as bar:
        shown = 0
        for kind, payload in worker.iter_events():
            if kind == "progress":
                bar.update(payload - shown)
                shown = payload
    worker.join()

    if worker.error is not None:
        raise _fail(f"Merge failed: {worker.error}")
    outcome = worker.outcome
    if outcome is None:
        raise _fail("Merge failed: worker stopped without a result")
    if not outcome.merged:
        raise _fail(outcome.message, EXIT_MISMATCH)

    typer.secho(f"Success! File saved to: {outcome.output_path}", fg=typer.colors.GREEN)
    if report and outcome.summary is not None:
        report_path, csv_path = generate_report(target.parent, outcome.summary)
        typer.echo(f"Report: {report_path}")
        typer.echo(f"Contributions: {csv_path}")


@app.command("name")
def name_command(
    count: int = typer.Option(0, "--count", help="Number of files for the %count placeholder."),
    template: Optional[str] = typer.Option(None, "--template"),
    prefix: Optional[str] = typer.Option(None, "--prefix"),
    suffix: Optional[str] = typer.Option(None, "--suffix"),
    replace_spaces: Optional[bool] = typer.Option(None, "--replace-spaces/--keep-spaces"),
) -> None:
    """Preview the output file name produced by the current template."""

    settings = _apply_overrides(
        _load_settings(),
        template=template,
        prefix=prefix,
        suffix=suffix,
        replace_spaces=replace_spaces,
    )
    typer.echo(
        generate_filename(settings.template, settings.prefix, settings.suffix, settings.replace_spaces, count)
    )


@app.command("inspect")
def inspect_command(
    file: Path = typer.Argument(..., help="Workbook to describe."),
) -> None:
    """List the worksheets of a workbook with their header rows."""

    try:
        schema = read_workbook_schema(file)
    except FileAccessError as exc:
        raise _fail(str(exc)) from exc
    for sheet in schema.values():
        headers = ", ".join(sheet.headers) if sheet.headers else "(no headers)"
        typer.echo(f"{sheet.name}: {headers}")


@app.command("preview")
def preview_command(
    file: Path = typer.Argument(..., help="Workbook to preview."),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Worksheet name; first sheet by default."),
    rows: int = typer.Option(5, "--rows", min=1, help="Number of data rows to show."),
) -> None:
    """Print the first rows of a worksheet."""

    try:
        frame = read_table(file, sheet=sheet, nrows=rows)
    except (FileAccessError, ValueError) as exc:
        raise _fail(str(exc)) from exc
    typer.echo(frame.to_string(index=False))


@settings_app.command("show")
def settings_show() -> None:
    """Print the saved settings."""

    settings = _load_settings()
    typer.echo(f"# {settings_path()}")
    typer.echo(yaml.safe_dump(settings.model_dump(), sort_keys=False, allow_unicode=True).rstrip())


@settings_app.command("reset")
def settings_reset() -> None:
    """Restore default settings."""

    try:
        reset_settings()
    except ConfigError as exc:
        raise _fail(str(exc)) from exc
    typer.secho("Settings restored to defaults.", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
