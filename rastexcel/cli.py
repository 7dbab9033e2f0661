"""Typer based command line entry points for rast-excel."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer

from rastexcel.config import TimesheetSettings, load_settings
from rastexcel.core.errors import ConfigError, RastExcelError, error_chain
from rastexcel.core.logger import get_logger
from rastexcel.core.pipeline import build_timesheet_pipeline
from rastexcel.domain.calendar import days_in_month, month_start, parse_month
from rastexcel.domain.generator import generate_employees
from rastexcel.domain.models import Employee
from rastexcel.domain.roster import read_roster, write_roster
from rastexcel.sheet.workbook_io import save_workbook, write_bytes_atomic
from rastexcel.template.sample import build_sample_template

app = typer.Typer(help="Fill monthly attendance timesheet templates.")


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

    logging.getLogger().setLevel(level_value)
    logger.setLevel(level_value)


def _parse_month_option(value: Optional[str]) -> date:
    if value is None:
        return month_start()
    try:
        return parse_month(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--month") from exc


def _load_settings_or_exit(config: Optional[Path]) -> TimesheetSettings:
    try:
        return load_settings(config)
    except ConfigError as exc:
        typer.secho(f"Unable to load settings: {error_chain(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc


def _employees_for(
    settings: TimesheetSettings,
    month: date,
    roster: Optional[Path],
    count: Optional[int],
    seed: Optional[int],
) -> list[Employee]:
    if roster is not None:
        return read_roster(roster, days_in_month(month))
    return generate_employees(
        settings.employee_count if count is None else count,
        month,
        symbols=settings.attendance_symbols,
        positions=settings.job_positions,
        seed=seed,
    )


@app.command("fill")
def cli_fill(
    input_path: Path = typer.Option(
        ...,
        "--input",
        "-i",
        help="Template workbook",
        exists=True,
        readable=True,
        resolve_path=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(..., "--output", "-o", help="Result workbook", resolve_path=True),
    config: Optional[Path] = typer.Option(None, "--config", help="Settings YAML (bundled defaults when omitted)"),
    roster: Optional[Path] = typer.Option(
        None,
        "--employees",
        help="Employee roster (.xlsx/.csv); random employees when omitted",
        exists=True,
        readable=True,
        resolve_path=True,
        dir_okay=False,
    ),
    count: Optional[int] = typer.Option(None, "--count", min=0, help="Number of generated employees"),
    month: Optional[str] = typer.Option(None, "--month", help="Reported month as YYYY-MM (default: current)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for generated employees"),
) -> None:
    """Fill a template: days, legend, employee rows, summaries and merges."""

    logger = get_logger()
    reported = _parse_month_option(month)
    settings = _load_settings_or_exit(config)

    try:
        employees = _employees_for(settings, reported, roster, count, seed)
        pipeline = build_timesheet_pipeline(settings, employees, reported, logger=logger)
        data = pipeline.run_file(input_path)
        write_bytes_atomic(data, output)
    except ConfigError as exc:
        typer.secho(f"Invalid configuration: {error_chain(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2) from exc
    except RastExcelError as exc:
        typer.secho(f"Fill failed: {error_chain(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    except Exception as exc:  # noqa: BLE001
        typer.secho(f"Unexpected failure: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"done: {output}")
    logger.info("CLI fill completed: %d employees, output=%s", len(employees), output)


@app.command("sample-template")
def cli_sample_template(
    path: Path = typer.Argument(..., help="Where to write the template", resolve_path=True),
) -> None:
    """Write a demonstration template that uses every placeholder."""

    try:
        save_workbook(build_sample_template(), path)
    except RastExcelError as exc:
        typer.secho(f"Unable to write template: {error_chain(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"template: {path}")


@app.command("roster")
def cli_roster(
    path: Path = typer.Argument(..., help="Where to write the roster workbook", resolve_path=True),
    config: Optional[Path] = typer.Option(None, "--config", help="Settings YAML (bundled defaults when omitted)"),
    count: Optional[int] = typer.Option(None, "--count", min=0, help="Number of generated employees"),
    month: Optional[str] = typer.Option(None, "--month", help="Reported month as YYYY-MM (default: current)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for generated employees"),
) -> None:
    """Write a generated employee roster that ``fill --employees`` accepts."""

    reported = _parse_month_option(month)
    settings = _load_settings_or_exit(config)
    employees = _employees_for(settings, reported, None, count, seed)
    try:
        write_roster(employees, path)
    except RastExcelError as exc:
        typer.secho(f"Unable to write roster: {error_chain(exc)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"roster: {path} ({len(employees)} employees)")


if __name__ == "__main__":
    app()
