# src/joblens/cli.py
"""
Command-line interface for the job analytics engine.

This module provides CLI commands to:
- Build the full analytics report for a CSV export of your jobs sheet
- Show the header row of that export (to check column names)
"""

from dotenv import load_dotenv
load_dotenv(override=True)  # automatically looks for a .env file in the project root

import json
import logging
import typer
import datetime as dt

from joblens.config import AnalyticsSettings
from joblens.io.table import read_table
from joblens.pipeline.report import build_report
from joblens.pipeline.titles import FuzzyComparator

# Typer app instance for CLI commands
app = typer.Typer(help="Job listing analytics")

SECTIONS = ("summary", "companies", "locations", "job_types", "sources", "titles",
            "experience", "skills", "salary", "trends")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_now(value: str | None) -> dt.datetime | None:
    if not value:
        return None
    try:
        return dt.datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"--now must be an ISO date/time, got {value!r}")


@app.command()
def analyze(
    path: str,
    section: str = typer.Option("", "--section", help=f"Only print one section: {', '.join(SECTIONS)}"),
    fuzzy_titles: bool = typer.Option(False, "--fuzzy-titles", help="Group titles with RapidFuzz instead of word overlap"),
    title_threshold: int = typer.Option(85, "--title-threshold", help="Fuzzy title match threshold 0-100"),
    now: str = typer.Option("", "--now", help="Reference time for 'recent' postings (ISO, default: now)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Read CSV → normalize rows → aggregate → print the report as JSON.
    """
    _setup_logging(verbose)
    if section and section not in SECTIONS:
        raise typer.BadParameter(f"Unknown section {section!r}; pick one of: {', '.join(SECTIONS)}")

    try:
        table = read_table(path)
    except FileNotFoundError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    if not table["rows"]:
        typer.echo(f"{path}: no data rows; report will be empty.", err=True)

    try:
        settings = AnalyticsSettings.from_env()
    except ValueError as e:
        typer.echo(f"Bad settings in environment: {e}", err=True)
        raise typer.Exit(code=2)

    comparator = FuzzyComparator(title_threshold) if fuzzy_titles else None
    report = build_report(
        table["headers"],
        table["rows"],
        settings,
        now=_parse_now(now),
        title_comparator=comparator,
    )

    out = report[section] if section else report
    typer.echo(json.dumps(out, indent=2, ensure_ascii=False))


@app.command()
def headers(path: str):
    """
    Debug: show the header row of the export so we can confirm column names.
    """
    try:
        table = read_table(path)
    except FileNotFoundError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(table["headers"], indent=2))


if __name__ == "__main__":
    app()
