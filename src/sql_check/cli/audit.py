"""The ``sql-check`` command: scan a tree, audit its SQL, report issues."""

from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape

from ..api import run_audit
from ..exceptions import SqlCheckError
from ..formatters import REPORTERS, get_reporter
from ..logging_config import setup_logging
from ..models import Severity
from . import app
from ._common import console, resolve_config

EXIT_ERROR = 1
EXIT_FATAL_ISSUES = 2


@app.command()
def main(
    src: Path = typer.Argument(
        Path("."),
        help="Source directory to scan",
    ),
    schema: Optional[Path] = typer.Option(
        None,
        "-S",
        "--schema",
        help="DDL file with CREATE TABLE statements",
        dir_okay=False,
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "-e",
        "--exclude",
        help="Name or glob to skip (repeatable, added to the defaults)",
    ),
    ext: Optional[List[str]] = typer.Option(
        None,
        "-x",
        "--ext",
        help="File extension to scan (repeatable, replaces the defaults)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Concurrent extraction workers (default: 10)",
        min=1,
    ),
    pagination_threshold: Optional[int] = typer.Option(
        None,
        "--pagination-threshold",
        help="Report OFFSET values above this (default: 5000)",
        min=0,
    ),
    dialect: Optional[str] = typer.Option(
        None,
        "--dialect",
        help="SQL dialect used for parsing (default: mysql)",
    ),
    output_format: str = typer.Option(
        "console",
        "-f",
        "--format",
        help="Output format",
        click_type=click.Choice(list(REPORTERS), case_sensitive=False),
    ),
    out: Optional[Path] = typer.Option(
        None,
        "-o",
        "--out",
        help="Write the json report to this file instead of stdout",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable DEBUG logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    fail_on_fatal: bool = typer.Option(
        False,
        "--fail-on-fatal",
        help=f"Exit {EXIT_FATAL_ISSUES} if any FATAL issue is reported",
    ),
):
    """
    Scan source code for embedded SQL and audit it against a schema.

    [bold cyan]Examples:[/bold cyan]

      sql-check ./src --schema db/schema.sql

      sql-check . -x go -x py --exclude testdata

      sql-check . -S schema.sql --format json --out report.json --fail-on-fatal
    """
    logger = setup_logging(
        verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None
    )

    try:
        settings = resolve_config(
            config=config,
            schema=schema,
            exclude=exclude,
            ext=ext,
            workers=workers,
            pagination_threshold=pagination_threshold,
            dialect=dialect,
            verbose=verbose,
            quiet=quiet,
        )
        logger.info(
            f"Config: src={src} schema={settings.schema_path or '-'} "
            f"extensions={','.join(settings.extensions)} workers={settings.workers} "
            f"threshold={settings.deep_pagination_threshold}"
        )

        reporter = get_reporter(output_format.lower(), out)
        run = run_audit(src, settings)
        reporter.report(run.issues, run.summary())

    except typer.Exit:
        raise

    except SqlCheckError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_ERROR)

    except KeyboardInterrupt:
        logger.info("Audit interrupted by user")
        console.print("\n[yellow]Audit interrupted[/yellow]")
        raise typer.Exit(130)

    if run.walk_error is not None:
        console.print(f"[yellow]Warning:[/yellow] scan stopped early: {escape(str(run.walk_error))}")

    if fail_on_fatal and run.has_fatal:
        console.print(
            f"[red]--fail-on-fatal:[/red] {run.count(Severity.FATAL)} FATAL issue(s) detected"
        )
        raise typer.Exit(EXIT_FATAL_ISSUES)
