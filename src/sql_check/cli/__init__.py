"""CLI entry point."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="sql-check",
    help="sql-check - Static auditor for SQL embedded in source code",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command to register it
from .audit import main as _main  # noqa: F401, E402

__all__ = ["app", "console", "__version__"]
