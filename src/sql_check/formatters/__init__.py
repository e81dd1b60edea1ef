"""Issue reporters for sql-check."""

from pathlib import Path
from typing import Optional, Union

from ..exceptions import InvalidConfigError
from .base import BaseFormatter, severity_counts
from .json_formatter import JsonReporter
from .rich_formatter import ConsoleReporter, truncate_sql

REPORTERS = ("console", "json")


def get_reporter(name: str, output: Optional[Union[str, Path]] = None) -> BaseFormatter:
    """Get a reporter instance by name.

    Args:
        name: One of "console", "json"
        output: File to write to (json only); stdout when None

    Raises:
        InvalidConfigError: If name is not recognized
    """
    if name == "console":
        return ConsoleReporter()
    if name == "json":
        return JsonReporter(output)
    raise InvalidConfigError("format", name, f"choose from: {', '.join(REPORTERS)}")


__all__ = [
    "BaseFormatter",
    "ConsoleReporter",
    "JsonReporter",
    "get_reporter",
    "severity_counts",
    "truncate_sql",
    "REPORTERS",
]
