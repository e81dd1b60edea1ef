"""Rich terminal reporter for sql-check."""

from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import Issue, Severity
from .base import BaseFormatter, severity_counts

_SQL_PREVIEW_CHARS = 80

_SEVERITY_STYLES = {
    Severity.FATAL: "red bold",
    Severity.WARNING: "yellow",
    Severity.SUGGESTION: "blue",
}


def truncate_sql(sql: str, limit: int = _SQL_PREVIEW_CHARS) -> str:
    sql = " ".join(sql.split())
    if len(sql) > limit:
        return sql[:limit] + "..."
    return sql


class ConsoleReporter(BaseFormatter):
    """One block per issue followed by a per-severity summary table."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def report(self, issues: List[Issue], summary: Optional[Dict[str, int]] = None) -> None:
        if not issues:
            self.console.print(Text("✔ No SQL issues found! Great job.", style="green bold"))
            return

        for issue in issues:
            self._print_issue(issue)

        self.console.print()
        self._print_summary(issues, summary)
        self.console.print(Text(f"✘ found {len(issues)} issues.", style="red bold"))

    def format(self, issues: List[Issue], summary: Optional[Dict[str, int]] = None) -> str:
        with self.console.capture() as capture:
            self.report(issues, summary)
        return capture.get()

    def _print_issue(self, issue: Issue) -> None:
        header = Text()
        header.append(f"{issue.location}: ", style="bold")
        header.append(f"[{issue.severity.value}]", style=_SEVERITY_STYLES[issue.severity])
        header.append(f" {issue.message}")
        self.console.print(header)

        self.console.print(Text(f"\tCode: {truncate_sql(issue.segment.sql)}", style="dim"))
        self.console.print(Text(f"\tSuggestion: {issue.suggestion}", style="cyan"))

    def _print_summary(self, issues: List[Issue], summary: Optional[Dict[str, int]]) -> None:
        table = Table(title="Summary", show_header=True, header_style="bold")
        table.add_column("Severity")
        table.add_column("Count", justify="right")

        counts = severity_counts(issues)
        for severity in Severity:
            table.add_row(
                Text(severity.value, style=_SEVERITY_STYLES[severity]),
                str(counts[severity.value.lower()]),
            )

        if summary:
            for key in ("files_scanned", "segments", "parse_failures", "file_errors"):
                if key in summary:
                    table.add_row(Text(key.replace("_", " "), style="dim"), str(summary[key]))

        self.console.print(table)
