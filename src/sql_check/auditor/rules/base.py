"""Protocol shared by all audit rules."""

from typing import Protocol

from ...models import Issue, IssueType, Severity, SQLSegment
from ...parsing.statements import Statement
from ...schema.models import SchemaCtx


class Rule(Protocol):
    """Rules read the parsed statement and the schema (NEVER mutate them) and return issues."""

    name: str

    def check(
        self, segment: SQLSegment, statement: Statement, schema: SchemaCtx
    ) -> list[Issue]: ...


def make_issue(
    segment: SQLSegment,
    issue_type: IssueType,
    severity: Severity,
    message: str,
    suggestion: str,
) -> Issue:
    return Issue(
        issue_type=issue_type,
        severity=severity,
        message=message,
        suggestion=suggestion,
        segment=segment,
    )
