"""SelectStarRule: bare ``*`` in a SELECT projection list."""

from sqlglot import exp

from ...models import Issue, IssueType, Severity, SQLSegment
from ...parsing.statements import Statement, StatementKind
from ...schema.models import SchemaCtx
from .base import make_issue


class SelectStarRule:
    name = "select_star"

    def check(self, segment: SQLSegment, statement: Statement, schema: SchemaCtx) -> list[Issue]:
        if statement.kind is not StatementKind.SELECT:
            return []

        # ``t.*`` is a Column wrapping a Star and is not flagged
        return [
            make_issue(
                segment,
                IssueType.SELECT_STAR,
                Severity.SUGGESTION,
                "Avoid using SELECT * in production",
                "List valid columns explicitly to reduce I/O and forward compatibility issues.",
            )
            for projection in statement.projections
            if isinstance(projection, exp.Star)
        ]
