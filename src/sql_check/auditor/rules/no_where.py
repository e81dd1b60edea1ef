"""NoWhereRule: UPDATE or DELETE that touches every row."""

from ...models import Issue, IssueType, Severity, SQLSegment
from ...parsing.statements import Statement, StatementKind
from ...schema.models import SchemaCtx
from .base import make_issue


class NoWhereRule:
    name = "no_where_clause"

    def check(self, segment: SQLSegment, statement: Statement, schema: SchemaCtx) -> list[Issue]:
        if statement.where is not None:
            return []

        if statement.kind is StatementKind.UPDATE:
            return [
                make_issue(
                    segment,
                    IssueType.UNSAFE_UPDATE,
                    Severity.FATAL,
                    "UPDATE statement executed without WHERE clause (Full Table Update)",
                    "Add a WHERE clause to limit the scope of the update.",
                )
            ]
        if statement.kind is StatementKind.DELETE:
            return [
                make_issue(
                    segment,
                    IssueType.UNSAFE_DELETE,
                    Severity.FATAL,
                    "DELETE statement executed without WHERE clause (Full Table Delete)",
                    "Add a WHERE clause to limit the scope of the delete.",
                )
            ]
        return []
