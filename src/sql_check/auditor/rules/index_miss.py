"""IndexMissRule: WHERE clause that cannot use any index by the leftmost-prefix rule.

A composite index (c1, c2, ...) narrows a lookup only when the query
constrains c1. The rule collects the columns the WHERE clause references
directly and fires when no index of the target table leads with one of them.

A column wrapped in a function call (``LOWER(email) = ...``) cannot use the
index, so it is only collected where it also appears bare. Subqueries have
their own scope and are not walked.
"""

from sqlglot import exp

from ...models import Issue, IssueType, Severity, SQLSegment
from ...parsing.statements import Statement
from ...parsing.visitor import ExpressionVisitor
from ...schema.models import SchemaCtx
from .base import make_issue


class _DirectColumnCollector(ExpressionVisitor):
    def __init__(self) -> None:
        self.columns: list[str] = []

    def visit_Column(self, node: exp.Column) -> None:
        if node.name and node.name not in self.columns:
            self.columns.append(node.name)

    def visit_Func(self, node: exp.Func) -> None:
        pass

    def visit_Subquery(self, node: exp.Subquery) -> None:
        pass

    def visit_Select(self, node: exp.Select) -> None:
        pass


def collect_direct_columns(where: exp.Expression) -> list[str]:
    """Column names used bare in ``where``, in first-seen order."""
    collector = _DirectColumnCollector()
    collector.visit(where)
    return collector.columns


class IndexMissRule:
    name = "index_miss"

    def check(self, segment: SQLSegment, statement: Statement, schema: SchemaCtx) -> list[Issue]:
        if not statement.is_filterable or statement.where is None or not statement.table:
            return []

        table = schema.get_table(statement.table)
        if table is None:
            return []

        used = collect_direct_columns(statement.where)
        if not used:
            return []

        if not table.indexes:
            return [
                make_issue(
                    segment,
                    IssueType.NO_INDEXES_DEFINED,
                    Severity.WARNING,
                    f"Table '{table.name}' has no indexes defined.",
                    "Add indexes to optimize queries.",
                )
            ]

        used_folded = {c.casefold() for c in used}
        if any(index.leading_column.casefold() in used_folded for index in table.indexes):
            return []

        signatures = ", ".join(index.signature for index in table.indexes)
        return [
            make_issue(
                segment,
                IssueType.INDEX_MISS,
                Severity.WARNING,
                f"Query on '{table.name}' does not hit any index prefix. "
                f"WHERE uses [{', '.join(used)}] but available indexes are: {signatures}",
                "Ensure the WHERE clause filters on the leftmost column of an index.",
            )
        ]
