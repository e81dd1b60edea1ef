"""ImplicitConversionRule: string column compared with a numeric literal.

``WHERE phone = 13800000000`` on a VARCHAR column makes MySQL cast every
row's value to a number, which disables the index on that column.
"""

from sqlglot import exp

from ...models import Issue, IssueType, Severity, SQLSegment
from ...parsing.statements import Statement, StatementKind
from ...parsing.visitor import ExpressionVisitor, is_numeric_literal
from ...schema.models import SchemaCtx, Table
from .base import make_issue

_COMPARISONS = (exp.EQ, exp.NullSafeEQ, exp.NEQ, exp.LT, exp.LTE, exp.GT, exp.GTE)


class _ComparisonFinder(ExpressionVisitor):
    """Collects string columns compared with a number, in tree order."""

    def __init__(self, table: Table) -> None:
        self.table = table
        self.columns: list[str] = []

    def visit_Binary(self, node: exp.Binary) -> None:
        if isinstance(node, _COMPARISONS):
            self._check(node.left, node.right)
            self._check(node.right, node.left)
        self.generic_visit(node)

    def _check(self, side: exp.Expression, other: exp.Expression) -> None:
        if isinstance(other, exp.Neg):
            other = other.this
        if not isinstance(side, exp.Column) or not is_numeric_literal(other):
            return
        column = self.table.get_column(side.name)
        if column is not None and column.is_string:
            self.columns.append(column.name)


class ImplicitConversionRule:
    name = "implicit_conversion"

    def check(self, segment: SQLSegment, statement: Statement, schema: SchemaCtx) -> list[Issue]:
        if statement.kind is not StatementKind.SELECT or not statement.table:
            return []

        table = schema.get_table(statement.table)
        if table is None:
            return []

        finder = _ComparisonFinder(table)
        finder.visit(statement.tree)

        return [
            make_issue(
                segment,
                IssueType.IMPLICIT_CONVERSION,
                Severity.WARNING,
                f"String column '{name}' compared with Number.",
                "Quote the number to avoid implicit conversion and index invalidation "
                "(e.g., '123' instead of 123).",
            )
            for name in finder.columns
        ]
