"""NegativeQueryRule: predicates the optimizer cannot serve from an index.

Flags ``NOT IN``, ``!=`` / ``<>`` and LIKE patterns that start with a
wildcard, anywhere in the statement.
"""

from sqlglot import exp

from ...models import Issue, IssueType, Severity, SQLSegment
from ...parsing.statements import Statement
from ...parsing.visitor import ExpressionVisitor, string_literal
from ...schema.models import SchemaCtx
from .base import make_issue

_WILDCARDS = ("%", "_")


class _NegativePredicateFinder(ExpressionVisitor):
    def __init__(self, segment: SQLSegment) -> None:
        self.segment = segment
        self.issues: list[Issue] = []

    def visit_Not(self, node: exp.Not) -> None:
        if isinstance(node.this, exp.In):
            self.issues.append(
                make_issue(
                    self.segment,
                    IssueType.NEGATIVE_QUERY,
                    Severity.WARNING,
                    "Avoid using NOT IN",
                    "Use NOT EXISTS or LEFT JOIN ... IS NULL which are often better optimized.",
                )
            )
        self.generic_visit(node)

    def visit_NEQ(self, node: exp.NEQ) -> None:
        self.issues.append(
            make_issue(
                self.segment,
                IssueType.NEGATIVE_QUERY,
                Severity.WARNING,
                "Avoid using != (Not Equal)",
                "Negative comparison often prevents index usage.",
            )
        )
        self.generic_visit(node)

    def visit_Like(self, node: exp.Expression) -> None:
        pattern = string_literal(node.expression)
        if pattern is not None and pattern.startswith(_WILDCARDS):
            self.issues.append(
                make_issue(
                    self.segment,
                    IssueType.LEADING_WILDCARD,
                    Severity.WARNING,
                    "LIKE query with leading wildcard",
                    "Leading wildcards confuse the optimizer and prevent index usage "
                    "(Full Table Scan).",
                )
            )
        self.generic_visit(node)

    visit_ILike = visit_Like


class NegativeQueryRule:
    name = "negative_query"

    def check(self, segment: SQLSegment, statement: Statement, schema: SchemaCtx) -> list[Issue]:
        finder = _NegativePredicateFinder(segment)
        finder.visit(statement.tree)
        return finder.issues
