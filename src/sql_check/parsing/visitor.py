"""Visitor over sqlglot expression trees.

Dispatch follows the node class MRO, the same way ``ast.NodeVisitor`` works
by class name: a handler named ``visit_Func`` receives every function call
(``Count``, ``Lower``, ``Cast``, ``Anonymous``...), ``visit_Binary`` every
binary operator, and so on. Nodes without a handler fall through to
``generic_visit``, which descends into all children, so no expression shape
is silently skipped.
"""

from __future__ import annotations

from typing import Any

from sqlglot import exp


class ExpressionVisitor:
    """Depth-first, pre-order walk of an expression tree."""

    def visit(self, node: exp.Expression) -> Any:
        for cls in type(node).__mro__:
            handler = getattr(self, f"visit_{cls.__name__}", None)
            if handler is not None:
                return handler(node)
        return self.generic_visit(node)

    def generic_visit(self, node: exp.Expression) -> None:
        for child in node.iter_expressions():
            self.visit(child)


def literal_int(node: exp.Expression | None) -> int | None:
    """Return the integer value of a numeric literal, else None."""
    if not is_numeric_literal(node):
        return None
    try:
        return int(node.this)
    except (TypeError, ValueError):
        return None


def is_numeric_literal(node: exp.Expression | None) -> bool:
    return isinstance(node, exp.Literal) and not node.is_string


def string_literal(node: exp.Expression | None) -> str | None:
    if isinstance(node, exp.Literal) and node.is_string:
        return node.this
    return None
