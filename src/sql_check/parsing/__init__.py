"""SQL parsing: sqlglot adapter, statement view and expression visitor."""

from .parser import DEFAULT_DIALECT, SQLParser
from .statements import Statement, StatementKind
from .visitor import ExpressionVisitor

__all__ = ["SQLParser", "DEFAULT_DIALECT", "Statement", "StatementKind", "ExpressionVisitor"]
