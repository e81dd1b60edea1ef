"""Normalized view of a parsed statement.

Rules never branch on sqlglot classes at statement level. They receive a
``Statement`` whose ``kind`` is one of a closed set and whose clauses the
rules care about (target table, WHERE, projections, LIMIT offset) are
already located.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlglot import exp


class StatementKind(str, Enum):
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CREATE_TABLE = "CREATE_TABLE"
    OTHER = "OTHER"


_FILTERABLE = frozenset({StatementKind.SELECT, StatementKind.UPDATE, StatementKind.DELETE})


@dataclass(frozen=True)
class Statement:
    kind: StatementKind
    tree: exp.Expression
    table: Optional[str] = None  # leftmost target table
    where: Optional[exp.Expression] = None  # condition inside WHERE
    projections: tuple[exp.Expression, ...] = ()
    offset: Optional[exp.Expression] = None  # LIMIT o, n / OFFSET o

    @property
    def is_filterable(self) -> bool:
        return self.kind in _FILTERABLE

    @classmethod
    def from_tree(cls, tree: exp.Expression) -> Statement:
        kind = _classify(tree)

        if kind is StatementKind.SELECT:
            return cls(
                kind=kind,
                tree=tree,
                table=_from_table(tree),
                where=_where(tree),
                projections=tuple(tree.expressions),
                offset=_offset(tree),
            )
        if kind in (StatementKind.UPDATE, StatementKind.DELETE):
            table = _table_name(tree.this) or _from_table(tree)
            return cls(kind=kind, tree=tree, table=table, where=_where(tree))
        if kind is StatementKind.INSERT:
            target = tree.this
            if isinstance(target, exp.Schema):
                target = target.this
            return cls(kind=kind, tree=tree, table=_table_name(target))
        return cls(kind=kind, tree=tree)


def _classify(tree: exp.Expression) -> StatementKind:
    if isinstance(tree, exp.Select):
        return StatementKind.SELECT
    if isinstance(tree, exp.Update):
        return StatementKind.UPDATE
    if isinstance(tree, exp.Delete):
        return StatementKind.DELETE
    if isinstance(tree, exp.Insert):
        return StatementKind.INSERT
    if isinstance(tree, exp.Create) and str(tree.args.get("kind") or "").upper() == "TABLE":
        return StatementKind.CREATE_TABLE
    return StatementKind.OTHER


def _table_name(node: Optional[exp.Expression]) -> Optional[str]:
    if isinstance(node, exp.Table) and node.name:
        return node.name
    return None


def _from_table(tree: exp.Expression) -> Optional[str]:
    # Only the leftmost table reference is resolved; joined tables are ignored.
    for child in tree.iter_expressions():
        if isinstance(child, exp.From):
            return _table_name(child.this)
    return None


def _where(tree: exp.Expression) -> Optional[exp.Expression]:
    where = tree.args.get("where")
    if isinstance(where, exp.Where):
        return where.this
    return None


def _offset(tree: exp.Expression) -> Optional[exp.Expression]:
    limit = tree.args.get("limit")
    if isinstance(limit, exp.Limit) and limit.args.get("offset") is not None:
        return limit.args["offset"]
    offset = tree.args.get("offset")
    if isinstance(offset, exp.Offset):
        return offset.expression
    return None
