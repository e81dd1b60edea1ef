"""Build a ``SchemaCtx`` from a DDL file.

Only CREATE TABLE statements contribute; every other statement in the file
(SET, DROP, INSERT seed data...) is ignored. Index column order is kept
exactly as declared because rules rely on the leftmost column.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional, Union

from sqlglot import exp

from ..exceptions import FileSystemError, ParseError, SchemaLoadError
from ..file_ops import safe_read_text
from ..logging_config import get_logger
from ..parsing.parser import SQLParser
from ..parsing.statements import Statement, StatementKind
from .models import Column, Index, SchemaCtx, Table

logger = get_logger(__name__)

PRIMARY_INDEX_NAME = "PRIMARY"


def load_schema(path: Union[str, Path], parser: Optional[SQLParser] = None) -> SchemaCtx:
    """Read and parse a DDL file.

    Raises:
        SchemaLoadError: If the file is unreadable, unparsable, or declares an
            index over columns the table does not have.
    """
    path = Path(path)
    try:
        ddl = safe_read_text(path)
    except FileSystemError as e:
        raise SchemaLoadError(path, e.reason) from e

    schema = load_schema_from_string(ddl, parser=parser, source=path)
    logger.info(f"Schema loaded from {path}: {len(schema)} table(s)")
    return schema


def load_schema_from_string(
    ddl: str,
    parser: Optional[SQLParser] = None,
    source: Union[str, Path] = "<string>",
) -> SchemaCtx:
    parser = parser or SQLParser()
    try:
        statements = parser.parse_all(ddl)
    except ParseError as e:
        raise SchemaLoadError(source, f"schema parse error: {e.reason}") from e

    tables: list[Table] = []
    for tree in statements:
        if Statement.from_tree(tree).kind is not StatementKind.CREATE_TABLE:
            continue
        table = _build_table(tree, source)
        if table is not None:
            tables.append(table)

    return SchemaCtx.from_tables(tables)


def _build_table(create: exp.Create, source: Union[str, Path]) -> Optional[Table]:
    body = create.this
    if not isinstance(body, exp.Schema):
        # CREATE TABLE ... AS SELECT / LIKE: no column list to read
        logger.debug(f"Skipping CREATE TABLE without column definitions: {create.sql()[:80]}")
        return None

    name = body.this.name if body.this is not None else ""
    columns: list[Column] = []
    indexes: list[Index] = []

    try:
        for item in body.expressions:
            if isinstance(item, exp.ColumnDef):
                columns.append(_build_column(item))
                indexes.extend(_inline_indexes(item))
            else:
                indexes.extend(_table_indexes(item))

        return Table.build(name, columns, indexes)
    except ValueError as e:
        raise SchemaLoadError(source, str(e), table=name) from e


def _build_column(col_def: exp.ColumnDef) -> Column:
    kind = col_def.args.get("kind")
    col_type = kind.sql(dialect="mysql") if isinstance(kind, exp.Expression) else ""
    return Column(name=col_def.name, type=col_type)


def _inline_indexes(col_def: exp.ColumnDef) -> Iterator[Index]:
    for constraint in col_def.args.get("constraints") or []:
        kind = constraint.args.get("kind") if isinstance(constraint, exp.ColumnConstraint) else None
        if isinstance(kind, exp.PrimaryKeyColumnConstraint):
            yield Index(name=PRIMARY_INDEX_NAME, columns=(col_def.name,), unique=True)
        elif isinstance(kind, exp.UniqueColumnConstraint):
            yield Index(name=col_def.name, columns=(col_def.name,), unique=True)


def _table_indexes(node: exp.Expression, name: Optional[str] = None) -> Iterator[Index]:
    """Indexes declared at table level, optionally wrapped in CONSTRAINT <name>."""
    if isinstance(node, exp.Constraint):
        for inner in node.expressions:
            yield from _table_indexes(inner, name=node.name or None)
        return
    if isinstance(node, exp.ColumnConstraint):
        node = node.args.get("kind")

    if isinstance(node, exp.PrimaryKey):
        yield _index(name or PRIMARY_INDEX_NAME, node.expressions, unique=True)
    elif isinstance(node, exp.UniqueColumnConstraint):
        key = node.this
        if isinstance(key, exp.Schema):
            cols = _column_names(key.expressions)
            key_name = key.this.name if key.this is not None else ""
        else:
            cols = _column_names([key]) if key is not None else []
            key_name = ""
        yield _index(name or key_name or (cols[0] if cols else ""), cols, unique=True)
    elif isinstance(node, exp.IndexColumnConstraint):
        cols = _column_names(node.expressions)
        yield _index(name or node.name or (cols[0] if cols else ""), cols, unique=False)


def _index(name: str, parts: list, unique: bool) -> Index:
    cols = parts if parts and isinstance(parts[0], str) else _column_names(parts)
    return Index(name=name, columns=tuple(cols), unique=unique)


def _column_names(parts: list) -> list[str]:
    names: list[str] = []
    for part in parts:
        name = _column_name(part)
        if name:
            names.append(name)
    return names


def _column_name(node: Optional[exp.Expression]) -> Optional[str]:
    if node is None:
        return None
    if isinstance(node, (exp.Identifier, exp.Column)):
        return node.name
    if isinstance(node, exp.Ordered):
        return _column_name(node.this)
    if isinstance(node, exp.Anonymous):
        # prefix index: email(10)
        return node.name
    found = node.find(exp.Column, exp.Identifier)
    return found.name if found is not None else None
