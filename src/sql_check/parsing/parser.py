"""SQL parser adapter around sqlglot.

The grammar itself is sqlglot's concern; this module only turns its output
into the shapes the auditor and the schema loader expect: exactly one
statement per fragment, or a ``ParseError`` carrying the offending text.
"""

from __future__ import annotations

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError

from ..exceptions import ParseError
from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DIALECT = "mysql"


class SQLParser:
    """Parses SQL text with a fixed sqlglot dialect.

    Stateless apart from the dialect name, so one instance can be shared
    by every worker.
    """

    def __init__(self, dialect: str = DEFAULT_DIALECT):
        self.dialect = dialect

    def parse(self, sql: str) -> exp.Expression:
        """Parse a fragment and return its first statement.

        Multi-statement fragments are truncated to the first statement.

        Raises:
            ParseError: If the text has a syntax error or holds no statement.
        """
        statements = self.parse_all(sql)
        if not statements:
            raise ParseError(sql, "no valid SQL found")
        return statements[0]

    def parse_all(self, sql: str) -> list[exp.Expression]:
        """Parse every statement in ``sql``; empty statements are dropped.

        Raises:
            ParseError: If sqlglot reports a tokenizer or syntax error, gives
                up on the input, or accepts text that is not a real statement.
        """
        try:
            parsed = sqlglot.parse(sql, read=self.dialect)
        except SqlglotError as e:
            raise ParseError(sql, str(e)) from e
        except RecursionError as e:
            raise ParseError(sql, "expression nested too deeply") from e
        except Exception as e:
            raise ParseError(sql, f"parser failure: {e.__class__.__name__}: {e}") from e

        statements = [stmt for stmt in parsed if stmt is not None]
        for stmt in statements:
            _check_structure(sql, stmt)
        return statements


def _check_structure(sql: str, stmt: exp.Expression) -> None:
    """Reject prose that sqlglot reads leniently, e.g. "Update profile"."""
    if isinstance(stmt, exp.Update) and not stmt.expressions:
        raise ParseError(sql, "UPDATE without SET assignments")
    if isinstance(stmt, exp.Delete) and not stmt.args.get("this"):
        # MySQL requires FROM; "Delete account" parses with the word as a table list
        raise ParseError(sql, "DELETE without FROM")
