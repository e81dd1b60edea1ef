"""DeepPaginationRule: large OFFSET that forces the server to read and discard rows."""

from ...models import Issue, IssueType, Severity, SQLSegment
from ...parsing.statements import Statement, StatementKind
from ...parsing.visitor import literal_int
from ...schema.models import SchemaCtx
from .base import make_issue

DEFAULT_THRESHOLD = 5000


class DeepPaginationRule:
    name = "deep_pagination"

    def __init__(self, threshold: int = DEFAULT_THRESHOLD):
        self.threshold = threshold

    def check(self, segment: SQLSegment, statement: Statement, schema: SchemaCtx) -> list[Issue]:
        if statement.kind is not StatementKind.SELECT:
            return []

        # Placeholders (LIMIT ?, 10) have no literal value and are skipped
        offset = literal_int(statement.offset)
        if offset is None or offset <= self.threshold:
            return []

        return [
            make_issue(
                segment,
                IssueType.DEEP_PAGINATION,
                Severity.WARNING,
                "Deep pagination detected (High Offset)",
                "Use keyset pagination (WHERE id > last_id) instead of OFFSET.",
            )
        ]
