"""Auditor: runs the rule registry over parsed SQL segments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..exceptions import ParseError, RuleError
from ..logging_config import get_logger
from ..models import Issue, SQLSegment
from ..parsing.parser import SQLParser
from ..parsing.statements import Statement
from ..schema.models import SchemaCtx
from .rules import Rule, get_default_rules

logger = get_logger(__name__)


@dataclass
class AuditResult:
    """Issues from one audit pass plus what went wrong along the way."""

    issues: list[Issue] = field(default_factory=list)
    rule_errors: list[RuleError] = field(default_factory=list)
    parse_failures: int = 0
    segments_total: int = 0

    @property
    def segments_parsed(self) -> int:
        return self.segments_total - self.parse_failures


class Auditor:
    """Evaluates every registered rule against every parsable segment.

    The schema and the rule list are fixed once auditing starts; rules are
    run in registration order and issues are kept in (segment, rule) order
    without deduplication.
    """

    def __init__(
        self,
        schema: Optional[SchemaCtx] = None,
        parser: Optional[SQLParser] = None,
        rules: Optional[Sequence[Rule]] = None,
    ):
        self.schema = schema if schema is not None else SchemaCtx.empty()
        self.parser = parser or SQLParser()
        self._rules: list[Rule] = list(rules) if rules is not None else get_default_rules()

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def register(self, rule: Rule) -> None:
        self._rules.append(rule)

    def audit(self, segments: Iterable[SQLSegment]) -> list[Issue]:
        return self.run(segments).issues

    def run(self, segments: Iterable[SQLSegment]) -> AuditResult:
        result = AuditResult()

        for segment in segments:
            result.segments_total += 1
            try:
                tree = self.parser.parse(segment.sql)
            except ParseError as e:
                # Extraction is lexical, so most non-SQL strings end up here
                result.parse_failures += 1
                logger.debug(f"Skipping unparsable segment at {segment.location}: {e.reason}")
                continue

            statement = Statement.from_tree(tree)
            for rule in self._rules:
                try:
                    result.issues.extend(rule.check(segment, statement, self.schema))
                except Exception as e:
                    error = RuleError(rule.name, str(segment.location), str(e))
                    result.rule_errors.append(error)
                    logger.warning(f"Rule {rule.name} failed: {error}")

        logger.info(
            f"Audited {result.segments_total} segment(s): {result.segments_parsed} parsed, "
            f"{len(result.issues)} issue(s)"
        )
        return result
