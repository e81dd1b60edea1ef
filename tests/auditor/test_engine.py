"""Tests for the Auditor rule engine."""

from sql_check.auditor import Auditor
from sql_check.auditor.rules import NoWhereRule, SelectStarRule
from sql_check.exceptions import RuleError
from sql_check.models import IssueType


class _ExplodingRule:
    name = "exploding"

    def check(self, segment, statement, schema):
        raise KeyError("boom")


class TestAuditor:
    """Segment iteration, failure isolation and ordering."""

    def test_unparsable_segment_is_skipped_silently(self, schema, make_segment):
        result = Auditor(schema=schema).run(
            [make_segment("SELECT 'unterminated"), make_segment("DELETE FROM users")]
        )

        assert [i.issue_type for i in result.issues] == [IssueType.UNSAFE_DELETE]
        assert result.parse_failures == 1
        assert result.segments_total == 2
        assert result.segments_parsed == 1

    def test_deeply_nested_segment_does_not_abort_run(self, schema, make_segment):
        result = Auditor(schema=schema).run(
            [
                make_segment("SELECT " + "(" * 400 + "1", line=1),
                make_segment("DELETE FROM users", line=2),
            ]
        )

        assert [(i.location.line, i.issue_type) for i in result.issues] == [
            (2, IssueType.UNSAFE_DELETE)
        ]
        assert result.parse_failures == 1

    def test_button_labels_are_parse_failures(self, schema, make_segment):
        result = Auditor(schema=schema).run(
            [make_segment("Update profile"), make_segment("Delete account")]
        )

        assert result.issues == []
        assert result.parse_failures == 2

    def test_failing_rule_does_not_stop_others(self, schema, make_segment):
        auditor = Auditor(schema=schema, rules=[_ExplodingRule(), NoWhereRule()])
        result = auditor.run([make_segment("DELETE FROM users", line=7)])

        assert [i.issue_type for i in result.issues] == [IssueType.UNSAFE_DELETE]
        assert len(result.rule_errors) == 1
        error = result.rule_errors[0]
        assert isinstance(error, RuleError)
        assert error.rule_name == "exploding"
        assert error.location == "app/repo.go:7"

    def test_issues_in_segment_then_rule_order(self, schema, make_segment):
        auditor = Auditor(schema=schema, rules=[NoWhereRule(), SelectStarRule()])
        issues = auditor.audit(
            [
                make_segment("SELECT * FROM users", line=1),
                make_segment("UPDATE users SET age = 1", line=2),
                make_segment("SELECT *, id FROM users", line=3),
            ]
        )

        assert [(i.location.line, i.issue_type) for i in issues] == [
            (1, IssueType.SELECT_STAR),
            (2, IssueType.UNSAFE_UPDATE),
            (3, IssueType.SELECT_STAR),
        ]

    def test_register_appends(self, schema):
        auditor = Auditor(schema=schema, rules=[])
        auditor.register(NoWhereRule())
        auditor.register(SelectStarRule())
        assert [r.name for r in auditor.rules] == ["no_where_clause", "select_star"]

    def test_audit_is_idempotent(self, schema, make_segment):
        auditor = Auditor(schema=schema)
        segments = [
            make_segment("SELECT * FROM users WHERE age = 1"),
            make_segment("DELETE FROM orders"),
        ]
        assert auditor.audit(segments) == auditor.audit(segments)

    def test_no_segments(self, schema):
        result = Auditor(schema=schema).run([])
        assert result.issues == []
        assert result.segments_total == 0

    def test_without_schema_only_syntactic_rules_fire(self, make_segment):
        issues = Auditor().audit([make_segment("SELECT * FROM users WHERE age = 1")])
        assert [i.issue_type for i in issues] == [IssueType.SELECT_STAR]
