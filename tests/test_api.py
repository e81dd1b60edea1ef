"""End-to-end tests for the scan -> extract -> audit pipeline."""

import threading

import pytest

from sql_check.api import audit, run_audit
from sql_check.config import AuditConfig
from sql_check.exceptions import InvalidPathError, SchemaLoadError
from sql_check.models import IssueType


def _summary(run):
    return [
        (issue.location.file_path.rsplit("/", 1)[-1], issue.location.line, issue.issue_type)
        for issue in run.issues
    ]


class TestRunAudit:
    """Full pipeline over a small source tree."""

    def test_issues_across_files(self, source_tree):
        src, schema_file = source_tree
        run = run_audit(src, AuditConfig(schema_path=str(schema_file), workers=2))

        assert _summary(run) == [
            ("orders.py", 3, IssueType.INDEX_MISS),
            ("orders.py", 3, IssueType.IMPLICIT_CONVERSION),
            ("orders.py", 3, IssueType.DEEP_PAGINATION),
            ("users.go", 4, IssueType.UNSAFE_DELETE),
            ("users.go", 8, IssueType.SELECT_STAR),
        ]
        assert run.files_scanned == 2
        assert run.tables == 3
        assert run.has_fatal
        assert run.file_errors == []
        assert run.walk_error is None

    def test_without_schema(self, source_tree):
        src, _ = source_tree
        run = run_audit(src, AuditConfig())

        assert _summary(run) == [
            ("orders.py", 3, IssueType.DEEP_PAGINATION),
            ("users.go", 4, IssueType.UNSAFE_DELETE),
            ("users.go", 8, IssueType.SELECT_STAR),
        ]

    def test_repeated_runs_are_identical(self, source_tree):
        src, schema_file = source_tree
        config = AuditConfig(schema_path=str(schema_file), workers=3)

        first = [i.to_dict() for i in run_audit(src, config).issues]
        second = [i.to_dict() for i in run_audit(src, config).issues]

        assert first == second

    def test_summary_counts(self, source_tree):
        src, schema_file = source_tree
        summary = run_audit(src, AuditConfig(schema_path=str(schema_file))).summary()

        assert summary["issues"] == 5
        assert summary["fatal"] == 1
        assert summary["warning"] == 3
        assert summary["suggestion"] == 1
        assert summary["segments"] == 3

    def test_parse_failures_are_counted(self, tmp_path):
        (tmp_path / "a.py").write_text("msg = \"Delete isn't allowed\"\n")
        run = run_audit(tmp_path, AuditConfig())

        assert run.issues == []
        assert len(run.segments) == 1
        assert run.audit.parse_failures == 1

    def test_deeply_nested_literal_does_not_abort_scan(self, tmp_path):
        (tmp_path / "ok.py").write_text('q = "DELETE FROM users"\n')
        (tmp_path / "z.js").write_text('x = "SELECT ' + "(" * 400 + '1"\n')

        run = run_audit(tmp_path, AuditConfig())

        assert _summary(run) == [("ok.py", 1, IssueType.UNSAFE_DELETE)]
        assert run.audit.parse_failures == 1

    def test_ui_labels_are_not_reported(self, tmp_path):
        (tmp_path / "app.py").write_text(
            'a = "Update profile"\nb = "Delete account"\nc = "Update settings"\nd = "delete user"\n'
        )

        run = run_audit(tmp_path, AuditConfig())

        assert run.issues == []
        assert run.audit.parse_failures == 4

    def test_extension_override(self, source_tree):
        src, _ = source_tree
        run = run_audit(src, AuditConfig(extensions=("py",)))
        assert {i.location.file_path.rsplit("/", 1)[-1] for i in run.issues} == {"orders.py"}

    def test_stop_event_set_before_run(self, source_tree):
        src, _ = source_tree
        stop = threading.Event()
        stop.set()

        run = run_audit(src, AuditConfig(), stop_event=stop)

        assert run.files_scanned == 0
        assert run.issues == []


class TestRunAuditErrors:
    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            run_audit(tmp_path / "missing", AuditConfig())

    def test_root_is_a_file(self, tmp_path):
        path = tmp_path / "a.go"
        path.write_text("")
        with pytest.raises(InvalidPathError, match="not a directory"):
            run_audit(path, AuditConfig())

    def test_missing_schema(self, source_tree, tmp_path):
        src, _ = source_tree
        with pytest.raises(SchemaLoadError):
            run_audit(src, AuditConfig(schema_path=str(tmp_path / "nope.sql")))


class TestAudit:
    def test_loads_config_and_runs(self, source_tree, monkeypatch):
        src, schema_file = source_tree
        monkeypatch.chdir(src.parent)
        monkeypatch.setenv("HOME", str(src.parent))

        run = audit(src, schema_path=str(schema_file), workers=1, quiet=True)

        assert run.config.workers == 1
        assert run.config.verbosity == "quiet"
        assert len(run.issues) == 5
