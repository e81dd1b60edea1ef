"""Tests for the sql-check command line."""

import json

import pytest
from typer.testing import CliRunner

from sql_check.cli import app


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return CliRunner()


class TestCli:
    def test_console_report(self, runner, source_tree):
        src, schema_file = source_tree
        result = runner.invoke(app, [str(src), "--schema", str(schema_file)])

        assert result.exit_code == 0
        assert "[FATAL]" in result.output
        assert "found 5 issues" in result.output

    def test_clean_tree(self, runner, tmp_path):
        clean = tmp_path / "clean"
        clean.mkdir()
        (clean / "a.go").write_text('db.Query("SELECT id FROM users WHERE id = 1")\n')

        result = runner.invoke(app, [str(clean)])

        assert result.exit_code == 0
        assert "No SQL issues found" in result.output

    def test_json_report_to_file(self, runner, source_tree, tmp_path):
        src, schema_file = source_tree
        out = tmp_path / "report.json"

        result = runner.invoke(
            app, [str(src), "-S", str(schema_file), "--format", "json", "--out", str(out)]
        )

        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert len(data["issues"]) == 5
        assert data["summary"]["files_scanned"] == 2

    def test_fail_on_fatal(self, runner, source_tree):
        src, schema_file = source_tree
        result = runner.invoke(app, [str(src), "-S", str(schema_file), "--fail-on-fatal"])
        assert result.exit_code == 2

    def test_exclude_and_ext(self, runner, source_tree, tmp_path):
        src, _ = source_tree
        out = tmp_path / "report.json"

        result = runner.invoke(
            app,
            [str(src), "-x", "go", "-e", "users.go", "-f", "json", "-o", str(out)],
        )

        assert result.exit_code == 0
        assert json.loads(out.read_text())["issues"] == []

    def test_pagination_threshold(self, runner, source_tree, tmp_path):
        src, _ = source_tree
        out = tmp_path / "report.json"

        result = runner.invoke(
            app,
            [str(src), "-x", "py", "--pagination-threshold", "20000", "-f", "json", "-o", str(out)],
        )

        assert result.exit_code == 0
        assert json.loads(out.read_text())["issues"] == []

    def test_missing_schema_exits_1(self, runner, source_tree, tmp_path):
        src, _ = source_tree
        result = runner.invoke(app, [str(src), "--schema", str(tmp_path / "nope.sql")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_source_exits_1(self, runner, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "missing")])
        assert result.exit_code == 1

    def test_config_file(self, runner, source_tree, tmp_path):
        src, schema_file = source_tree
        config = tmp_path / "sql-check-ci.toml"
        config.write_text(f'schema_path = "{schema_file}"\nextensions = ["py"]\n')
        out = tmp_path / "report.json"

        result = runner.invoke(app, [str(src), "-c", str(config), "-f", "json", "-o", str(out)])

        assert result.exit_code == 0
        types = [i["type"] for i in json.loads(out.read_text())["issues"]]
        assert types == ["INDEX_MISS", "IMPLICIT_CONVERSION", "DEEP_PAGINATION"]

    def test_log_file(self, runner, source_tree, tmp_path):
        src, _ = source_tree
        log_file = tmp_path / "logs" / "run.log"
        log_file.parent.mkdir()

        result = runner.invoke(app, [str(src), "-v", "--log-file", str(log_file)])

        assert result.exit_code == 0
        content = log_file.read_text()
        assert "INFO" in content
        assert "Config: src=" in content
