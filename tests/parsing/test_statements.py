"""Tests for the statement view built from parsed trees."""

from sql_check.parsing import StatementKind
from sql_check.parsing.visitor import literal_int


class TestStatementKinds:
    def test_select(self, statement_for):
        stmt = statement_for("SELECT id, name FROM users u WHERE u.id = 1")
        assert stmt.kind is StatementKind.SELECT
        assert stmt.table == "users"
        assert stmt.where is not None
        assert len(stmt.projections) == 2
        assert stmt.is_filterable

    def test_update_and_delete(self, statement_for):
        update = statement_for("UPDATE users SET name = 'x'")
        assert update.kind is StatementKind.UPDATE
        assert update.table == "users"
        assert update.where is None

        delete = statement_for("DELETE FROM orders WHERE id = 1")
        assert delete.kind is StatementKind.DELETE
        assert delete.table == "orders"
        assert delete.where is not None

    def test_insert(self, statement_for):
        stmt = statement_for("INSERT INTO logs (id, message) VALUES (1, 'x')")
        assert stmt.kind is StatementKind.INSERT
        assert stmt.table == "logs"
        assert not stmt.is_filterable

    def test_create_table(self, statement_for):
        assert statement_for("CREATE TABLE t (id INT)").kind is StatementKind.CREATE_TABLE

    def test_join_resolves_leftmost_table(self, statement_for):
        stmt = statement_for(
            "SELECT o.id FROM orders o JOIN users u ON u.id = o.user_id WHERE u.age = 3"
        )
        assert stmt.table == "orders"


class TestOffset:
    def test_mysql_limit_offset_form(self, statement_for):
        assert literal_int(statement_for("SELECT id FROM users LIMIT 10000, 10").offset) == 10000

    def test_offset_keyword(self, statement_for):
        stmt = statement_for("SELECT id FROM users LIMIT 10 OFFSET 7000")
        assert literal_int(stmt.offset) == 7000

    def test_no_offset(self, statement_for):
        assert statement_for("SELECT id FROM users LIMIT 10").offset is None
