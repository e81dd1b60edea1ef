"""Shared fixtures for sql-check tests."""

import pytest

from sql_check.auditor import Auditor
from sql_check.models import Location, SQLSegment
from sql_check.parsing import SQLParser, Statement
from sql_check.schema import load_schema_from_string

SCHEMA_DDL = """
CREATE TABLE users (
    id INT NOT NULL AUTO_INCREMENT,
    name VARCHAR(255),
    email VARCHAR(255),
    phone VARCHAR(20),
    age INT,
    PRIMARY KEY (id),
    KEY idx_email (email),
    UNIQUE KEY uk_phone (phone)
);

CREATE TABLE orders (
    id INT PRIMARY KEY,
    user_id INT,
    status VARCHAR(16),
    created_at DATETIME,
    KEY idx_user_created (user_id, created_at)
);

CREATE TABLE logs (
    id INT,
    message TEXT
);

INSERT INTO logs (id, message) VALUES (1, 'seed');
"""


@pytest.fixture
def schema_ddl():
    return SCHEMA_DDL


@pytest.fixture
def schema():
    """Schema with indexed users/orders tables and an unindexed logs table."""
    return load_schema_from_string(SCHEMA_DDL)


@pytest.fixture
def parser():
    return SQLParser()


@pytest.fixture
def make_segment():
    def _make(sql, file_path="app/repo.go", line=1):
        return SQLSegment(sql=sql, location=Location(file_path, line), language="go")

    return _make


@pytest.fixture
def statement_for(parser):
    def _statement(sql):
        return Statement.from_tree(parser.parse(sql))

    return _statement


@pytest.fixture
def audit_sql(schema, make_segment):
    """Run the default rule set over one SQL string."""

    def _audit(sql):
        return Auditor(schema=schema).audit([make_segment(sql)])

    return _audit


@pytest.fixture
def source_tree(tmp_path):
    """Small source tree with SQL in several languages and excluded areas."""
    src = tmp_path / "src"
    (src / "repo").mkdir(parents=True)
    (src / "vendor" / "lib").mkdir(parents=True)
    (src / ".git").mkdir()

    (src / "repo" / "users.go").write_text(
        "package repo\n"
        "\n"
        "func Wipe() {\n"
        '\tdb.Exec("DELETE FROM users")\n'
        "}\n"
        "\n"
        "func Find() {\n"
        '\tdb.Query("SELECT * FROM users WHERE id = ?")\n'
        "}\n"
    )
    (src / "repo" / "orders.py").write_text(
        "def page(db):\n"
        "    return db.execute(\n"
        "        'SELECT id FROM orders WHERE status = 1 LIMIT 10000, 20'\n"
        "    )\n"
    )
    (src / "repo" / "notes.txt").write_text('"DELETE FROM users"\n')
    (src / "vendor" / "lib" / "dep.go").write_text('db.Exec("UPDATE users SET age = 1")\n')
    (src / ".git" / "hook.go").write_text('db.Exec("UPDATE users SET age = 1")\n')
    (src / "repo" / "users_test.go").write_text('db.Exec("DELETE FROM users")\n')

    schema_file = tmp_path / "schema.sql"
    schema_file.write_text(SCHEMA_DDL)
    return src, schema_file
