from __future__ import annotations

from pathlib import Path

from src.factory_ledger.factory_ledger.database.bootstrap import (
    _strip_comments,
    _strip_create_db_and_use,
    iter_sql_statements,
)

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_ignores_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_create_database_and_use_are_removed():
    sql = "CREATE DATABASE factory;\nUSE factory;\nCREATE TABLE a (id INT);"
    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE a (id INT)"]


def test_schema_declares_every_table():
    sql = _strip_comments(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8")))
    statements = list(iter_sql_statements(sql))

    for table in ("credentials", "users", "factories", "workers", "daily_logs"):
        assert any(f"CREATE TABLE IF NOT EXISTS {table}" in stmt for stmt in statements), table
