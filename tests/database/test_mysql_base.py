from __future__ import annotations

import mysql.connector
import pytest
from werkzeug.security import check_password_hash

from src.factory_ledger.factory_ledger.core.exceptions import EmailInUse, PersistenceError
from src.factory_ledger.factory_ledger.database.mysql_base import db_cursor
from src.factory_ledger.factory_ledger.users.mysql_credential_store import MySQLCredentialStore


class StubCursor:
    def __init__(self, db):
        self._db = db
        self.closed = False
        self._row = None

    def execute(self, sql, params=()):
        verb = sql.strip().split()[0].upper()
        self._db.executed.append((verb, params))
        error = self._db.errors.get(verb)
        if error is not None:
            raise error
        self._row = self._db.rows.get(verb)

    def fetchone(self):
        return self._row

    def close(self):
        self.closed = True


class StubConnection:
    def __init__(self, db):
        self._db = db
        self.committed = False
        self.rolled_back = False
        self.closed = False
        self.cursors: list[StubCursor] = []

    def cursor(self, dictionary=False):
        cur = StubCursor(self._db)
        self.cursors.append(cur)
        return cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class StubDatabase:
    """Stands in for DatabaseConnection; errors and rows are keyed by SQL verb."""

    def __init__(self, *, errors=None, rows=None, connect_error=None):
        self.errors = errors or {}
        self.rows = rows or {}
        self.connect_error = connect_error
        self.executed: list[tuple] = []
        self.connections: list[StubConnection] = []

    def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        conn = StubConnection(self)
        self.connections.append(conn)
        return conn


def test_success_commits_and_closes():
    db = StubDatabase()

    with db_cursor(db) as (_, cur):
        cur.execute("SELECT 1")

    (conn,) = db.connections
    assert conn.committed and not conn.rolled_back
    assert conn.closed
    assert conn.cursors[0].closed


def test_driver_error_becomes_persistence_error():
    boom = mysql.connector.Error("connection lost")
    db = StubDatabase(errors={"UPDATE": boom})

    with pytest.raises(PersistenceError) as exc_info:
        with db_cursor(db) as (_, cur):
            cur.execute("UPDATE users SET name=%s", ("x",))

    assert exc_info.value.__cause__ is boom
    (conn,) = db.connections
    assert conn.rolled_back and not conn.committed
    assert conn.closed
    assert conn.cursors[0].closed


def test_other_errors_roll_back_and_propagate_unchanged():
    db = StubDatabase()

    with pytest.raises(KeyError):
        with db_cursor(db):
            raise KeyError("row")

    (conn,) = db.connections
    assert conn.rolled_back
    assert conn.closed


def test_unreachable_database():
    refused = mysql.connector.Error("can't connect")
    db = StubDatabase(connect_error=refused)

    with pytest.raises(PersistenceError) as exc_info:
        with db_cursor(db):
            pass

    assert exc_info.value.__cause__ is refused


def test_credential_insert_losing_a_race_reports_email_in_use():
    duplicate = mysql.connector.IntegrityError(msg="Duplicate entry 'ali@x.com'", errno=1062)
    db = StubDatabase(errors={"INSERT": duplicate})

    with pytest.raises(EmailInUse) as exc_info:
        MySQLCredentialStore(db).create("ali@x.com", "secret1")

    assert isinstance(exc_info.value.__cause__, PersistenceError)
    assert exc_info.value.__cause__.__cause__ is duplicate
    assert all(conn.closed for conn in db.connections)


def test_credential_insert_failing_otherwise_stays_a_persistence_error():
    db = StubDatabase(errors={"INSERT": mysql.connector.OperationalError(msg="gone away")})

    with pytest.raises(PersistenceError):
        MySQLCredentialStore(db).create("ali@x.com", "secret1")


def test_corrupted_hash_fails_verify_and_is_reset_by_ensure():
    row = {"uid": "u1", "email": "owner@example.com", "password_hash": "bogus$salt$hash"}
    db = StubDatabase(rows={"SELECT": row})
    store = MySQLCredentialStore(db)

    assert store.verify("owner@example.com", "owner-pass-123") is None
    assert store.ensure("owner@example.com", "owner-pass-123") == "u1"

    verb, params = db.executed[-1]
    assert verb == "UPDATE"
    assert check_password_hash(params[0], "owner-pass-123")
    assert params[1] == "u1"
