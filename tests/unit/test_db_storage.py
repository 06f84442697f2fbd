"""
Unit tests for DBStorage against a fake psycopg connection.

The fake records executed SQL, returns canned rows, and can raise a chosen
psycopg error from execute() so error classification is covered without a
running PostgreSQL.
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import psycopg
import psycopg.errors
import pytest

from link_shortener.errors import StoreUnavailableError
from link_shortener.storage.base import DuplicateCodeError, Link
from link_shortener.storage.db_storage import SCHEMA_SQL, SHORT_CODE_CONSTRAINT, DBStorage

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeUniqueViolation(psycopg.errors.UniqueViolation):
    """UniqueViolation whose diagnostics name a given constraint."""

    def __init__(self, constraint):
        super().__init__("duplicate key value violates unique constraint")
        self._constraint = constraint

    @property
    def diag(self):
        return SimpleNamespace(constraint_name=self._constraint)


class DummyCursor:
    def __init__(self, conn):
        self.conn = conn
        self.rowcount = conn.rowcount
        self._results = list(conn.results)

    def execute(self, query, params=None):
        self.conn.executed.append((query, params))
        if self.conn.error is not None:
            raise self.conn.error
        return self

    def fetchone(self):
        return self._results.pop(0) if self._results else None

    def fetchall(self):
        rows, self._results = self._results, []
        return rows

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class DummyConnection:
    def __init__(self, results=None, rowcount=1, error=None):
        self.results = results or []
        self.rowcount = rowcount
        self.error = error
        self.executed = []
        self.autocommit = False
        self.closed = False

    def cursor(self, row_factory=None):
        return DummyCursor(self)

    def close(self):
        self.closed = True


def _row(short_code="abc12345", user_id="user_1", url="https://x.com", link_id="id1"):
    return {
        "id": link_id,
        "user_id": user_id,
        "url": url,
        "short_code": short_code,
        "created_at": NOW,
        "updated_at": NOW,
    }


def _link(short_code="abc12345"):
    return Link(id="id1", user_id="user_1", url="https://x.com", short_code=short_code,
                created_at=NOW, updated_at=NOW)


@pytest.fixture
def connect(monkeypatch):
    """Install a DummyConnection as psycopg.connect's return value."""
    def _install(**kwargs):
        conn = DummyConnection(**kwargs)
        monkeypatch.setattr("psycopg.connect", lambda dsn, **kw: conn)
        return conn
    return _install


# ---------------------------------------------------------------------
# insert_link
# ---------------------------------------------------------------------

def test_insert_link_returns_stored_row(connect):
    conn = connect(results=[_row()])
    link = DBStorage("fake").insert_link(_link())

    assert link.short_code == "abc12345"
    assert link.created_at == NOW
    query, params = conn.executed[0]
    assert "INSERT INTO links" in query and "RETURNING" in query
    assert params == ("id1", "user_1", "https://x.com", "abc12345")
    assert conn.autocommit is True
    assert conn.closed is True


def test_insert_link_short_code_violation_is_duplicate(connect):
    connect(error=FakeUniqueViolation(SHORT_CODE_CONSTRAINT))
    with pytest.raises(DuplicateCodeError) as exc_info:
        DBStorage("fake").insert_link(_link("taken"))
    assert exc_info.value.short_code == "taken"


def test_insert_link_other_unique_violation_is_unavailable(connect):
    connect(error=FakeUniqueViolation("links_pkey"))
    with pytest.raises(StoreUnavailableError):
        DBStorage("fake").insert_link(_link())


def test_insert_link_operational_error_is_unavailable(connect):
    conn = connect(error=psycopg.OperationalError("server closed the connection"))
    with pytest.raises(StoreUnavailableError):
        DBStorage("fake").insert_link(_link())
    assert conn.closed is True


def test_insert_link_without_returned_row_is_unavailable(connect):
    connect(results=[])
    with pytest.raises(StoreUnavailableError):
        DBStorage("fake").insert_link(_link())


def test_connect_failure_is_unavailable(monkeypatch):
    def refuse(dsn, **kw):
        raise psycopg.OperationalError("connection refused")

    monkeypatch.setattr("psycopg.connect", refuse)
    with pytest.raises(StoreUnavailableError):
        DBStorage("fake").get_link_by_code("abc")


# ---------------------------------------------------------------------
# Reads / deletes / schema
# ---------------------------------------------------------------------

def test_get_link_by_code(connect):
    connect(results=[_row()])
    link = DBStorage("fake").get_link_by_code("abc12345")
    assert link.url == "https://x.com"
    assert link.user_id == "user_1"


def test_get_link_by_code_missing(connect):
    connect(results=[])
    assert DBStorage("fake").get_link_by_code("nope") is None


def test_read_error_is_unavailable(connect):
    connect(error=psycopg.errors.UndefinedTable("relation \"links\" does not exist"))
    with pytest.raises(StoreUnavailableError):
        DBStorage("fake").get_link_by_code("abc")


def test_list_links_for_user(connect):
    conn = connect(results=[_row("b", link_id="id2"), _row("a")])
    links = DBStorage("fake").list_links_for_user("user_1")
    assert [link.short_code for link in links] == ["b", "a"]
    query, params = conn.executed[0]
    assert "ORDER BY created_at DESC" in query
    assert params == ("user_1",)


def test_delete_link(connect):
    conn = connect(rowcount=1)
    assert DBStorage("fake").delete_link("id1", "user_1") is True
    assert conn.executed[0][1] == ("id1", "user_1")

    connect(rowcount=0)
    assert DBStorage("fake").delete_link("id1", "user_2") is False


def test_init_schema(connect):
    conn = connect()
    DBStorage("fake").init_schema()
    assert conn.executed == [(SCHEMA_SQL, None)]
    assert "CONSTRAINT links_short_code_unique UNIQUE (short_code)" in SCHEMA_SQL
