"""Tests for the PostgreSQL schema helpers and PostgresOverrideStore."""
import psycopg
import pytest
from psycopg.types.json import Jsonb

from pagetoc.core.database import check_database_status, setup_database
from pagetoc.core.stores import PostgresOverrideStore
from pagetoc.models.overrides import OverrideRecord

DSN = "postgresql://tester@localhost:5432/pagetoc"
RECORD = OverrideRecord(hidden_keys=["intro::1"], label_by_key={"setup::1": "Guide"})


class _FakeCursor:
    """Records executed statements and returns queued rows from fetchone."""

    def __init__(self, rows, error=None) -> None:
        self.rows = list(rows)
        self.error = error
        self.executed = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> bool:
        self.closed = True
        return False

    def execute(self, sql, params=None) -> None:
        if self.error is not None:
            raise self.error
        self.executed.append((sql, params))

    def fetchone(self):
        return self.rows.pop(0) if self.rows else None

    def close(self) -> None:
        self.closed = True


class _FakeConn:
    """Fake psycopg connection handing out a single cursor."""

    def __init__(self, cursor: _FakeCursor) -> None:
        self.fake_cursor = cursor
        self.autocommit = False
        self.committed = False
        self.closed = False

    def cursor(self) -> _FakeCursor:
        return self.fake_cursor

    def commit(self) -> None:
        self.committed = True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def connect(monkeypatch):
    """Replace psycopg.connect; returns a factory that installs a fake connection."""
    dsns = []

    def install(rows=(), error=None) -> _FakeConn:
        conn = _FakeConn(_FakeCursor(rows, error))

        def _connect(connection_string, **kwargs) -> _FakeConn:
            dsns.append(connection_string)
            return conn

        monkeypatch.setattr(psycopg, "connect", _connect)
        return conn

    install.dsns = dsns
    return install


def _statements(conn: _FakeConn) -> list:
    return [sql for sql, _ in conn.fake_cursor.executed]


class TestPostgresOverrideStore:
    def test_store_upserts_jsonb(self, connect) -> None:
        conn = connect()
        PostgresOverrideStore(DSN).store_override_record("7", RECORD)

        assert connect.dsns == [DSN]
        [(sql, params)] = conn.fake_cursor.executed
        assert "INSERT INTO toc_overrides" in sql
        assert "ON CONFLICT (document_id) DO UPDATE" in sql
        assert params[0] == "7"
        assert isinstance(params[1], Jsonb)
        assert params[1].obj == RECORD.to_dict()
        assert conn.committed is True
        assert conn.closed is True

    def test_store_closes_connection_on_error(self, connect) -> None:
        conn = connect(error=psycopg.OperationalError("connection lost"))
        with pytest.raises(psycopg.OperationalError):
            PostgresOverrideStore(DSN).store_override_record("7", RECORD)

        assert conn.committed is False
        assert conn.closed is True

    def test_load_returns_record(self, connect) -> None:
        conn = connect(rows=[(RECORD.to_dict(),)])
        assert PostgresOverrideStore(DSN).load_override_record("7") == RECORD

        [(sql, params)] = conn.fake_cursor.executed
        assert "FROM toc_overrides WHERE document_id = %s" in sql
        assert params == ("7",)
        assert conn.closed is True

    def test_load_defaults_partial_row(self, connect) -> None:
        connect(rows=[({"hiddenKeys": ["a::1", None]},)])
        record = PostgresOverrideStore(DSN).load_override_record("7")
        assert record == OverrideRecord(hidden_keys=["a::1"])

    def test_load_missing_row(self, connect) -> None:
        conn = connect(rows=[])
        assert PostgresOverrideStore(DSN).load_override_record("7") is None
        assert conn.closed is True

    def test_load_closes_connection_on_error(self, connect) -> None:
        conn = connect(error=psycopg.OperationalError("connection lost"))
        with pytest.raises(psycopg.OperationalError):
            PostgresOverrideStore(DSN).load_override_record("7")
        assert conn.closed is True

    def test_auto_setup_creates_schema(self, connect) -> None:
        conn = connect(rows=[(True,)])
        PostgresOverrideStore(DSN, auto_setup=True)
        assert any("CREATE TABLE IF NOT EXISTS toc_overrides" in s for s in _statements(conn))


class TestSetupDatabase:
    def test_creates_table_and_trigger(self, connect) -> None:
        conn = connect(rows=[(False,)])
        setup_database(DSN)

        statements = _statements(conn)
        assert conn.autocommit is True
        assert any("CREATE TABLE IF NOT EXISTS toc_overrides" in s for s in statements)
        assert any("record JSONB NOT NULL" in s for s in statements)
        assert any("CREATE TRIGGER update_toc_overrides_updated_at" in s for s in statements)
        assert conn.fake_cursor.closed is True
        assert conn.closed is True

    def test_existing_trigger_not_recreated(self, connect) -> None:
        conn = connect(rows=[(True,)])
        setup_database(DSN)
        assert not any("CREATE TRIGGER" in s for s in _statements(conn))

    def test_error_propagates(self, connect) -> None:
        connect(error=psycopg.OperationalError("connection refused"))
        with pytest.raises(psycopg.OperationalError):
            setup_database(DSN)


class TestCheckDatabaseStatus:
    def test_counts_records(self, connect) -> None:
        conn = connect(rows=[(True,), (3,)])
        assert check_database_status(DSN) == {"table_exists": True, "record_count": 3}
        assert "SELECT COUNT(*) FROM toc_overrides" in _statements(conn)[1]
        assert conn.closed is True

    def test_missing_table(self, connect) -> None:
        conn = connect(rows=[(False,)])
        assert check_database_status(DSN) == {"table_exists": False, "record_count": 0}
        assert len(conn.fake_cursor.executed) == 1
        assert conn.closed is True
