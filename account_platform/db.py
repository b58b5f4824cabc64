from __future__ import annotations

import re
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence
from urllib.parse import urlparse

from account_platform.schema import get_schema_sql


def _debug(msg: str) -> None:
    print(f"[db] {msg}")


class StoreError(RuntimeError):
    """A database driver failure (connection, SQL, constraint not handled by the caller)."""


def _detect_dialect(dsn: str) -> str:
    """Return 'postgres' or 'sqlite'."""
    s = (dsn or "").strip()
    if not s:
        return "sqlite"
    try:
        scheme = urlparse(s).scheme.lower()
    except Exception:
        scheme = ""
    if scheme in ("postgres", "postgresql"):
        return "postgres"
    # Allow sqlite:///path style, but default is file path.
    return "sqlite"


# Quoted literals are matched first so a '?' inside them is never a placeholder.
_PLACEHOLDER_RE = re.compile(r"'(?:[^']|'')*'|\"[^\"]*\"|\?")


def _qmark_to_pct(sql: str) -> str:
    """Convert SQLite qmark placeholders (?) to psycopg2 placeholders (%s)."""
    return _PLACEHOLDER_RE.sub(lambda m: "%s" if m.group(0) == "?" else m.group(0), sql)


def is_unique_violation(exc: BaseException) -> bool:
    """True when `exc` is a UNIQUE constraint failure from either driver."""
    if isinstance(exc, sqlite3.IntegrityError):
        return "UNIQUE" in str(exc).upper()
    # psycopg2 exposes the SQLSTATE; 23505 = unique_violation
    return getattr(exc, "pgcode", None) == "23505"


class PGCursor:
    def __init__(self, cur: Any):
        self._cur = cur

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> "PGCursor":
        self._cur.execute(_qmark_to_pct(sql), tuple(params or ()))
        return self

    def fetchone(self) -> Any:
        return self._cur.fetchone()

    def fetchall(self) -> Any:
        return self._cur.fetchall()

    @property
    def rowcount(self) -> int:
        try:
            return int(self._cur.rowcount or 0)
        except Exception:
            return 0

    def close(self) -> None:
        self._cur.close()


class PGConnection:
    """A tiny adapter that makes psycopg2 connections look like sqlite3 connections."""

    dialect = "postgres"

    def __init__(self, conn: Any):
        self._conn = conn

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> PGCursor:
        wrapper = PGCursor(self._conn.cursor())
        wrapper.execute(sql, params)
        return wrapper

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()


def _open_postgres(dsn: str) -> tuple[PGConnection, type[Exception]]:
    try:
        import psycopg2
        import psycopg2.extras
    except ImportError as e:
        raise RuntimeError(
            "Postgres selected but psycopg2 is not installed. "
            "Install psycopg2-binary and try again."
        ) from e

    try:
        # RealDictCursor makes rows behave like dicts, as sqlite3.Row does.
        raw = psycopg2.connect(dsn, cursor_factory=psycopg2.extras.RealDictCursor)
    except psycopg2.Error as e:
        raise StoreError(f"connect failed: {e}") from e
    return PGConnection(raw), psycopg2.Error


def _open_sqlite(dsn: str) -> tuple[sqlite3.Connection, type[Exception]]:
    if dsn.lower().startswith("sqlite:///"):
        dsn = dsn[len("sqlite:///") :]
    try:
        Path(dsn).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(dsn, timeout=30, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA busy_timeout=5000;")
        conn.execute("PRAGMA foreign_keys = ON;")
    except (OSError, sqlite3.Error) as e:
        raise StoreError(f"connect failed: {e}") from e
    return conn, sqlite3.Error


@contextmanager
def connect(db_dsn: str) -> Iterator[Any]:
    """Open one connection for the duration of a `with` block.

    The block commits on success and rolls back on any exception. Driver errors
    are re-raised as StoreError; application errors propagate unchanged.
    """
    dsn = (db_dsn or "").strip()
    if _detect_dialect(dsn) == "postgres":
        conn, driver_error = _open_postgres(dsn)
    else:
        conn, driver_error = _open_sqlite(dsn)

    try:
        yield conn
        conn.commit()
    except driver_error as e:
        conn.rollback()
        raise StoreError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


class ConnectionPool:
    """Bounds the number of concurrently open connections.

    Callers beyond `max_connections` block until a slot frees up; there is no
    queue limit and no timeout. Connections are opened per checkout via connect().
    """

    def __init__(self, db_dsn: str, max_connections: int = 10):
        self.db_dsn = db_dsn
        self.dialect = _detect_dialect(db_dsn)
        self.max_connections = max(1, int(max_connections))
        self._slots = threading.BoundedSemaphore(self.max_connections)
        self._lock = threading.Lock()
        self._in_use = 0

    @property
    def in_use(self) -> int:
        with self._lock:
            return self._in_use

    def _checkout(self) -> None:
        self._slots.acquire()
        with self._lock:
            self._in_use += 1

    def _checkin(self) -> None:
        with self._lock:
            self._in_use -= 1
        self._slots.release()

    @contextmanager
    def connection(self) -> Iterator[Any]:
        self._checkout()
        try:
            with connect(self.db_dsn) as conn:
                yield conn
        finally:
            self._checkin()

    def ping(self) -> bool:
        try:
            with self.connection() as conn:
                conn.execute("SELECT 1").fetchone()
            return True
        except StoreError as e:
            _debug(f"ping failed: {e}")
            return False


def init_db(db_dsn: str) -> None:
    """Create the schema if it doesn't exist. Safe to call on every start."""
    dialect = _detect_dialect(db_dsn)
    _debug(f"initializing {dialect} schema")
    ddl = get_schema_sql(dialect)
    with connect(db_dsn) as conn:
        if dialect == "sqlite":
            conn.executescript(ddl)
            return
        # psycopg2 runs one statement per execute()
        for stmt in (s.strip() for s in ddl.split(";")):
            if stmt:
                conn.execute(stmt)
