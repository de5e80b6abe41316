# batepapo/server/runtime/store/engines/sqlite_engine.py
from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from .engine import Engine


def _adapt(params: Iterable[Any] | Mapping[str, Any] | None) -> Sequence[Any] | Mapping[str, Any]:
    if params is None:
        return []
    if isinstance(params, Mapping):
        return params
    return list(params)


class SqliteEngine(Engine):
    """
    Simple SQLite engine with WAL, busy_timeout, and foreign keys ON.
    """

    def __init__(self, path: str | Path, *, timeout_ms: int = 5000):
        self.path = str(path)
        self.timeout_ms = timeout_ms
        self._conn: sqlite3.Connection | None = None
        self.paramstyle = "qmark"

    def connect(self) -> None:
        if self._conn:
            return
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        # isolation_level=None: autocommit, explicit BEGIN in transaction()
        conn = sqlite3.connect(
            self.path,
            timeout=self.timeout_ms / 1000,
            isolation_level=None,
            check_same_thread=False,
        )
        conn.row_factory = sqlite3.Row
        # Pragmas tuned for local app workloads
        if self.path != ":memory:":
            conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA foreign_keys=ON;")
        conn.execute(f"PRAGMA busy_timeout={int(self.timeout_ms)};")
        self._conn = conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    @contextmanager
    def transaction(self):
        assert self._conn is not None, "Engine not connected"
        # IMMEDIATE takes the write lock up front so check-then-write units cannot interleave
        self._conn.execute("BEGIN IMMEDIATE;")
        try:
            yield
        except BaseException:
            self._conn.execute("ROLLBACK;")
            raise
        self._conn.execute("COMMIT;")

    def execute(self, sql: str, params: Iterable[Any] | Mapping[str, Any] | None = None) -> int:
        assert self._conn is not None, "Engine not connected"
        cur = self._conn.execute(self.render(sql), _adapt(params))
        return cur.rowcount

    def query_one(self, sql: str, params: Iterable[Any] | Mapping[str, Any] | None = None) -> dict | None:
        assert self._conn is not None, "Engine not connected"
        cur = self._conn.execute(self.render(sql), _adapt(params))
        row = cur.fetchone()
        # drain so RETURNING statements complete before the next statement
        cur.fetchall()
        return dict(row) if row else None

    def query_all(self, sql: str, params: Iterable[Any] | Mapping[str, Any] | None = None) -> list[dict]:
        assert self._conn is not None, "Engine not connected"
        cur = self._conn.execute(self.render(sql), _adapt(params))
        return [dict(r) for r in cur.fetchall()]
