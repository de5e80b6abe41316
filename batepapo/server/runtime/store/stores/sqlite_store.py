# batepapo/server/runtime/store/stores/sqlite_store.py
from __future__ import annotations

from pathlib import Path

from batepapo.server.runtime.limits import DEFAULT_STORE_TIMEOUT_MS

from ..engines.sqlite_engine import SqliteEngine
from ..ops.migrations import apply_initial_schema_sqlite
from .sql_store import SqlStore


class SqliteStore(SqlStore):
    """Durable store backed by a local SQLite file (or ":memory:")."""

    def __init__(self, path: str | Path, *, timeout_ms: int = DEFAULT_STORE_TIMEOUT_MS):
        engine = SqliteEngine(path, timeout_ms=timeout_ms)
        engine.connect()
        apply_initial_schema_sqlite(engine)  # idempotent
        super().__init__(engine)
