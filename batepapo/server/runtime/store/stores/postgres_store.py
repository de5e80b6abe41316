# batepapo/server/runtime/store/stores/postgres_store.py
from __future__ import annotations

from batepapo.server.runtime.limits import DEFAULT_STORE_TIMEOUT_MS

from ..engines.postgres_engine import PostgresEngine
from ..ops.migrations import apply_initial_schema_postgres
from .sql_store import SqlStore


class PostgresStore(SqlStore):
    """
    Durable store backed by PostgreSQL (psycopg3).
    `timeout_ms` bounds connection setup and every statement.
    """

    def __init__(self, dsn: str, *, timeout_ms: int = DEFAULT_STORE_TIMEOUT_MS):
        engine = PostgresEngine(dsn, timeout_ms=timeout_ms)
        engine.connect()
        apply_initial_schema_postgres(engine)  # idempotent
        super().__init__(engine)
