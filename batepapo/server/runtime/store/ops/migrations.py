# batepapo/server/runtime/store/ops/migrations.py
from __future__ import annotations

from pathlib import Path

from ..engines.engine import Engine


_SQLITE_INIT = (Path(__file__).parent.parent / "sql" / "sqlite" / "schema.sql").read_text()
_PG_INIT = (Path(__file__).parent.parent / "sql" / "postgres" / "schema.sql").read_text()

SCHEMA_VERSION = 1


def _statements(script: str) -> list[str]:
    return [s.strip() + ";" for s in script.split(";") if s.strip()]


def _apply(engine: Engine, script: str) -> None:
    # idempotent: guard by schema_version existence
    engine.execute(
        "CREATE TABLE IF NOT EXISTS schema_version(version INTEGER NOT NULL);"
    )
    row = engine.query_one("SELECT version FROM schema_version LIMIT 1;")
    if row is None:
        with engine.transaction():
            for stmt in _statements(script):
                engine.execute(stmt)
            engine.execute("INSERT INTO schema_version(version) VALUES (%s);", (SCHEMA_VERSION,))


def apply_initial_schema_sqlite(engine: Engine) -> None:
    _apply(engine, _SQLITE_INIT)


def apply_initial_schema_postgres(engine: Engine) -> None:
    _apply(engine, _PG_INIT)
