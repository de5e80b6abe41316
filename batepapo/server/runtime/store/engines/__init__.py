# batepapo/server/runtime/store/engines/__init__.py
# PostgresEngine (psycopg) is imported from .postgres_engine by the stores that need it.
from .engine import Engine
from .sqlite_engine import SqliteEngine

__all__ = ["Engine", "SqliteEngine"]
