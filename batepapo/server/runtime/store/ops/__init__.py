# batepapo/server/runtime/store/ops/__init__.py
from .migrations import apply_initial_schema_sqlite, apply_initial_schema_postgres

__all__ = ["apply_initial_schema_sqlite", "apply_initial_schema_postgres"]
