# batepapo/server/runtime/limits.py
"""Runtime defaults and limits."""

# A participant silent for longer than this is evicted on the next tick.
DEFAULT_STALE_THRESHOLD_MS = 10_000

# Period of the eviction scan.
DEFAULT_EVICTION_INTERVAL_MS = 15_000

# Upper bound for a single record store call (connect, lock wait, statement).
DEFAULT_STORE_TIMEOUT_MS = 5_000

# Largest value a SQL LIMIT accepts (signed 64-bit); larger limits already mean "all rows".
MAX_SQL_LIMIT = 2**63 - 1
