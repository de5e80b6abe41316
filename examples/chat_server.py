# examples/chat_server.py
from __future__ import annotations

# --- batepapo imports ---
from batepapo.server.runtime.server import BatePapo
from batepapo.server.runtime.store.stores.sqlite_store import SqliteStore

# ---------------------------
# Server
# ---------------------------
# Everything else (port, thresholds, log level) comes from BATEPAPO_* env vars or .env.
server = BatePapo(
    store=SqliteStore(path="batepapo_data/chat.sqlite"),
    stale_threshold_ms=10_000,
    eviction_interval_ms=15_000,
)

# Serve over HTTP.
if __name__ == "__main__":
    server.run()
