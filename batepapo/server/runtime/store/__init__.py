# batepapo/server/runtime/store/__init__.py
# SQL backends load lazily: import them from .stores.<backend> or build them with create_store.
from .base import Store
from .factory import create_store
from .stores.memory_store import InMemoryStore

__all__ = [
    "Store",
    "InMemoryStore",
    "create_store",
]
