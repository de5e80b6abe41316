# batepapo/server/runtime/store/stores/__init__.py
from .memory_store import InMemoryStore

__all__ = ["InMemoryStore"]
