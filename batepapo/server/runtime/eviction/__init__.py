# batepapo/server/runtime/eviction/__init__.py
from .scheduler import EvictionScheduler

__all__ = ["EvictionScheduler"]
