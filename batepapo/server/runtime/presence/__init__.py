# batepapo/server/runtime/presence/__init__.py
from .registry import PresenceRegistry

__all__ = ["PresenceRegistry"]
