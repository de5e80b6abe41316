# batepapo/server/__init__.py
from .runtime import BatePapo, Settings

__all__ = ["BatePapo", "Settings"]
