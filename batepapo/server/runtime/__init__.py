# batepapo/server/runtime/__init__.py
from batepapo.server.runtime.server import BatePapo, Settings

__all__ = ["BatePapo", "Settings"]
