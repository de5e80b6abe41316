# batepapo/client/__init__.py
from .session import ChatClient

__all__ = ["ChatClient"]
