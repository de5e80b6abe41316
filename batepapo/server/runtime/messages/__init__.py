# batepapo/server/runtime/messages/__init__.py
from .log import MessageLog
from .visibility import is_visible_to

__all__ = ["MessageLog", "is_visible_to"]
