# batepapo/__init__.py
from .types import BROADCAST, Message, MessageType, Participant

__all__ = ["BROADCAST", "Message", "MessageType", "Participant"]
