# batepapo/server/runtime/store/dao/__init__.py
from .participants_dao import ParticipantsDAO
from .messages_dao import MessagesDAO

__all__ = ["ParticipantsDAO", "MessagesDAO"]
