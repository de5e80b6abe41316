# batepapo/server/runtime/messages/visibility.py
from __future__ import annotations

from batepapo.types import Message, MessageType


def is_visible_to(message: Message, viewer: str | None) -> bool:
    """
    Returns True iff `viewer` may read `message`.

    Broadcast messages and status events are public. A private message is visible only
    to its sender and its named recipient; an anonymous viewer (None) never sees one.
    """
    if message.type != MessageType.private_message:
        return True
    if viewer is None:
        return False
    return message.from_ == viewer or message.to == viewer
