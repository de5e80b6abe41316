# batepapo/server/runtime/messages/log.py
from __future__ import annotations

from typing import List

from pydantic import ValidationError

from batepapo.server.runtime.exceptions import SubmissionInvalid, store_errors
from batepapo.server.runtime.store.base import Store
from batepapo.server.runtime.validation import render_errors
from batepapo.shared.clock import TimeOfDay, time_of_day
from batepapo.types import BROADCAST, Message, MessageType


class MessageLog:
    """
    Append-only, totally ordered log of chat events backed by the Store.

    The log only checks the fixed field set of a message; business rules (is the
    sender registered, may users post this type) belong to the callers.
    """

    def __init__(self, store: Store, *, clock: TimeOfDay = time_of_day):
        self._store = store
        self._clock = clock

    def compose(self, sender: str, to: str, text: str, type: MessageType | str) -> Message:
        """Build a message stamped with the current time of day."""
        try:
            return Message(from_=sender, to=to, text=text, type=type, time=self._clock())
        except ValidationError as e:
            raise SubmissionInvalid(render_errors(e)) from e

    def status(self, name: str, text: str) -> Message:
        """System-generated join/leave notice, broadcast to everyone."""
        return self.compose(name, BROADCAST, text, MessageType.status)

    async def append(self, message: Message) -> Message:
        with store_errors("append message"):
            return await self._store.append_message(message)

    async def post(self, sender: str, to: str, text: str, type: MessageType | str) -> Message:
        return await self.append(self.compose(sender, to, text, type))

    async def query_visible(self, viewer: str | None, limit: int | None = None) -> List[Message]:
        """
        Messages `viewer` may read, newest first.

        `limit` keeps the N most recent visible messages; None returns the full history.
        """
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0):
            raise SubmissionInvalid(['"limit" must be a positive integer'])
        with store_errors("load messages"):
            return await self._store.load_messages(visible_to=viewer, limit=limit)
