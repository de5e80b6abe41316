# batepapo/server/runtime/store/stores/memory_store.py
from __future__ import annotations

import itertools
from typing import List

from batepapo.server.runtime.messages.visibility import is_visible_to
from batepapo.types import Message, Participant

from ..base import Store


class InMemoryStore(Store):
    """
    Non-durable store.

    Compound operations contain no await points, so on a single event loop they are
    atomic with respect to every other request and to the eviction scheduler.
    """

    def __init__(self):
        self._participants: dict[str, Participant] = {}  # name -> participant
        self._messages: list[Message] = []  # insertion order == log order
        self._seq = itertools.count(1)

    # ---- participants ----------------------------------------------------

    async def insert_participant(self, participant: Participant, join_message: Message) -> bool:
        if participant.name in self._participants:
            return False
        self._messages.append(self._stamp(join_message))
        self._participants[participant.name] = participant.model_copy()
        return True

    async def get_participant(self, name: str) -> Participant | None:
        p = self._participants.get(name)
        return p.model_copy() if p else None

    async def list_participants(self) -> List[Participant]:
        return [p.model_copy() for p in self._participants.values()]

    async def touch_participant(self, name: str, last_seen_at: int) -> bool:
        p = self._participants.get(name)
        if p is None:
            return False
        p.lastSeenAt = last_seen_at
        return True

    async def list_stale_participants(self, cutoff: int) -> List[Participant]:
        return [p.model_copy() for p in self._participants.values() if p.lastSeenAt < cutoff]

    async def evict_participant(self, name: str, cutoff: int, leave_message: Message) -> bool:
        p = self._participants.get(name)
        if p is None or p.lastSeenAt >= cutoff:
            return False
        self._messages.append(self._stamp(leave_message))
        del self._participants[name]
        return True

    # ---- messages --------------------------------------------------------

    async def append_message(self, message: Message) -> Message:
        stored = self._stamp(message)
        self._messages.append(stored)
        return stored

    async def load_messages(self, *, visible_to: str | None, limit: int | None = None) -> List[Message]:
        out: list[Message] = []
        for m in reversed(self._messages):
            if not is_visible_to(m, visible_to):
                continue
            out.append(m)
            if limit is not None and len(out) >= limit:
                break
        return out

    # ---- internals -------------------------------------------------------

    def _stamp(self, message: Message) -> Message:
        return message.model_copy(update={"seq": next(self._seq)})
