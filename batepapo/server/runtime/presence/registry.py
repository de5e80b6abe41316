# batepapo/server/runtime/presence/registry.py
from __future__ import annotations

from typing import List

from batepapo.server.runtime.exceptions import (
    ParticipantConflict,
    ParticipantNotFound,
    store_errors,
)
from batepapo.server.runtime.messages.log import MessageLog
from batepapo.server.runtime.store.base import Store
from batepapo.server.runtime.validation import validate_participant
from batepapo.shared.clock import Clock, now_ms
from batepapo.shared.logging import get_logger
from batepapo.types import JOIN_TEXT, LEAVE_TEXT, Participant

logger = get_logger(__name__)


class PresenceRegistry:
    """
    Tracks active participants and their last-seen time.

    - register: absent -> active, announced with a "joined" status event.
    - touch: active -> active, refreshes lastSeenAt.
    - evict_stale_and_announce: active -> absent, announced with a "left" status event.

    Each transition that also writes to the message log is a single atomic store
    operation, so the participant table and the log never disagree.
    """

    def __init__(self, store: Store, log: MessageLog, *, clock: Clock = now_ms):
        self._store = store
        self._log = log
        self._clock = clock

    async def register(self, name: str) -> Participant:
        validate_participant({"name": name})
        participant = Participant(name=name, lastSeenAt=self._clock())
        joined = self._log.status(name, JOIN_TEXT)
        with store_errors("register participant"):
            inserted = await self._store.insert_participant(participant, joined)
        if not inserted:
            raise ParticipantConflict(name)
        logger.info("Participant joined: %s", name)
        return participant

    async def touch(self, name: str) -> Participant:
        now = self._clock()
        with store_errors("touch participant"):
            found = await self._store.touch_participant(name, now)
        if not found:
            raise ParticipantNotFound(name)
        logger.debug("Status ping from %s", name)
        return Participant(name=name, lastSeenAt=now)

    async def exists(self, name: str | None) -> bool:
        if not name:
            return False
        with store_errors("lookup participant"):
            return await self._store.get_participant(name) is not None

    async def list_participants(self) -> List[Participant]:
        with store_errors("list participants"):
            return await self._store.list_participants()

    async def evict_stale_and_announce(self, stale_threshold_ms: int, now: int) -> list[str]:
        """
        Evict every participant silent since before `now - stale_threshold_ms`.

        The staleness predicate is re-checked atomically at delete time, so a participant
        touched after the scan read it stays registered and gets no "left" event.
        Returns the names actually evicted.
        """
        cutoff = now - stale_threshold_ms
        with store_errors("scan stale participants"):
            stale = await self._store.list_stale_participants(cutoff)

        evicted: list[str] = []
        for p in stale:
            left = self._log.status(p.name, LEAVE_TEXT)
            with store_errors("evict participant"):
                removed = await self._store.evict_participant(p.name, cutoff, left)
            if removed:
                evicted.append(p.name)
                logger.info("Participant evicted after %d ms of silence: %s", now - p.lastSeenAt, p.name)
            else:
                logger.debug("Participant refreshed during scan, kept: %s", p.name)
        return evicted
