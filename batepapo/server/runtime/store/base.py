# batepapo/server/runtime/store/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from batepapo.types import Message, Participant


class Store(ABC):
    """Persistence contract for participants and the message log."""

    # ---- participants ----------------------------------------------------
    @abstractmethod
    async def insert_participant(self, participant: Participant, join_message: Message) -> bool:
        """
        Insert `participant` and append `join_message` atomically.
        Returns False (and writes nothing) when the name is already taken.
        """

    @abstractmethod
    async def get_participant(self, name: str) -> Participant | None: ...

    @abstractmethod
    async def list_participants(self) -> List[Participant]: ...

    @abstractmethod
    async def touch_participant(self, name: str, last_seen_at: int) -> bool:
        """Set lastSeenAt; False when the participant does not exist."""

    @abstractmethod
    async def list_stale_participants(self, cutoff: int) -> List[Participant]:
        """Participants whose lastSeenAt is strictly older than `cutoff`."""

    @abstractmethod
    async def evict_participant(self, name: str, cutoff: int, leave_message: Message) -> bool:
        """
        Remove `name` and append `leave_message` atomically, but only while its
        lastSeenAt is still older than `cutoff`. Returns whether it was evicted.
        """

    # ---- messages --------------------------------------------------------
    @abstractmethod
    async def append_message(self, message: Message) -> Message:
        """Store as the newest entry; returns the record with its sequence number."""

    @abstractmethod
    async def load_messages(
        self,
        *,
        visible_to: str | None,
        limit: int | None = None,
    ) -> List[Message]:
        """Visible messages for `visible_to`, newest first, at most `limit`."""

    # ---- lifecycle -------------------------------------------------------
    async def close(self) -> None:
        return None
