# batepapo/server/runtime/store/stores/sql_store.py
from __future__ import annotations

from typing import List

from batepapo.types import Message, MessageType, Participant

from ..base import Store
from ..dao.messages_dao import MessagesDAO
from ..dao.participants_dao import ParticipantsDAO
from ..engines.engine import Engine


def _participant_from_row(r: dict) -> Participant:
    return Participant(name=r["name"], lastSeenAt=int(r["last_seen_at"]))


def _message_from_row(r: dict) -> Message:
    return Message(
        from_=r["sender"],
        to=r["recipient"],
        text=r["text"],
        type=MessageType(r["type"]),
        time=r["time"],
        seq=int(r["seq"]),
    )


def _message_row(m: Message) -> dict:
    return {
        "sender": m.from_,
        "recipient": m.to,
        "text": m.text,
        "type": m.type.value,
        "time": m.time,
    }


class SqlStore(Store):
    """
    Durable store over an Engine.
    - All methods are async per ABC, but DB access is sync (short, time-bounded ops).
    - Compound operations run inside a single engine transaction.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.participants = ParticipantsDAO(engine)
        self.messages = MessagesDAO(engine)

    # -------- participants -------------------------------------------------

    async def insert_participant(self, participant: Participant, join_message: Message) -> bool:
        with self.engine.transaction():
            if not self.participants.insert_if_absent(participant.name, participant.lastSeenAt):
                return False
            self.messages.append(_message_row(join_message))
        return True

    async def get_participant(self, name: str) -> Participant | None:
        row = self.participants.get(name)
        return _participant_from_row(row) if row else None

    async def list_participants(self) -> List[Participant]:
        return [_participant_from_row(r) for r in self.participants.list_all()]

    async def touch_participant(self, name: str, last_seen_at: int) -> bool:
        return self.participants.touch(name, last_seen_at)

    async def list_stale_participants(self, cutoff: int) -> List[Participant]:
        return [_participant_from_row(r) for r in self.participants.list_stale(cutoff)]

    async def evict_participant(self, name: str, cutoff: int, leave_message: Message) -> bool:
        with self.engine.transaction():
            if not self.participants.delete_if_stale(name, cutoff):
                return False
            self.messages.append(_message_row(leave_message))
        return True

    # -------- messages -----------------------------------------------------

    async def append_message(self, message: Message) -> Message:
        seq = self.messages.append(_message_row(message))
        return message.model_copy(update={"seq": seq})

    async def load_messages(self, *, visible_to: str | None, limit: int | None = None) -> List[Message]:
        return [_message_from_row(r) for r in self.messages.load_visible(visible_to, limit)]

    # -------- lifecycle ----------------------------------------------------

    async def close(self) -> None:
        self.engine.close()
