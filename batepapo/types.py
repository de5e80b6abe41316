# batepapo/types.py
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Reserved recipient meaning "every participant". Never a valid participant name.
BROADCAST = "Todos"

JOIN_TEXT = "joined"
LEAVE_TEXT = "left"


class MessageType(str, Enum):
    message = "message"
    private_message = "private_message"
    status = "status"


class Participant(BaseModel):
    """A registered chat user tracked for liveness."""

    name: str = Field(min_length=1)
    # milliseconds since epoch
    lastSeenAt: int


class Message(BaseModel):
    """
    One immutable chat event.

    The sender is stored as ``from_`` because ``from`` is a keyword; it is always
    serialized as ``from``. ``seq`` is assigned by the store on append and gives the
    log its total order; it is not part of the public representation.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_: str = Field(alias="from", min_length=1)
    to: str = Field(min_length=1)
    text: str = Field(min_length=1)
    type: MessageType
    time: str
    seq: int | None = None

    def public_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude={"seq"})
