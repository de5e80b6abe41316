# batepapo/client/session.py
from __future__ import annotations

import logging
from typing import Any, Literal

import anyio
import httpx

from batepapo.errors import ErrorData
from batepapo.shared.exceptions import (
    BatePapoError,
    ParticipantConflict,
    ParticipantNotFound,
    SubmissionInvalid,
    UnknownSender,
)
from batepapo.types import BROADCAST, Message, Participant

logger = logging.getLogger("client")

# The web client pings every 5 s; well inside the default 10 s stale threshold.
DEFAULT_KEEP_ALIVE_INTERVAL = 5.0


def _error_from_response(response: httpx.Response, *, sender: str | None) -> BatePapoError:
    try:
        body: Any = response.json()
    except ValueError:
        body = None
    code = response.status_code
    path = response.request.url.path
    if code == 422 and isinstance(body, list):
        return SubmissionInvalid([str(d) for d in body])
    if code == 409:
        return ParticipantConflict(sender or "")
    if code == 404 and path.endswith("/status"):
        return ParticipantNotFound(sender)
    if code == 422 and path.endswith("/messages"):
        return UnknownSender(sender)
    message = body.get("message") if isinstance(body, dict) else None
    return BatePapoError(ErrorData(code=code, message=message or response.reason_phrase or "error"))


class ChatClient:
    """
    Async client for a chat server, bound to one participant name.

    Wraps an httpx.AsyncClient (see create_batepapo_http_client); error responses are
    raised as the same typed exceptions the server uses.
    """

    def __init__(self, http: httpx.AsyncClient, name: str):
        self._http = http
        self.name = name

    @property
    def _headers(self) -> dict[str, str]:
        return {"user": self.name}

    async def _call(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._http.request(method, url, **kwargs)
        if response.is_error:
            raise _error_from_response(response, sender=self.name)
        return response

    async def join(self) -> None:
        await self._call("POST", "/participants", json={"name": self.name})

    async def participants(self) -> list[Participant]:
        response = await self._call("GET", "/participants")
        return [Participant.model_validate(p) for p in response.json()]

    async def send(
        self,
        text: str,
        *,
        to: str = BROADCAST,
        type: Literal["message", "private_message"] = "message",
    ) -> None:
        await self._call(
            "POST",
            "/messages",
            json={"to": to, "text": text, "type": type},
            headers=self._headers,
        )

    async def whisper(self, to: str, text: str) -> None:
        await self.send(text, to=to, type="private_message")

    async def messages(self, limit: int | None = None) -> list[Message]:
        params = {"limit": str(limit)} if limit is not None else None
        response = await self._call("GET", "/messages", params=params, headers=self._headers)
        return [Message.model_validate(m) for m in response.json()]

    async def ping(self) -> None:
        await self._call("POST", "/status", headers=self._headers)

    async def keep_alive(self, interval: float = DEFAULT_KEEP_ALIVE_INTERVAL) -> None:
        """
        Ping forever (until cancelled). Transport errors are logged and retried on the
        next beat; a 404 means the participant was evicted and ends the loop.
        """
        while True:
            try:
                await self.ping()
            except ParticipantNotFound:
                logger.warning("Participant %s is no longer registered; stopping keep-alive", self.name)
                raise
            except httpx.TransportError:
                logger.warning("Status ping for %s failed; retrying", self.name, exc_info=True)
            await anyio.sleep(interval)
