from __future__ import annotations

from typing import Any

from batepapo.errors import (
    CONFLICT,
    INTERNAL_ERROR,
    NOT_FOUND,
    UNPROCESSABLE_ENTITY,
    ErrorData,
)


class BatePapoError(Exception):
    """
    Base exception for chat failures, both raised by the server core and rebuilt by the
    client from error responses.
    """

    error: ErrorData

    def __init__(self, error: ErrorData):
        """Initialize BatePapoError."""
        super().__init__(error.message)
        self.error = error

    @property
    def code(self) -> int:
        return self.error.code


class SubmissionInvalid(BatePapoError):
    """Malformed or missing input fields. ``details`` lists every violation."""

    def __init__(self, details: list[str], message: str = "Invalid submission"):
        super().__init__(ErrorData(code=UNPROCESSABLE_ENTITY, message=message, data=list(details)))

    @property
    def details(self) -> list[str]:
        return list(self.error.data or [])


class ParticipantConflict(BatePapoError):
    """A participant with the same name is already registered."""

    def __init__(self, name: str):
        super().__init__(
            ErrorData(code=CONFLICT, message="Participant already exists", data={"name": name})
        )


class ParticipantNotFound(BatePapoError):
    """Status ping for a participant that is not registered."""

    def __init__(self, name: str | None, code: int = NOT_FOUND):
        super().__init__(
            ErrorData(code=code, message="Participant not found", data={"name": name})
        )


class UnknownSender(ParticipantNotFound):
    """Message posted by a name that is not registered; reported as 422, not 404."""

    def __init__(self, name: str | None):
        super().__init__(name, code=UNPROCESSABLE_ENTITY)


class StoreFailure(BatePapoError):
    """Generic record store failure (network, timeout, internal)."""

    def __init__(self, operation: str, data: Any | None = None):
        super().__init__(
            ErrorData(code=INTERNAL_ERROR, message=f"Store failure during {operation}", data=data)
        )
