# batepapo/errors.py
from typing import Any

from pydantic import BaseModel, ConfigDict

# HTTP status codes used by the chat surface
NOT_FOUND = 404
CONFLICT = 409
UNPROCESSABLE_ENTITY = 422
INTERNAL_ERROR = 500


class ErrorData(BaseModel):
    """Error information carried by chat exceptions and error responses."""

    code: int
    """The HTTP status the error maps to."""

    message: str
    """
    A short description of the error. The message SHOULD be limited to a concise single
    sentence.
    """

    data: Any | None = None
    """
    Additional information about the error, e.g. the full list of violated fields for a
    rejected submission.
    """

    model_config = ConfigDict(extra="allow")
