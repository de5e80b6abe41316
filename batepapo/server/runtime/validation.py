# batepapo/server/runtime/validation.py
"""
Validation layer for incoming submissions.

Submissions are parsed with pydantic and every violation is rendered as a short
Joi-style message (``"name" is required``) so callers receive the full list at once.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from batepapo.server.runtime.exceptions import SubmissionInvalid
from batepapo.types import BROADCAST


class ParticipantSubmission(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _not_reserved(cls, v: str) -> str:
        if v == BROADCAST:
            raise PydanticCustomError("reserved_name", "is reserved")
        return v


class MessageSubmission(BaseModel):
    model_config = ConfigDict(extra="forbid")

    to: str = Field(min_length=1)
    text: str = Field(min_length=1)
    type: Literal["message", "private_message"]


_TEMPLATES = {
    "missing": "is required",
    "string_type": "must be a string",
    "string_too_short": "is not allowed to be empty",
    "literal_error": "must be one of [{expected}]",
    "extra_forbidden": "is not allowed",
    "model_type": "must be of type object",
    "dict_type": "must be of type object",
}


def _field_label(loc: tuple[Any, ...]) -> str:
    return ".".join(str(p) for p in loc) or "value"


def render_errors(exc: ValidationError) -> list[str]:
    """Render each pydantic error as '"<field>" <reason>'."""
    out: list[str] = []
    for err in exc.errors():
        label = _field_label(tuple(err.get("loc") or ()))
        template = _TEMPLATES.get(err["type"])
        if template is None:
            reason = err["msg"]
        elif err["type"] == "literal_error":
            expected = (err.get("ctx") or {}).get("expected", "")
            reason = template.format(expected=expected.replace("'", "").replace(" or ", ", "))
        else:
            reason = template
        out.append(f'"{label}" {reason}')
    return out


def validate_participant(body: Any) -> ParticipantSubmission:
    try:
        return ParticipantSubmission.model_validate(body)
    except ValidationError as e:
        raise SubmissionInvalid(render_errors(e)) from e


def validate_message(body: Any) -> MessageSubmission:
    try:
        return MessageSubmission.model_validate(body)
    except ValidationError as e:
        raise SubmissionInvalid(render_errors(e)) from e


def parse_limit(raw: str | None) -> int | None:
    """Query-string limit: absent -> None, otherwise a positive integer."""
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        raise SubmissionInvalid(['"limit" must be a positive integer'])
    return value
