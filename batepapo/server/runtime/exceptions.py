# batepapo/server/runtime/exceptions.py
"""Custom exceptions for the chat runtime."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from batepapo.shared.exceptions import (
    BatePapoError,
    ParticipantConflict,
    ParticipantNotFound,
    StoreFailure,
    SubmissionInvalid,
    UnknownSender,
)
from batepapo.shared.logging import get_logger

__all__ = [
    "ParticipantConflict",
    "ParticipantNotFound",
    "StoreFailure",
    "SubmissionInvalid",
    "UnknownSender",
    "store_errors",
]

logger = get_logger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise non-domain exceptions from store calls as StoreFailure (logged once here)."""
    try:
        yield
    except BatePapoError:
        raise
    except Exception as e:
        logger.exception("Store call failed: %s", operation)
        raise StoreFailure(operation) from e
