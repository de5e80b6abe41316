# batepapo/shared/_httpx_utils.py
"""Utilities for creating standardized httpx AsyncClient instances."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import httpx

__all__ = ["create_batepapo_http_client"]


@asynccontextmanager
async def create_batepapo_http_client(
    base_url: str = "",
    headers: dict[str, str] | None = None,
    timeout: httpx.Timeout | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Provide a standardized httpx AsyncClient as an async context manager.

    Common defaults:
    - follow_redirects=True (always enabled)
    - Default timeout of 10 seconds if not specified

    Args:
        base_url: Root URL of the chat server, e.g. "http://127.0.0.1:5000".
        headers: Optional headers to include with all requests.
        timeout: Request timeout as an httpx.Timeout object.
        transport: Optional transport, e.g. ``httpx.ASGITransport(app)`` to talk to an
            in-process application.

    Yields:
        A configured httpx.AsyncClient instance.

    Examples:
        async with create_batepapo_http_client("http://localhost:5000") as client:
            response = await client.get("/participants")
    """
    kwargs: dict[str, Any] = {
        "base_url": base_url,
        "follow_redirects": True,
    }

    if timeout is None:
        kwargs["timeout"] = httpx.Timeout(10.0)
    else:
        kwargs["timeout"] = timeout

    if headers is not None:
        kwargs["headers"] = headers

    if transport is not None:
        kwargs["transport"] = transport

    client = httpx.AsyncClient(**kwargs)
    try:
        yield client
    finally:
        await client.aclose()
