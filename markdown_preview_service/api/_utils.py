"""Shared helpers for editor API routes."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable
from html import escape
from typing import Protocol


class DisconnectAware(Protocol):
    async def is_disconnected(self) -> bool: ...


async def render_until_disconnect(
    request: DisconnectAware,
    render: Awaitable[bytes],
    poll_interval: float,
) -> bytes | None:
    """Await a render, cancelling it if the client goes away first.

    Args:
        request: Incoming request, polled for disconnection
        render: The pending render call
        poll_interval: Seconds between disconnect checks

    Returns:
        Rendered bytes, or None when the client disconnected and the render
        was cancelled

    Raises:
        Whatever the render raises.
    """
    task = asyncio.ensure_future(render)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                return None
    finally:
        if not task.done():
            task.cancel()


def build_upstream_failure_fragment(status_code: int, reason: str, body: str) -> str:
    """HTML shown in the preview pane when the upstream rejects a render."""
    return (
        f"<h3>{escape(reason or 'Unknown Status')} ({status_code})</h3>\n"
        "<p>The request to the upstream render service failed with the message:</p>\n"
        f"<p>{escape(body)}</p>"
    )
