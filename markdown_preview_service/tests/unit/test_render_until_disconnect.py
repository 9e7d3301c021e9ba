"""Unit tests for disconnect-aware render awaiting."""

from __future__ import annotations

import asyncio

import pytest

from markdown_preview_service.api._utils import (
    build_upstream_failure_fragment,
    render_until_disconnect,
)


class FakeRequest:
    def __init__(self, disconnect_after: int | None = None) -> None:
        self._disconnect_after = disconnect_after
        self.polls = 0

    async def is_disconnected(self) -> bool:
        self.polls += 1
        return self._disconnect_after is not None and self.polls >= self._disconnect_after


async def test_returns_render_result() -> None:
    async def render() -> bytes:
        return b"<p>done</p>"

    result = await render_until_disconnect(FakeRequest(), render(), poll_interval=0.01)

    assert result == b"<p>done</p>"


async def test_disconnect_cancels_render() -> None:
    cancelled = asyncio.Event()

    async def render() -> bytes:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return b"never"

    result = await render_until_disconnect(
        FakeRequest(disconnect_after=2), render(), poll_interval=0.01
    )

    assert result is None
    assert cancelled.is_set()


async def test_render_errors_propagate() -> None:
    async def render() -> bytes:
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        await render_until_disconnect(FakeRequest(), render(), poll_interval=0.01)


def test_failure_fragment_reports_status_and_escaped_body() -> None:
    fragment = build_upstream_failure_fragment(503, "Service Unavailable", "a < b")

    assert fragment.splitlines() == [
        "<h3>Service Unavailable (503)</h3>",
        "<p>The request to the upstream render service failed with the message:</p>",
        "<p>a &lt; b</p>",
    ]


def test_failure_fragment_without_reason() -> None:
    fragment = build_upstream_failure_fragment(599, "", "")

    assert fragment.startswith("<h3>Unknown Status (599)</h3>")
