"""Shared fixtures for editor service tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

import pytest
from dishka import Provider
from httpx import ASGITransport, AsyncClient

from markdown_preview_service.app import create_app
from markdown_preview_service.config import EditorSettings, get_settings
from markdown_preview_service.tests.test_provider import ClientFactory, make_test_settings


@pytest.fixture(autouse=True)
def _reset_cached_settings() -> None:
    get_settings.cache_clear()


@pytest.fixture
def settings() -> EditorSettings:
    return make_test_settings()


@pytest.fixture
def app_client(settings: EditorSettings) -> ClientFactory:
    """Build an app with the given render providers and yield an ASGI client.

    ASGITransport does not run the lifespan, so the container is closed here.
    """

    @asynccontextmanager
    async def _client(
        render_providers: Sequence[Provider],
        app_settings: EditorSettings | None = None,
    ) -> AsyncIterator[AsyncClient]:
        app = create_app(app_settings or settings, render_providers=render_providers)
        try:
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as client:
                yield client
        finally:
            await app.state.di_container.close()

    return _client
