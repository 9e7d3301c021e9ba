"""Unit tests for the FastAPI error handler integration."""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from preview_service_libs.error_handling import raise_invalid_request, raise_processing_error
from preview_service_libs.error_handling.fastapi import (
    register_error_handlers,
    status_text_response,
)


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/bad")
    async def bad() -> None:
        raise_invalid_request(
            service="test_service",
            operation="bad",
            message="nope",
            correlation_id=uuid4(),
        )

    @app.get("/broken")
    async def broken() -> None:
        raise_processing_error(
            service="test_service",
            operation="broken",
            message="failed",
            correlation_id=uuid4(),
        )

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def test_invalid_request_maps_to_400(client: AsyncClient) -> None:
    response = await client.get("/bad")

    assert response.status_code == 400
    assert response.text == "Bad Request"


async def test_processing_error_maps_to_500(client: AsyncClient) -> None:
    response = await client.get("/broken")

    assert response.status_code == 500
    assert response.text == "Internal Server Error"


async def test_method_not_allowed_keeps_allow_header(client: AsyncClient) -> None:
    response = await client.delete("/bad")

    assert response.status_code == 405
    assert response.text == "Method Not Allowed"
    assert "GET" in response.headers["allow"]


def test_status_text_response_uses_reason_phrase() -> None:
    response = status_text_response(503)

    assert response.status_code == 503
    assert response.body == b"Service Unavailable"
