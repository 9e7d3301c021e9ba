"""Unit tests for the upstream render client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import httpx
import pytest
from preview_common.error_enums import ErrorCode, RenderErrorCode
from preview_service_libs.error_handling import (
    PreviewServiceError,
    create_error_detail_with_context,
)
from respx import MockRouter

from markdown_preview_service.implementations.upstream_render_client_impl import (
    UpstreamRenderClientImpl,
)
from markdown_preview_service.protocols import (
    IdentityTokenProviderProtocol,
    RenderMetricsProtocol,
)
from markdown_preview_service.tests.test_provider import TEST_RENDER_URL

CORRELATION_ID = uuid4()


@pytest.fixture
def metrics() -> Mock:
    return Mock(spec=RenderMetricsProtocol)


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient() as client:
        yield client


def make_client(
    http_client: httpx.AsyncClient,
    metrics: Mock,
    token_provider: IdentityTokenProviderProtocol | None = None,
) -> UpstreamRenderClientImpl:
    return UpstreamRenderClientImpl(
        http_client,
        url=TEST_RENDER_URL,
        token_provider=token_provider,
        metrics=metrics,
        timeout=httpx.Timeout(10.0, connect=3.0),
    )


class TestUnauthenticatedRender:
    async def test_posts_markdown_and_returns_body(
        self, http_client: httpx.AsyncClient, metrics: Mock, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.post(TEST_RENDER_URL).mock(
            return_value=httpx.Response(200, content=b"<p><strong>x</strong></p>")
        )
        client = make_client(http_client, metrics)

        html = await client.render(b"**x**", CORRELATION_ID)

        assert html == b"<p><strong>x</strong></p>"
        request = route.calls.last.request
        assert request.content == b"**x**"
        assert "authorization" not in request.headers
        assert request.headers["X-Correlation-ID"] == str(CORRELATION_ID)
        assert not client.authenticated
        metrics.observe_upstream_duration.assert_called_once()

    async def test_empty_markdown_is_still_sent(
        self, http_client: httpx.AsyncClient, metrics: Mock, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.post(TEST_RENDER_URL).mock(return_value=httpx.Response(200))
        client = make_client(http_client, metrics)

        html = await client.render(b"", CORRELATION_ID)

        assert html == b""
        assert route.call_count == 1
        assert route.calls.last.request.content == b""

    async def test_non_ok_status_carries_status_reason_and_body(
        self, http_client: httpx.AsyncClient, metrics: Mock, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(TEST_RENDER_URL).mock(
            return_value=httpx.Response(503, content=b"overloaded")
        )
        client = make_client(http_client, metrics)

        with pytest.raises(PreviewServiceError) as exc_info:
            await client.render(b"# hi", CORRELATION_ID)

        error = exc_info.value
        assert error.error_code == RenderErrorCode.UPSTREAM_NOT_OK.value
        assert error.error_detail.details["status_code"] == 503
        assert error.error_detail.details["reason"] == "Service Unavailable"
        assert error.error_detail.details["body"] == "overloaded"
        assert error.correlation_id == str(CORRELATION_ID)

    async def test_redirect_is_not_ok(
        self, http_client: httpx.AsyncClient, metrics: Mock, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(TEST_RENDER_URL).mock(
            return_value=httpx.Response(302, headers={"Location": "http://elsewhere.test/"})
        )
        client = make_client(http_client, metrics)

        with pytest.raises(PreviewServiceError) as exc_info:
            await client.render(b"x", CORRELATION_ID)

        assert exc_info.value.error_detail.details["status_code"] == 302

    async def test_connection_failure_is_connection_error(
        self, http_client: httpx.AsyncClient, metrics: Mock, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(TEST_RENDER_URL).mock(side_effect=httpx.ConnectError("refused"))
        client = make_client(http_client, metrics)

        with pytest.raises(PreviewServiceError) as exc_info:
            await client.render(b"x", CORRELATION_ID)

        assert exc_info.value.error_code == ErrorCode.CONNECTION_ERROR.value
        assert exc_info.value.error_detail.details["target"] == TEST_RENDER_URL
        metrics.observe_upstream_duration.assert_called_once()

    async def test_timeout_is_timeout_error(
        self, http_client: httpx.AsyncClient, metrics: Mock, respx_mock: MockRouter
    ) -> None:
        respx_mock.post(TEST_RENDER_URL).mock(side_effect=httpx.ReadTimeout("slow"))
        client = make_client(http_client, metrics)

        with pytest.raises(PreviewServiceError) as exc_info:
            await client.render(b"x", CORRELATION_ID)

        assert exc_info.value.error_code == ErrorCode.TIMEOUT.value
        assert exc_info.value.error_detail.details["timeout_seconds"] == 10.0


class TestAuthenticatedRender:
    async def test_token_scoped_to_render_url_is_sent_as_bearer(
        self, http_client: httpx.AsyncClient, metrics: Mock, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.post(TEST_RENDER_URL).mock(
            return_value=httpx.Response(200, content=b"<p>ok</p>")
        )
        token_provider = Mock(spec=IdentityTokenProviderProtocol)
        token_provider.fetch_token = AsyncMock(return_value="tok-123")
        client = make_client(http_client, metrics, token_provider)

        await client.render(b"ok", CORRELATION_ID)

        token_provider.fetch_token.assert_awaited_once_with(TEST_RENDER_URL, CORRELATION_ID)
        assert route.calls.last.request.headers["authorization"] == "Bearer tok-123"
        assert client.authenticated

    @pytest.mark.respx(assert_all_called=False)
    async def test_credential_failure_makes_no_upstream_request(
        self, http_client: httpx.AsyncClient, metrics: Mock, respx_mock: MockRouter
    ) -> None:
        route = respx_mock.post(TEST_RENDER_URL).mock(return_value=httpx.Response(200))
        token_provider = Mock(spec=IdentityTokenProviderProtocol)
        token_provider.fetch_token = AsyncMock(
            side_effect=PreviewServiceError(
                create_error_detail_with_context(
                    error_code=RenderErrorCode.CREDENTIAL_ACQUISITION_FAILED,
                    message="metadata.Get: no metadata server",
                    service="test_service",
                    operation="fetch_identity_token",
                    correlation_id=CORRELATION_ID,
                )
            )
        )
        client = make_client(http_client, metrics, token_provider)

        with pytest.raises(PreviewServiceError) as exc_info:
            await client.render(b"x", CORRELATION_ID)

        assert exc_info.value.error_code == RenderErrorCode.CREDENTIAL_ACQUISITION_FAILED.value
        assert not route.called
        metrics.observe_upstream_duration.assert_not_called()

