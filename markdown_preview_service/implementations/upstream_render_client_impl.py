"""Upstream render service HTTP client."""

from __future__ import annotations

import time
from uuid import UUID

import httpx
from preview_service_libs.error_handling import (
    raise_connection_error,
    raise_timeout_error,
    raise_upstream_not_ok,
)
from preview_service_libs.logging_utils import create_service_logger

from markdown_preview_service.protocols import (
    IdentityTokenProviderProtocol,
    MarkdownRendererProtocol,
    RenderMetricsProtocol,
)

logger = create_service_logger("editor.render_client")


class UpstreamRenderClientImpl(MarkdownRendererProtocol):
    """Delegates markdown rendering to the upstream render service.

    URL and authentication mode are fixed at construction. Each call makes at
    most one upstream request; failures are never retried.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str,
        token_provider: IdentityTokenProviderProtocol | None,
        metrics: RenderMetricsProtocol,
        timeout: httpx.Timeout,
    ) -> None:
        """Initialize the render client.

        Args:
            http_client: Shared httpx AsyncClient instance
            url: Upstream render endpoint
            token_provider: Identity token source, or None for unauthenticated calls
            metrics: Render metrics collector
            timeout: Timeout applied to the upstream request
        """
        self._client = http_client
        self._url = url
        self._token_provider = token_provider
        self._metrics = metrics
        self._timeout = timeout

    @property
    def authenticated(self) -> bool:
        return self._token_provider is not None

    async def render(self, markdown: bytes, correlation_id: UUID) -> bytes:
        """Render markdown via the upstream service.

        Args:
            markdown: Raw markdown bytes, forwarded unchanged (empty is allowed)
            correlation_id: Request correlation ID

        Returns:
            Upstream response body, verbatim

        Raises:
            PreviewServiceError: see MarkdownRendererProtocol.render
        """
        headers = {"X-Correlation-ID": str(correlation_id)}
        if self._token_provider is not None:
            # Credential failures propagate before any upstream request is made
            token = await self._token_provider.fetch_token(self._url, correlation_id)
            headers["Authorization"] = f"Bearer {token}"

        logger.debug(
            "Sending markdown to upstream renderer",
            markdown_bytes=len(markdown),
            authenticated=self.authenticated,
            correlation_id=str(correlation_id),
        )

        started = time.perf_counter()
        try:
            response = await self._client.post(
                self._url, content=markdown, headers=headers, timeout=self._timeout
            )
        except httpx.TimeoutException as e:
            raise_timeout_error(
                service="markdown_preview_service",
                operation="render_markdown",
                timeout_seconds=self._timeout.read or 0.0,
                message=f"Upstream render request timed out: {type(e).__name__}",
                correlation_id=correlation_id,
                target=self._url,
            )
        except httpx.HTTPError as e:
            raise_connection_error(
                service="markdown_preview_service",
                operation="render_markdown",
                target=self._url,
                message=f"Upstream render request failed: {e}",
                correlation_id=correlation_id,
                error_type=type(e).__name__,
            )
        finally:
            self._metrics.observe_upstream_duration(time.perf_counter() - started)

        if response.status_code != httpx.codes.OK:
            raise_upstream_not_ok(
                service="markdown_preview_service",
                operation="render_markdown",
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.content.decode("utf-8", errors="replace"),
                correlation_id=correlation_id,
                target=self._url,
            )

        logger.info(
            "Rendered markdown upstream",
            markdown_bytes=len(markdown),
            html_bytes=len(response.content),
            correlation_id=str(correlation_id),
        )
        return response.content
