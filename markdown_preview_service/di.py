"""Dependency Injection providers for the Markdown Preview Editor Service.

Provides Dishka DI container setup with APP-scoped infrastructure
and REQUEST-scoped context providers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from uuid import UUID, uuid4

import httpx
from dishka import Provider, Scope, provide
from fastapi import Request
from prometheus_client import CollectorRegistry

from markdown_preview_service.config import EditorSettings
from markdown_preview_service.implementations.editor_assets_loader import EditorAssets
from markdown_preview_service.implementations.identity_token_provider_impl import (
    MetadataIdentityTokenProvider,
)
from markdown_preview_service.implementations.upstream_render_client_impl import (
    UpstreamRenderClientImpl,
)
from markdown_preview_service.metrics import RenderMetrics
from markdown_preview_service.protocols import (
    IdentityTokenProviderProtocol,
    MarkdownRendererProtocol,
    RenderMetricsProtocol,
)


class EditorInfrastructureProvider(Provider):
    """Provides settings, the loaded assets and observability objects.

    Settings and assets are built before the container so that startup
    failures surface before the server accepts connections.
    """

    scope = Scope.APP

    def __init__(self, settings: EditorSettings, assets: EditorAssets) -> None:
        super().__init__()
        self._settings = settings
        self._assets = assets

    @provide
    def get_config(self) -> EditorSettings:
        """Provide settings singleton."""
        return self._settings

    @provide
    def get_assets(self) -> EditorAssets:
        """Provide the editor template and default markdown."""
        return self._assets

    @provide
    def get_metrics_registry(self) -> CollectorRegistry:
        """Provide an application-owned Prometheus registry."""
        return CollectorRegistry()

    @provide
    def get_render_metrics(self, registry: CollectorRegistry) -> RenderMetricsProtocol:
        """Provide render metrics bound to the application registry."""
        return RenderMetrics(registry)


class UpstreamRenderProvider(Provider):
    """Provides the HTTP client and the upstream render client."""

    scope = Scope.APP

    @provide
    async def get_http_client(self, config: EditorSettings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.UPSTREAM_TIMEOUT_SECONDS,
                connect=config.UPSTREAM_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide
    def provide_token_provider(
        self, config: EditorSettings, http_client: httpx.AsyncClient
    ) -> IdentityTokenProviderProtocol:
        """Provide the metadata server identity token provider."""
        return MetadataIdentityTokenProvider(
            http_client,
            metadata_url=config.METADATA_SERVER_URL,
            timeout_seconds=config.METADATA_TIMEOUT_SECONDS,
        )

    @provide
    def provide_renderer(
        self,
        config: EditorSettings,
        http_client: httpx.AsyncClient,
        token_provider: IdentityTokenProviderProtocol,
        metrics: RenderMetricsProtocol,
    ) -> MarkdownRendererProtocol:
        """Provide the upstream render client singleton."""
        return UpstreamRenderClientImpl(
            http_client,
            url=config.UPSTREAM_RENDER_URL,
            token_provider=token_provider if config.upstream_authenticated else None,
            metrics=metrics,
            timeout=httpx.Timeout(
                config.UPSTREAM_TIMEOUT_SECONDS,
                connect=config.UPSTREAM_CONNECT_TIMEOUT_SECONDS,
            ),
        )


class RequestContextProvider(Provider):
    """Request-scoped provider for correlation context.

    The correlation ID is set on request state by CorrelationIDMiddleware;
    the Request itself comes from dishka's FastapiProvider.
    """

    @provide(scope=Scope.REQUEST)
    def provide_correlation_id(self, request: Request) -> UUID:
        """Provide correlation ID from request state."""
        return getattr(request.state, "correlation_id", uuid4())
