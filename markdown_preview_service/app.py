"""Markdown Preview Editor Service.

Serves the markdown editor page and renders submitted markdown by delegating
to an upstream render service.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from dishka import Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from preview_service_libs.error_handling import PreviewServiceError
from preview_service_libs.error_handling.fastapi import (
    register_error_handlers as register_fastapi_error_handlers,
)
from preview_service_libs.logging_utils import configure_service_logging, create_service_logger

from markdown_preview_service.api.editor_routes import router as editor_router
from markdown_preview_service.api.health_routes import router as health_router
from markdown_preview_service.config import EditorSettings, get_settings
from markdown_preview_service.di import (
    EditorInfrastructureProvider,
    RequestContextProvider,
    UpstreamRenderProvider,
)
from markdown_preview_service.implementations.editor_assets_loader import load_editor_assets
from markdown_preview_service.middleware import CorrelationIDMiddleware

logger = create_service_logger("editor.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the DI container (and its pooled HTTP client) on shutdown."""
    yield
    logger.info("Shutting down editor service...")
    await app.state.di_container.close()


def create_app(
    settings: EditorSettings | None = None,
    render_providers: Sequence[Provider] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings and static assets are loaded here, so a missing upstream URL or
    an unreadable template aborts startup before any request is served.

    Args:
        settings: Settings to use instead of the environment
        render_providers: Providers replacing UpstreamRenderProvider (tests)
    """
    settings = settings or get_settings()
    assets = load_editor_assets(settings.template_path, settings.default_markdown_path)

    if not settings.upstream_authenticated:
        logger.warning("editor: starting in unauthenticated upstream mode")

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="0.1.0",
        description="Markdown Preview Editor - renders markdown through an upstream service",
        docs_url="/docs" if settings.is_development() else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development() else None,
        lifespan=lifespan,
    )

    register_fastapi_error_handlers(app)
    app.add_middleware(CorrelationIDMiddleware)

    app.include_router(health_router)
    app.include_router(editor_router)

    if render_providers is None:
        render_providers = [UpstreamRenderProvider()]
    container = make_async_container(
        EditorInfrastructureProvider(settings, assets),
        *render_providers,
        RequestContextProvider(),
        FastapiProvider(),
    )
    setup_dishka(container, app)
    app.state.di_container = container

    logger.info(
        "Editor service configured",
        upstream_url=settings.UPSTREAM_RENDER_URL,
        authenticated=settings.upstream_authenticated,
    )
    return app


def main() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except PreviewServiceError as e:
        configure_service_logging("markdown-preview-editor")
        logger.critical(f"editor: startup failed: {e}")
        raise SystemExit(1) from e

    configure_service_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )
    uvicorn.run(
        "markdown_preview_service.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
