"""Health and metrics routes for the editor service."""

from __future__ import annotations

from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from preview_service_libs.logging_utils import create_service_logger

from markdown_preview_service.config import EditorSettings
from markdown_preview_service.implementations.editor_assets_loader import EditorAssets

router = APIRouter()
logger = create_service_logger("editor.health_routes")


@router.get("/healthz", tags=["Health"])
@inject
async def health_check(
    config: FromDishka[EditorSettings],
    assets: FromDishka[EditorAssets],
) -> dict[str, str | dict]:
    """Report service status and upstream configuration."""
    return {
        "service": "markdown_preview_service",
        "status": "healthy",
        "message": "Markdown Preview Editor is healthy",
        "version": "0.1.0",
        "environment": config.ENVIRONMENT.value,
        "checks": {
            "template_loaded": True,
            "default_markdown_chars": len(assets.default_markdown),
        },
        "dependencies": {
            "upstream_render_service": {
                "url": config.UPSTREAM_RENDER_URL,
                "authenticated": config.upstream_authenticated,
            }
        },
    }


@router.get("/metrics", include_in_schema=False, response_model=None)
@inject
async def metrics(
    registry: FromDishka[CollectorRegistry],
    correlation_id: FromDishka[UUID],
) -> Response:
    """Prometheus metrics endpoint."""
    try:
        return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(
            f"Error generating metrics: {e}",
            correlation_id=str(correlation_id),
            exc_info=True,
        )
        return PlainTextResponse("Error generating metrics", status_code=500)
