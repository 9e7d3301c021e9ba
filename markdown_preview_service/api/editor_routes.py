"""Editor routes.

``GET /`` serves the editor page pre-filled with the default markdown.
``POST /render`` forwards the submitted markdown to the upstream renderer and
returns the rendered HTML, or a diagnostic fragment when the upstream rejects
the request. Wrong methods are answered with 405 by the router.
"""

from __future__ import annotations

from http import HTTPStatus
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response
from preview_common.error_enums import RenderErrorCode
from preview_service_libs.error_handling import (
    PreviewServiceError,
    raise_invalid_request,
    raise_processing_error,
)
from preview_service_libs.error_handling.fastapi import status_text_response
from preview_service_libs.logging_utils import create_service_logger
from pydantic import ValidationError

from markdown_preview_service.api._utils import (
    build_upstream_failure_fragment,
    render_until_disconnect,
)
from markdown_preview_service.api_models import RenderRequest
from markdown_preview_service.config import EditorSettings
from markdown_preview_service.implementations.editor_assets_loader import EditorAssets
from markdown_preview_service.metrics import RenderOutcome
from markdown_preview_service.protocols import MarkdownRendererProtocol, RenderMetricsProtocol

router = APIRouter()
logger = create_service_logger("editor.editor_routes")

UNAUTHENTICATED_HINT = (
    "If running locally try restarting with the environment variable "
    "'EDITOR_UPSTREAM_UNAUTHENTICATED=1'"
)

# Non-standard status (nginx convention) for a client that went away mid-request
CLIENT_CLOSED_REQUEST = 499


@router.get("/", response_class=HTMLResponse)
@inject
async def editor_page(
    assets: FromDishka[EditorAssets],
    correlation_id: FromDishka[UUID],
) -> HTMLResponse:
    """Render the editor page with the default markdown."""
    try:
        page = await assets.render_editor_page()
    except Exception as e:
        raise_processing_error(
            service="markdown_preview_service",
            operation="editor_page",
            message=f"template execution failed: {e}",
            correlation_id=correlation_id,
            error_type=type(e).__name__,
        )
    return HTMLResponse(page)


@router.post("/render", response_class=HTMLResponse)
@inject
async def render_markdown(
    request: Request,
    renderer: FromDishka[MarkdownRendererProtocol],
    metrics: FromDishka[RenderMetricsProtocol],
    config: FromDishka[EditorSettings],
    correlation_id: FromDishka[UUID],
) -> Response:
    """Render submitted markdown through the upstream render service.

    Expects a JSON body ``{"Data": "<markdown>"}``.
    """
    try:
        body = await request.body()
    except Exception as e:
        raise_processing_error(
            service="markdown_preview_service",
            operation="read_render_request",
            message=f"Failed to read request body: {e}",
            correlation_id=correlation_id,
            error_type=type(e).__name__,
        )

    try:
        payload = RenderRequest.model_validate_json(body)
    except ValidationError as e:
        metrics.record_render(RenderOutcome.BAD_REQUEST)
        raise_invalid_request(
            service="markdown_preview_service",
            operation="parse_render_request",
            message=f"Malformed render request: {e.error_count()} validation error(s)",
            correlation_id=correlation_id,
            validation_errors=[error["msg"] for error in e.errors()],
        )

    try:
        rendered = await render_until_disconnect(
            request,
            renderer.render(payload.data.encode("utf-8"), correlation_id),
            poll_interval=config.DISCONNECT_POLL_INTERVAL_SECONDS,
        )
    except PreviewServiceError as error:
        return _render_failure_response(error, metrics)

    if rendered is None:
        metrics.record_render(RenderOutcome.CLIENT_DISCONNECTED)
        logger.info(
            "Client disconnected before render completed; upstream call cancelled",
            correlation_id=str(correlation_id),
        )
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    metrics.record_render(RenderOutcome.SUCCESS)
    return HTMLResponse(rendered)


def _render_failure_response(error: PreviewServiceError, metrics: RenderMetricsProtocol) -> Response:
    logger.error(
        "MarkdownRenderer.render failed",
        error_code=error.error_code,
        message=error.error_detail.message,
        details=error.error_detail.details,
        correlation_id=error.correlation_id,
    )

    if error.error_code == RenderErrorCode.UPSTREAM_NOT_OK.value:
        metrics.record_render(RenderOutcome.UPSTREAM_NOT_OK)
        details = error.error_detail.details
        fragment = build_upstream_failure_fragment(
            status_code=details["status_code"],
            reason=details["reason"],
            body=details["body"],
        )
        return HTMLResponse(fragment, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)

    if error.error_code == RenderErrorCode.CREDENTIAL_ACQUISITION_FAILED.value:
        metrics.record_render(RenderOutcome.CREDENTIAL_ERROR)
        logger.warning(UNAUTHENTICATED_HINT, correlation_id=error.correlation_id)
    else:
        metrics.record_render(RenderOutcome.TRANSPORT_ERROR)

    return status_text_response(HTTPStatus.INTERNAL_SERVER_ERROR)
