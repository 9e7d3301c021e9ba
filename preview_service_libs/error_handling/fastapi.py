"""FastAPI integration for the error handling framework.

Converts PreviewServiceError and routing errors into plain-text status
responses. Client errors are logged at info level, server errors with the
full error detail.
"""

from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from preview_common.error_enums import ErrorCode
from starlette.exceptions import HTTPException as StarletteHTTPException

from preview_service_libs.error_handling.service_error import PreviewServiceError
from preview_service_libs.logging_utils import create_service_logger

logger = create_service_logger("error_handling.fastapi")

_CLIENT_ERROR_STATUS: dict[str, int] = {
    ErrorCode.INVALID_REQUEST.value: HTTPStatus.BAD_REQUEST,
}


def status_for_error(error: PreviewServiceError) -> int:
    """Map an error code onto the HTTP status returned to the caller."""
    return int(_CLIENT_ERROR_STATUS.get(error.error_code, HTTPStatus.INTERNAL_SERVER_ERROR))


def status_text_response(status_code: int, headers: dict[str, str] | None = None) -> PlainTextResponse:
    """Build a response whose body is the standard reason phrase of the status."""
    return PlainTextResponse(HTTPStatus(status_code).phrase, status_code=status_code, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on a FastAPI application."""

    @app.exception_handler(PreviewServiceError)
    async def handle_preview_service_error(
        request: Request, exc: PreviewServiceError
    ) -> PlainTextResponse:
        status_code = status_for_error(exc)
        if status_code < 500:
            logger.info(
                "Rejected client request",
                path=request.url.path,
                error_code=exc.error_code,
                message=exc.error_detail.message,
                correlation_id=exc.correlation_id,
            )
        else:
            logger.error(
                "Request failed",
                path=request.url.path,
                error_code=exc.error_code,
                operation=exc.operation,
                message=exc.error_detail.message,
                details=exc.error_detail.details,
                correlation_id=exc.correlation_id,
            )
        return status_text_response(status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        logger.info(
            "HTTP error response",
            path=request.url.path,
            method=request.method,
            status_code=exc.status_code,
        )
        return status_text_response(exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> PlainTextResponse:
        logger.error(
            f"Unhandled error: {exc}",
            path=request.url.path,
            error_type=type(exc).__name__,
            exc_info=True,
        )
        return status_text_response(HTTPStatus.INTERNAL_SERVER_ERROR)
