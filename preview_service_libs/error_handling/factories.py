"""
Factory functions that build an ErrorDetail and raise PreviewServiceError.

Each factory records its domain-specific arguments in the error details so
log processors and error handlers can read them without parsing messages.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from preview_common.error_enums import ErrorCode, RenderErrorCode

from preview_service_libs.error_handling.error_detail_factory import (
    create_error_detail_with_context,
)
from preview_service_libs.error_handling.service_error import PreviewServiceError

# =============================================================================
# Generic Error Factories
# =============================================================================


def raise_configuration_error(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an error for missing or invalid configuration."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.CONFIGURATION_ERROR,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"config_key": config_key, **additional_context},
    )
    raise PreviewServiceError(error_detail)


def raise_initialization_failed(
    service: str,
    operation: str,
    component: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an error when a startup resource cannot be loaded."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.INITIALIZATION_FAILED,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"component": component, **additional_context},
    )
    raise PreviewServiceError(error_detail)


def raise_invalid_request(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an error for a malformed client request."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.INVALID_REQUEST,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=additional_context,
        capture_stack=False,
    )
    raise PreviewServiceError(error_detail)


def raise_processing_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an error for local failures while handling a request."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.PROCESSING_ERROR,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details=additional_context,
    )
    raise PreviewServiceError(error_detail)


# =============================================================================
# External Service Error Factories
# =============================================================================


def raise_connection_error(
    service: str,
    operation: str,
    target: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an error when an external service cannot be reached."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.CONNECTION_ERROR,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"target": target, **additional_context},
    )
    raise PreviewServiceError(error_detail)


def raise_timeout_error(
    service: str,
    operation: str,
    timeout_seconds: float,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an error when an external call exceeds its timeout."""
    error_detail = create_error_detail_with_context(
        error_code=ErrorCode.TIMEOUT,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"timeout_seconds": timeout_seconds, **additional_context},
    )
    raise PreviewServiceError(error_detail)


# =============================================================================
# Upstream Render Error Factories
# =============================================================================


def raise_credential_acquisition_error(
    service: str,
    operation: str,
    audience: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an error when an identity token for the upstream cannot be fetched."""
    error_detail = create_error_detail_with_context(
        error_code=RenderErrorCode.CREDENTIAL_ACQUISITION_FAILED,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={"audience": audience, **additional_context},
    )
    raise PreviewServiceError(error_detail)


def raise_upstream_not_ok(
    service: str,
    operation: str,
    status_code: int,
    reason: str,
    body: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise an error when the upstream answered with a non-success status."""
    error_detail = create_error_detail_with_context(
        error_code=RenderErrorCode.UPSTREAM_NOT_OK,
        message=f"Upstream render service responded {reason} ({status_code})",
        service=service,
        operation=operation,
        correlation_id=correlation_id,
        details={
            "status_code": status_code,
            "reason": reason,
            "body": body,
            **additional_context,
        },
        capture_stack=False,
    )
    raise PreviewServiceError(error_detail)
