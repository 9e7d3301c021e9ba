"""Error handling utilities for the preview services."""

from preview_service_libs.error_handling.error_detail_factory import (
    create_error_detail_with_context,
)
from preview_service_libs.error_handling.factories import (
    raise_configuration_error,
    raise_connection_error,
    raise_credential_acquisition_error,
    raise_initialization_failed,
    raise_invalid_request,
    raise_processing_error,
    raise_timeout_error,
    raise_upstream_not_ok,
)
from preview_service_libs.error_handling.service_error import PreviewServiceError

__all__ = [
    "PreviewServiceError",
    "create_error_detail_with_context",
    "raise_configuration_error",
    "raise_connection_error",
    "raise_credential_acquisition_error",
    "raise_initialization_failed",
    "raise_invalid_request",
    "raise_processing_error",
    "raise_timeout_error",
    "raise_upstream_not_ok",
]
