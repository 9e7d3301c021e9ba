"""
preview_common.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Generic external service errors (can be used by any service)
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    PROCESSING_ERROR = "PROCESSING_ERROR"  # Internal processing failures
    INITIALIZATION_FAILED = "INITIALIZATION_FAILED"  # Startup asset/resource failures


class RenderErrorCode(str, Enum):
    """
    Error codes specific to delegating markdown rendering upstream.

    Note: transport failures use the generic ErrorCode enum
    (CONNECTION_ERROR, TIMEOUT).
    """

    # Upstream reachable but answered with a non-200 status
    UPSTREAM_NOT_OK = "UPSTREAM_NOT_OK"
    # Identity token could not be fetched from the metadata server
    CREDENTIAL_ACQUISITION_FAILED = "CREDENTIAL_ACQUISITION_FAILED"
