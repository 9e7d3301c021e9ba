"""Factory for building ErrorDetail instances with captured context."""

from __future__ import annotations

import traceback
from datetime import datetime, timezone
from typing import Any, Optional, Union
from uuid import UUID, uuid4

from preview_common.error_enums import ErrorCode, RenderErrorCode
from preview_common.models.error_models import ErrorDetail


def create_error_detail_with_context(
    error_code: Union[ErrorCode, RenderErrorCode],
    message: str,
    service: str,
    operation: str,
    correlation_id: Optional[UUID] = None,
    details: Optional[dict[str, Any]] = None,
    capture_stack: bool = True,
) -> ErrorDetail:
    """
    Create an ErrorDetail with automatic context capture.

    Args:
        error_code: Error code from ErrorCode or RenderErrorCode
        message: Human-readable error message
        service: Name of the service where the error occurred
        operation: Operation being performed when the error occurred
        correlation_id: Request correlation ID (generated when omitted)
        details: Additional structured context
        capture_stack: Whether to record a stack trace

    Returns:
        Frozen ErrorDetail instance
    """
    stack_trace: Optional[str] = None
    if capture_stack:
        stack_trace = traceback.format_exc()
        if stack_trace.startswith("NoneType: None"):
            # Not handling an exception: record the caller's stack instead
            stack_trace = "".join(traceback.format_stack()[:-1])

    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id or uuid4(),
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
        stack_trace=stack_trace,
    )
