"""
Standardized, PURE data models for all services.
"""

from datetime import datetime
from typing import Any, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from preview_common.error_enums import ErrorCode, RenderErrorCode


class ErrorDetail(BaseModel):
    """
    The canonical, PURE data model for an error in the preview services.
    This model contains only data fields and no behavior.
    """

    error_code: Union[ErrorCode, RenderErrorCode]
    message: str
    correlation_id: UUID
    timestamp: datetime
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)
    stack_trace: Optional[str] = None

    model_config = ConfigDict(frozen=True)
