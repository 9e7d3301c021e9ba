"""Core exception type carrying a structured ErrorDetail."""

from __future__ import annotations

from preview_common.models.error_models import ErrorDetail


class PreviewServiceError(Exception):
    """
    Exception wrapping an immutable ErrorDetail.

    The error code tags the failure class so callers can branch on it
    without inspecting messages.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.error_detail.message}"

    def __repr__(self) -> str:
        return (
            f"PreviewServiceError(code={self.error_code}, "
            f"message={self.error_detail.message!r}, "
            f"service={self.service}, operation={self.operation}, "
            f"correlation_id={self.correlation_id})"
        )
