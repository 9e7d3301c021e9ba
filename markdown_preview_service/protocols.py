"""Protocol definitions for the Markdown Preview Editor Service.

Defines the seams injected through the DI container. Route handlers only
depend on these protocols, so tests can swap in stubs without network access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from markdown_preview_service.metrics import RenderOutcome


class MarkdownRendererProtocol(Protocol):
    """Renders markdown to HTML."""

    async def render(self, markdown: bytes, correlation_id: UUID) -> bytes:
        """Render markdown bytes to HTML bytes.

        Args:
            markdown: Raw markdown submitted by the browser; may be empty
            correlation_id: Request correlation ID for tracing

        Returns:
            Rendered HTML exactly as produced by the renderer

        Raises:
            PreviewServiceError: CONNECTION_ERROR or TIMEOUT on transport
                failures, CREDENTIAL_ACQUISITION_FAILED when no identity token
                could be obtained, UPSTREAM_NOT_OK when the renderer answered
                with a non-success status
        """
        ...


class IdentityTokenProviderProtocol(Protocol):
    """Issues identity tokens for authenticated upstream calls."""

    async def fetch_token(self, audience: str, correlation_id: UUID) -> str:
        """Fetch a short-lived identity token scoped to an audience.

        Args:
            audience: URL the token will be presented to
            correlation_id: Request correlation ID for tracing

        Returns:
            Bearer token value

        Raises:
            PreviewServiceError: CREDENTIAL_ACQUISITION_FAILED on any failure
        """
        ...


class RenderMetricsProtocol(Protocol):
    """Records render outcomes and upstream latency."""

    def record_render(self, outcome: RenderOutcome) -> None:
        """Count a finished render request by outcome label."""
        ...

    def observe_upstream_duration(self, seconds: float) -> None:
        """Record how long one upstream render call took."""
        ...
