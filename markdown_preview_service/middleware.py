"""Editor service middleware components."""

from __future__ import annotations

from uuid import UUID, uuid4

from preview_service_libs.logging_utils import bind_request_context, clear_request_context
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send


def _parse_correlation_id(value: str | None) -> UUID:
    if value:
        try:
            return UUID(value)
        except ValueError:
            pass
    return uuid4()


class CorrelationIDMiddleware:
    """Middleware to ensure every request has a correlation ID.

    Implemented as plain ASGI so ``receive`` reaches the routes untouched;
    the render route polls it to notice a browser that went away.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = _parse_correlation_id(Headers(scope=scope).get("X-Correlation-ID"))
        scope.setdefault("state", {})["correlation_id"] = correlation_id

        async def send_with_correlation_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)["X-Correlation-ID"] = str(correlation_id)
            await send(message)

        bind_request_context(str(correlation_id), path=scope["path"], method=scope["method"])
        try:
            await self.app(scope, receive, send_with_correlation_id)
        finally:
            clear_request_context()
