"""Prometheus metrics for the editor service."""

from __future__ import annotations

from enum import Enum

from prometheus_client import CollectorRegistry, Counter, Histogram
from preview_service_libs.logging_utils import create_service_logger

logger = create_service_logger("editor.metrics")


class RenderOutcome(str, Enum):
    """Outcome labels for render requests."""

    SUCCESS = "success"
    BAD_REQUEST = "bad_request"
    TRANSPORT_ERROR = "transport_error"
    CREDENTIAL_ERROR = "credential_error"
    UPSTREAM_NOT_OK = "upstream_not_ok"
    CLIENT_DISCONNECTED = "client_disconnected"


class RenderMetrics:
    """Prometheus metrics for the editor service.

    Metrics are registered on the given registry so each application (and
    each test) owns an isolated set.
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        self.render_requests_total = Counter(
            "editor_render_requests_total",
            "Total number of markdown render requests by outcome.",
            ["outcome"],
            registry=registry,
        )
        self.upstream_render_duration_seconds = Histogram(
            "editor_upstream_render_duration_seconds",
            "Duration of upstream render calls in seconds.",
            buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10],
            registry=registry,
        )

    def record_render(self, outcome: RenderOutcome) -> None:
        try:
            self.render_requests_total.labels(outcome=outcome.value).inc()
        except Exception as e:
            logger.error(f"Error recording render metric: {e}")

    def observe_upstream_duration(self, seconds: float) -> None:
        self.upstream_render_duration_seconds.observe(seconds)
