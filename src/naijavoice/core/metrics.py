"""
Prometheus Metrics for naijavoice.

Metrics Exposed:
    naijavoice_requests_total               - Requests by endpoint and outcome
    naijavoice_characters_total             - Characters accepted for synthesis
    naijavoice_validation_failures_total    - Rejected synthesis requests by code
    naijavoice_orders_tracked               - Orders currently held in memory

These complement the /api/analytics counters: analytics are the
business-facing view kept by UsageAggregator, Prometheus is the
operational view scraped from /metrics.

Usage:
    from naijavoice.core.metrics import metrics

    metrics.record_request("synthesize", "success")
    metrics.record_characters(11)
    metrics.record_validation_failure("TEXT_TOO_LONG")

    content, content_type = metrics.get_metrics_response()
"""
from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)


class ServiceMetrics:
    """
    Prometheus collectors registered on a private CollectorRegistry.

    A private registry keeps repeated instantiation (tests, app factories)
    from colliding on the global default registry.
    """

    def __init__(self):
        self._registry = CollectorRegistry()

        self._requests_total = Counter(
            "naijavoice_requests_total",
            "Total API requests",
            ["endpoint", "status"],
            registry=self._registry,
        )
        self._characters_total = Counter(
            "naijavoice_characters_total",
            "Total characters accepted for synthesis",
            registry=self._registry,
        )
        self._validation_failures = Counter(
            "naijavoice_validation_failures_total",
            "Synthesis requests rejected by validation",
            ["code"],
            registry=self._registry,
        )
        self._orders_tracked = Gauge(
            "naijavoice_orders_tracked",
            "Orders currently held in the in-memory order book",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record_request(self, endpoint: str, status: str) -> None:
        """Count one request; status is "success", "rejected" or "error"."""
        self._requests_total.labels(endpoint=endpoint, status=status).inc()

    def record_characters(self, count: int) -> None:
        if count > 0:
            self._characters_total.inc(count)

    def record_validation_failure(self, code: str) -> None:
        self._validation_failures.labels(code=code).inc()

    def set_orders_tracked(self, count: int) -> None:
        self._orders_tracked.set(count)

    def get_metrics_response(self) -> tuple[bytes, str]:
        """Metrics in Prometheus text format as (content, content_type)."""
        return generate_latest(self._registry), CONTENT_TYPE_LATEST


# Process-wide instance used by the service and the /metrics route
metrics = ServiceMetrics()
