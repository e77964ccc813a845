"""Tests for Prometheus metrics."""
from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST

from naijavoice.core.metrics import ServiceMetrics, metrics


def _value(m: ServiceMetrics, name: str, labels: dict | None = None) -> float:
    return m.registry.get_sample_value(name, labels or {})


class TestServiceMetrics:

    def test_metrics_instance_exists(self):
        assert isinstance(metrics, ServiceMetrics)

    def test_record_request(self):
        m = ServiceMetrics()
        m.record_request("synthesize", "success")
        m.record_request("synthesize", "success")
        m.record_request("synthesize", "rejected")
        assert _value(m, "naijavoice_requests_total", {"endpoint": "synthesize", "status": "success"}) == 2
        assert _value(m, "naijavoice_requests_total", {"endpoint": "synthesize", "status": "rejected"}) == 1

    def test_record_characters(self):
        m = ServiceMetrics()
        m.record_characters(11)
        m.record_characters(0)
        assert _value(m, "naijavoice_characters_total") == 11

    def test_validation_failures(self):
        m = ServiceMetrics()
        m.record_validation_failure("TEXT_TOO_LONG")
        assert _value(m, "naijavoice_validation_failures_total", {"code": "TEXT_TOO_LONG"}) == 1

    def test_orders_gauge(self):
        m = ServiceMetrics()
        m.set_orders_tracked(5)
        assert _value(m, "naijavoice_orders_tracked") == 5

    def test_independent_registries(self):
        """Two instances do not collide or share values."""
        a, b = ServiceMetrics(), ServiceMetrics()
        a.record_characters(3)
        assert _value(b, "naijavoice_characters_total") == 0

    def test_metrics_response(self):
        m = ServiceMetrics()
        m.record_request("voices", "success")
        content, content_type = m.get_metrics_response()
        assert content_type == CONTENT_TYPE_LATEST
        assert b"naijavoice_requests_total" in content
