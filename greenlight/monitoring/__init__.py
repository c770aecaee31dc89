"""Prometheus monitoring for the API."""

from greenlight.monitoring.middleware import PrometheusMiddleware, mount_metrics

__all__ = ["PrometheusMiddleware", "mount_metrics"]
