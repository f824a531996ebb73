"""Metrics server."""

from prometheus_client import start_http_server

from kpi_monitor.infrastructure.config.settings import Settings


def start_metrics_server(settings: Settings) -> bool:
    """Start Prometheus metrics HTTP server if enabled."""
    if not settings.prometheus_enabled:
        return False
    start_http_server(settings.prometheus_port)
    return True
