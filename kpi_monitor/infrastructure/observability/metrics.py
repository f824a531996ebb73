"""Prometheus metrics."""

from prometheus_client import Counter, Histogram

status_refreshes = Counter(
    "kpi_status_refreshes_total",
    "Total number of completed status cache refreshes",
)

store_fetch_failures = Counter(
    "kpi_store_fetch_failures_total",
    "Total number of period record fetches that failed",
    ["table"],
)

refresh_duration_seconds = Histogram(
    "kpi_status_refresh_duration_seconds",
    "Duration of status cache refreshes in seconds",
    buckets=[0.1, 0.5, 1, 2, 5, 10, 30],
)

import_batches = Counter(
    "kpi_import_batches_total",
    "Total number of import batches attempted",
    ["result"],
)

import_records = Counter(
    "kpi_import_records_total",
    "Total number of imported records",
    ["result"],
)
