"""Wiring of adapters into application services."""

from kpi_monitor.application.catalog.metrics import METRIC_DEFINITIONS
from kpi_monitor.application.state.status_cache import MetricsStatusCache
from kpi_monitor.infrastructure.config.settings import Settings
from kpi_monitor.infrastructure.runtime.clock import SystemClock
from kpi_monitor.infrastructure.store.period_reader import RestPeriodRecordReader
from kpi_monitor.infrastructure.store.record_writer import RestRecordWriter
from kpi_monitor.infrastructure.store.rest_client import StoreClient
from kpi_monitor.interfaces.runners.import_runner import ImportRunner


def load_settings() -> Settings:
    """Load settings from environment and ``.env``."""
    return Settings()


def build_status_cache(settings: Settings) -> MetricsStatusCache:
    """Build the single status cache shared by every consumer."""
    reader = RestPeriodRecordReader(StoreClient(settings))
    return MetricsStatusCache(reader, SystemClock(), METRIC_DEFINITIONS)


def build_import_runner(settings: Settings, owner_id: str) -> ImportRunner:
    """Build an import runner writing through the store client."""
    writer = RestRecordWriter(StoreClient(settings))
    return ImportRunner(writer, SystemClock(), owner_id, batch_size=settings.import_batch_size)
