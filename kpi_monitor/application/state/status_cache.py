"""Shared cache of the latest indicator statuses."""

import asyncio
import time
from collections.abc import Sequence

import structlog

from kpi_monitor.application.use_cases.refresh_statuses import run as refresh_statuses
from kpi_monitor.domain.entities import MetricDefinition, MetricStatus, StatusSnapshot
from kpi_monitor.domain.enums import ComplianceStatus
from kpi_monitor.domain.ports import ClockPort, PeriodRecordReaderPort
from kpi_monitor.infrastructure.observability.metrics import refresh_duration_seconds, status_refreshes

logger = structlog.get_logger()


class MetricsStatusCache:
    """Single source of truth for "current status" of every indicator.

    Every consumer (overview, navigation) should hold the same instance.
    Readers see the last published snapshot; a refresh replaces it in one
    assignment once all fetches have settled, never indicator by indicator.

    Re-entrancy: a refresh requested while another is in flight joins the
    in-flight run instead of starting a second fetch wave.
    """

    def __init__(
        self,
        reader: PeriodRecordReaderPort,
        clock: ClockPort,
        metrics: Sequence[MetricDefinition],
    ) -> None:
        """Initialize status cache."""
        self.reader = reader
        self.clock = clock
        self.metrics = tuple(metrics)
        self._snapshot: StatusSnapshot | None = None
        self._inflight: asyncio.Task[StatusSnapshot] | None = None

    @property
    def snapshot(self) -> StatusSnapshot | None:
        """Last published snapshot, or None before the first load."""
        return self._snapshot

    @property
    def refreshing(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def load(self) -> StatusSnapshot:
        """Return the published snapshot, refreshing only if none exists yet."""
        if self._snapshot is not None:
            return self._snapshot
        return await self.refresh()

    async def refresh(self) -> StatusSnapshot:
        """Re-run fetch, aggregation and classification for every indicator."""
        if self.refreshing:
            logger.info("refresh_joined_inflight")
            return await asyncio.shield(self._inflight)

        self._inflight = asyncio.create_task(self._refresh())
        return await asyncio.shield(self._inflight)

    def get(self, metric_id: str) -> MetricStatus | None:
        """Status of one indicator, or None if not loaded."""
        if self._snapshot is None:
            return None
        return self._snapshot.statuses.get(metric_id)

    def get_status(self, metric_id: str) -> ComplianceStatus:
        """Traffic-light status of one indicator; GRAY if not loaded."""
        status = self.get(metric_id)
        return status.status if status is not None else ComplianceStatus.GRAY

    async def _refresh(self) -> StatusSnapshot:
        year = self.clock.now().year
        started = time.monotonic()

        statuses = await refresh_statuses(self.metrics, self.reader, year)

        snapshot = StatusSnapshot(year=year, statuses=statuses, refreshed_at=self.clock.now())
        self._snapshot = snapshot

        refresh_duration_seconds.observe(time.monotonic() - started)
        status_refreshes.inc()
        logger.info("status_cache_published", year=year, metric_count=len(statuses))
        return snapshot
