"""Unit tests for metrics status cache."""

import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from kpi_monitor.application.catalog.metrics import get_metric
from kpi_monitor.application.state.status_cache import MetricsStatusCache
from kpi_monitor.domain.enums import ComplianceStatus
from kpi_monitor.domain.errors import StoreReadError
from kpi_monitor.domain.ports import ClockPort, PeriodRecordReaderPort

METRICS = [get_metric("colocacion"), get_metric("rotacion-personal")]


@pytest.fixture
def mock_clock():
    """Create mock clock."""
    clock = MagicMock(spec=ClockPort)
    clock.now.return_value = datetime(2025, 6, 15, tzinfo=timezone.utc)
    return clock


@pytest.fixture
def mock_reader():
    """Create mock reader returning one month per table."""
    reader = MagicMock(spec=PeriodRecordReaderPort)

    async def fetch(table, year):
        if table == "kpi_colocacion_resumen_1":
            return [{"mes": 1, "monto_colocacion": 90, "meta": 100}]
        return [{"mes": 1, "indice_rotacion": 3, "meta": 5}]

    reader.fetch_current_records = AsyncMock(side_effect=fetch)
    return reader


@pytest.mark.asyncio
async def test_gray_before_load(mock_reader, mock_clock):
    """Test statuses are gray until the first load."""
    cache = MetricsStatusCache(mock_reader, mock_clock, METRICS)

    assert cache.snapshot is None
    assert cache.get("colocacion") is None
    assert cache.get_status("colocacion") is ComplianceStatus.GRAY


@pytest.mark.asyncio
async def test_load_publishes_snapshot(mock_reader, mock_clock):
    """Test load computes every status for the clock's year."""
    cache = MetricsStatusCache(mock_reader, mock_clock, METRICS)

    snapshot = await cache.load()

    assert snapshot.year == 2025
    assert cache.get_status("colocacion") is ComplianceStatus.YELLOW
    assert cache.get_status("rotacion-personal") is ComplianceStatus.GREEN
    assert cache.get_status("unknown") is ComplianceStatus.GRAY
    mock_reader.fetch_current_records.assert_any_await("kpi_colocacion_resumen_1", 2025)


@pytest.mark.asyncio
async def test_load_reuses_snapshot(mock_reader, mock_clock):
    """Test a second load does not fetch again."""
    cache = MetricsStatusCache(mock_reader, mock_clock, METRICS)

    first = await cache.load()
    second = await cache.load()

    assert first is second
    assert mock_reader.fetch_current_records.await_count == len(METRICS)


@pytest.mark.asyncio
async def test_refresh_replaces_snapshot(mock_reader, mock_clock):
    """Test refresh always fetches and publishes a new snapshot."""
    cache = MetricsStatusCache(mock_reader, mock_clock, METRICS)

    first = await cache.load()
    second = await cache.refresh()

    assert second is not first
    assert cache.snapshot is second
    assert mock_reader.fetch_current_records.await_count == 2 * len(METRICS)


@pytest.mark.asyncio
async def test_concurrent_refreshes_coalesce(mock_reader, mock_clock):
    """Test a refresh issued mid-flight joins the running one."""
    release = asyncio.Event()
    fast_fetch = mock_reader.fetch_current_records.side_effect

    async def slow_fetch(table, year):
        await release.wait()
        return await fast_fetch(table, year)

    mock_reader.fetch_current_records.side_effect = slow_fetch
    cache = MetricsStatusCache(mock_reader, mock_clock, METRICS)

    first = asyncio.create_task(cache.refresh())
    await asyncio.sleep(0)
    assert cache.refreshing
    second = asyncio.create_task(cache.refresh())
    await asyncio.sleep(0)
    release.set()

    assert await first is await second
    assert mock_reader.fetch_current_records.await_count == len(METRICS)
    assert not cache.refreshing


@pytest.mark.asyncio
async def test_snapshot_not_published_until_all_fetches_settle(mock_reader, mock_clock):
    """Test readers keep seeing the old snapshot during a refresh."""
    cache = MetricsStatusCache(mock_reader, mock_clock, METRICS)
    old = await cache.load()

    release = asyncio.Event()

    async def slow_fetch(table, year):
        await release.wait()
        return []

    mock_reader.fetch_current_records.side_effect = slow_fetch
    task = asyncio.create_task(cache.refresh())
    await asyncio.sleep(0)

    assert cache.snapshot is old
    release.set()
    new = await task
    assert cache.snapshot is new
    assert cache.get_status("colocacion") is ComplianceStatus.GRAY


@pytest.mark.asyncio
async def test_failed_fetch_degrades_to_gray(mock_reader, mock_clock):
    """Test a failing table only grays its own indicator."""
    async def fetch(table, year):
        if table == "kpi_colocacion_resumen_1":
            raise StoreReadError("HTTP 500")
        return [{"mes": 1, "indice_rotacion": 3, "meta": 5}]

    mock_reader.fetch_current_records.side_effect = fetch
    cache = MetricsStatusCache(mock_reader, mock_clock, METRICS)

    await cache.refresh()

    assert cache.get_status("colocacion") is ComplianceStatus.GRAY
    assert cache.get_status("rotacion-personal") is ComplianceStatus.GREEN


@pytest.mark.asyncio
async def test_snapshot_statuses_are_read_only(mock_reader, mock_clock):
    """Test published statuses cannot be mutated in place."""
    cache = MetricsStatusCache(mock_reader, mock_clock, METRICS)
    snapshot = await cache.load()

    with pytest.raises(TypeError):
        snapshot.statuses["colocacion"] = None
