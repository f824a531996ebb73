"""Unit tests for import runner."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pandas as pd
import pytest

from kpi_monitor.application.catalog.layouts import get_layout
from kpi_monitor.domain.enums import ImportOutcome
from kpi_monitor.domain.errors import ImportInProgressError, SpreadsheetParseError
from kpi_monitor.domain.ports import RecordWriterPort
from kpi_monitor.infrastructure.runtime.clock import SystemClock
from kpi_monitor.interfaces.runners.import_runner import ImportRunner, validate_file

LAYOUT = get_layout("kpi_rentabilidad_detalle_1")


@pytest.fixture
def csv_file(tmp_path):
    """Write a small valid CSV for the EBITDA layout."""
    path = tmp_path / "ebitda.csv"
    pd.DataFrame(
        [
            {"anio": 2025, "mes": 1, "entidad": "SOFOM", "plaza": "Puebla", "ebitda": "$1,000", "meta": 900},
            {"anio": 2025, "mes": 2, "entidad": "SOFOM", "plaza": "Puebla", "ebitda": "$1,100", "meta": 900},
        ]
    ).to_csv(path, index=False)
    return path


@pytest.fixture
def mock_writer():
    """Create mock record writer."""
    writer = MagicMock(spec=RecordWriterPort)
    writer.insert_records = AsyncMock(return_value=None)
    return writer


@pytest.mark.asyncio
async def test_import_file(csv_file, mock_writer):
    """Test a file is read, validated and written."""
    runner = ImportRunner(mock_writer, SystemClock(), owner_id="user-1")

    result = await runner.import_file(csv_file, LAYOUT)

    assert result.outcome is ImportOutcome.SUCCESS
    table, records = mock_writer.insert_records.await_args.args
    assert table == "kpi_rentabilidad_detalle_1"
    assert [r["ebitda"] for r in records] == [1000.0, 1100.0]
    assert all(r["owner_id"] == "user-1" for r in records)
    assert not runner.busy


@pytest.mark.asyncio
async def test_second_import_is_rejected_while_busy(csv_file, mock_writer):
    """Test a concurrent import on the same runner raises."""
    release = asyncio.Event()

    async def slow_insert(table, records):
        await release.wait()

    mock_writer.insert_records.side_effect = slow_insert
    runner = ImportRunner(mock_writer, SystemClock(), owner_id="user-1")

    first = asyncio.create_task(runner.import_file(csv_file, LAYOUT))
    while not mock_writer.insert_records.await_count:
        await asyncio.sleep(0.01)

    with pytest.raises(ImportInProgressError):
        await runner.import_file(csv_file, LAYOUT)

    release.set()
    result = await first
    assert result.outcome is ImportOutcome.SUCCESS
    assert not runner.busy


@pytest.mark.asyncio
async def test_runner_is_released_after_failure(tmp_path, mock_writer):
    """Test the busy flag clears when reading fails."""
    runner = ImportRunner(mock_writer, SystemClock(), owner_id="user-1")

    with pytest.raises(SpreadsheetParseError):
        await runner.import_file(tmp_path / "data.txt", LAYOUT)

    assert not runner.busy


def test_validate_file_does_not_need_a_writer(csv_file):
    """Test validation runs on the file alone."""
    result = validate_file(csv_file, LAYOUT)

    assert result.valid
    assert result.row_count == 2
