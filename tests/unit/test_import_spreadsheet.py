"""Unit tests for import_spreadsheet use case."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from kpi_monitor.application.use_cases.import_spreadsheet import run
from kpi_monitor.domain.entities import ImportLayout, ParsedSheet
from kpi_monitor.domain.enums import ImportOutcome
from kpi_monitor.domain.ports import RecordWriterPort
from kpi_monitor.infrastructure.runtime.clock import SystemClock

LAYOUT = ImportLayout(
    table_name="kpi_rentabilidad_detalle_1",
    columns=("anio", "mes", "entidad", "plaza", "ebitda", "meta"),
)


@pytest.fixture
def mock_writer():
    """Create mock record writer."""
    writer = MagicMock(spec=RecordWriterPort)
    writer.insert_records = AsyncMock(return_value=None)
    return writer


@pytest.fixture
def fixed_clock():
    """Create clock frozen at a known instant."""
    clock = SystemClock()
    clock.now = MagicMock(return_value=datetime(2025, 3, 1, 12, 30, tzinfo=timezone.utc))
    return clock


def _sheet(rows):
    return ParsedSheet(
        columns=list(rows[0]),
        rows=rows,
        row_numbers=list(range(4, 4 + len(rows))),
    )


@pytest.mark.asyncio
async def test_import_normalizes_and_stamps_records(mock_writer, fixed_clock):
    """Test records carry owner, timestamp and normalized layout columns."""
    sheet = _sheet([
        {"anio": "2025", "mes": "2", "entidad": " SOFOM ", "plaza": "Puebla",
         "ebitda": "$1,500,000", "meta": "", "notas": "ignored"},
    ])

    result = await run(sheet, LAYOUT, mock_writer, fixed_clock, owner_id="user-1")

    assert result.outcome is ImportOutcome.SUCCESS
    assert result.message == "1 records imported successfully"
    assert result.validation.warnings == ["Extra columns ignored: notas"]

    table, records = mock_writer.insert_records.await_args.args
    assert table == "kpi_rentabilidad_detalle_1"
    assert records == [{
        "owner_id": "user-1",
        "created_at": "2025-03-01T12:30:00Z",
        "anio": 2025,
        "mes": 2,
        "entidad": "SOFOM",
        "plaza": "Puebla",
        "ebitda": 1500000.0,
        "meta": None,
    }]


@pytest.mark.asyncio
async def test_validation_failure_blocks_writes(mock_writer, fixed_clock):
    """Test invalid files are never written."""
    sheet = _sheet([
        {"anio": 2025, "mes": 13, "entidad": "A", "plaza": "B", "ebitda": 1, "meta": 1},
        {"anio": 2019, "mes": 1, "entidad": "A", "plaza": "B", "ebitda": 1, "meta": 1},
    ])

    result = await run(sheet, LAYOUT, mock_writer, fixed_clock, owner_id="user-1")

    assert result.outcome is ImportOutcome.FAILURE
    assert result.message == 'Validation failed: Row 4: invalid month "13"; Row 5: invalid year "2019"'
    assert not result.validation.valid
    mock_writer.insert_records.assert_not_awaited()


@pytest.mark.asyncio
async def test_batch_error_rows_are_spreadsheet_rows(mock_writer, fixed_clock):
    """Test batch errors point at the spreadsheet row of the chunk start."""
    from kpi_monitor.domain.errors import StoreWriteError

    rows = [
        {"anio": 2025, "mes": 1, "entidad": "A", "plaza": "B", "ebitda": i, "meta": 1}
        for i in range(3)
    ]
    mock_writer.insert_records.side_effect = [None, StoreWriteError("bad row")]

    result = await run(_sheet(rows), LAYOUT, mock_writer, fixed_clock, owner_id="u", batch_size=2)

    assert result.message == "2 imported, 1 failed"
    assert result.progress.errors[0].row == 6
