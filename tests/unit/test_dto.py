"""Unit tests for status and import DTOs."""

from datetime import datetime, timezone

from kpi_monitor.application.catalog.metrics import get_metric
from kpi_monitor.application.dto.imports import ImportReport
from kpi_monitor.application.dto.status import MetricStatusView, StatusOverview
from kpi_monitor.application.dto.store import StoreErrorPayload
from kpi_monitor.domain.entities import (
    ImportProgress,
    ImportResult,
    ImportRowError,
    MetricStatus,
    StatusSnapshot,
    ValidationResult,
)
from kpi_monitor.domain.enums import ComplianceStatus, ImportOutcome


def _status():
    return MetricStatus(
        metric_id="colocacion",
        status=ComplianceStatus.YELLOW,
        actual=9_000_000,
        target=10_000_000,
        progress_percent=90.0,
        months_with_data=3,
    )


def test_metric_status_view_uses_camel_case_aliases():
    """Test JSON output uses camelCase keys and display strings."""
    view = MetricStatusView.from_status(get_metric("colocacion"), _status())

    data = view.model_dump(by_alias=True, mode="json")

    assert data["id"] == "colocacion"
    assert data["shortName"] == "Colocación"
    assert data["status"] == "yellow"
    assert data["format"] == "currency"
    assert data["actualValue"] == 9_000_000
    assert data["metaValue"] == 10_000_000
    assert data["progressPercent"] == 90.0
    assert data["hasData"] is True
    assert data["monthsWithData"] == 3
    assert data["actualDisplay"] == "$9.0M"
    assert data["metaDisplay"] == "$10.0M"


def test_metric_status_view_without_status():
    """Test a missing status renders gray without data."""
    view = MetricStatusView.from_status(get_metric("innovacion"), None)

    assert view.status is ComplianceStatus.GRAY
    assert not view.has_data
    assert view.actual_display == "-"


def test_status_overview_lists_every_definition():
    """Test overview keeps definition order and fills gaps."""
    snapshot = StatusSnapshot(
        year=2025,
        statuses={"colocacion": _status()},
        refreshed_at=datetime(2025, 5, 1, tzinfo=timezone.utc),
    )

    overview = StatusOverview.from_snapshot(
        snapshot,
        [get_metric("innovacion"), get_metric("colocacion")],
        "2025-05-01T00:00:00Z",
    )

    data = overview.model_dump(by_alias=True, mode="json")
    assert data["refreshedAt"] == "2025-05-01T00:00:00Z"
    assert [m["id"] for m in data["metrics"]] == ["innovacion", "colocacion"]
    assert data["metrics"][0]["status"] == "gray"


def test_import_report_from_partial_result():
    """Test report exposes counts, errors and notice."""
    progress = ImportProgress(
        total=250,
        processed=250,
        success=100,
        failed=150,
        errors=[ImportRowError(row=104, message="boom")],
    )
    result = ImportResult(
        outcome=ImportOutcome.PARTIAL,
        message="100 imported, 150 failed",
        progress=progress,
        validation=ValidationResult(row_count=250),
        notice="partial",
    )

    data = ImportReport.from_result(result, "kpi_test").model_dump(by_alias=True, mode="json")

    assert data["success"] is True
    assert data["outcome"] == "partial"
    assert data["tableName"] == "kpi_test"
    assert data["imported"] == 100
    assert data["failed"] == 150
    assert data["errors"] == [{"row": 104, "message": "boom"}]
    assert data["commitPolicy"] == "independent_chunks"
    assert data["validation"]["rowCount"] == 250


def test_store_error_payload_ignores_unknown_fields():
    """Test backend error bodies are decoded leniently."""
    payload = StoreErrorPayload.model_validate({"message": "denied", "code": "42501", "extra": 1})

    assert payload.describe() == "denied"
    assert payload.code == "42501"
