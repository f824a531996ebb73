"""Unit tests for metric, layout and column catalogs."""

import pytest

from kpi_monitor.application.catalog.columns import (
    NUMERIC_COLUMNS,
    column_for_header,
    label_for_column,
    normalize_header,
    sample_rows,
)
from kpi_monitor.application.catalog.layouts import IMPORT_LAYOUTS, get_layout, layouts_for_metric
from kpi_monitor.application.catalog.metrics import METRIC_DEFINITIONS, get_metric
from kpi_monitor.domain.enums import AggregationKind, DisplayFormat
from kpi_monitor.domain.errors import UnknownLayoutError, UnknownMetricError


def test_metric_ids_are_unique():
    """Test metric ids are unique."""
    ids = [m.id for m in METRIC_DEFINITIONS]
    assert len(ids) == len(set(ids))


def test_currency_metrics_are_summed():
    """Test currency indicators use sum aggregation."""
    for definition in METRIC_DEFINITIONS:
        if definition.display_format is DisplayFormat.CURRENCY:
            assert definition.aggregation_kind is AggregationKind.SUM


def test_lower_is_better_metrics():
    """Test attrition and risk exposure are lower-is-better."""
    assert not get_metric("rotacion-personal").higher_is_better
    assert not get_metric("gestion-riesgos").higher_is_better
    assert get_metric("colocacion").higher_is_better


def test_get_metric_unknown():
    """Test unknown metric raises."""
    with pytest.raises(UnknownMetricError, match="no-such-metric"):
        get_metric("no-such-metric")


def test_layout_tables_are_unique():
    """Test each table has one layout."""
    tables = [layout.table_name for layout in IMPORT_LAYOUTS]
    assert len(tables) == len(set(tables))


def test_every_layout_starts_with_period_columns():
    """Test layouts lead with year and month."""
    for layout in IMPORT_LAYOUTS:
        assert layout.columns[:2] == ("anio", "mes")


def test_layout_metrics_exist():
    """Test layouts reference known metrics."""
    for layout in IMPORT_LAYOUTS:
        assert get_metric(layout.metric_id).id == layout.metric_id


def test_get_layout():
    """Test lookup by table name."""
    layout = get_layout("kpi_colocacion_detalle_2")

    assert layout.metric_id == "colocacion"
    assert "imor" in layout.columns
    assert "meta" in layout.optional_columns


def test_get_layout_unknown():
    """Test unknown table raises."""
    with pytest.raises(UnknownLayoutError):
        get_layout("kpi_unknown")


def test_layouts_for_metric():
    """Test layouts of one metric in catalog order."""
    tables = [layout.table_name for layout in layouts_for_metric("rentabilidad")]

    assert tables == [
        "kpi_rentabilidad_detalle_1",
        "kpi_rentabilidad_detalle_2",
        "kpi_rentabilidad_detalle_3",
        "kpi_rentabilidad_detalle_4",
    ]


def test_normalize_header():
    """Test trimming, lower-casing and whitespace collapsing."""
    assert normalize_header("  Monto   Colocacion ") == "monto_colocacion"
    assert normalize_header("MES") == "mes"


@pytest.mark.parametrize(
    ("header", "column"),
    [
        ("Año", "anio"),
        ("año", "anio"),
        ("Monto Colocación", "monto_colocacion"),
        ("Headcount", "hc"),
        ("cartera_vencida", "cartera_vencida"),
        ("Unknown Header", "unknown_header"),
    ],
)
def test_column_for_header(header, column):
    """Test label to column id mapping."""
    assert column_for_header(header) == column


def test_every_layout_label_maps_back_to_its_column():
    """Test labels written to templates read back as the same column."""
    for layout in IMPORT_LAYOUTS:
        for column in layout.columns:
            assert column_for_header(label_for_column(column)) == column


def test_sample_rows_walk_months_backwards():
    """Test sample rows use the given year and decreasing months."""
    rows = sample_rows(("anio", "mes", "plaza", "monto"), count=3, year=2026, month=2)

    assert [row["anio"] for row in rows] == [2026, 2026, 2026]
    assert [row["mes"] for row in rows] == [2, 1, 1]
    assert rows[0]["plaza"] != rows[1]["plaza"]
    assert rows[0]["monto"] == 100000


def test_sample_numeric_columns_are_numbers():
    """Test numeric columns get numeric samples."""
    for layout in IMPORT_LAYOUTS:
        row = sample_rows(layout.columns, count=1, year=2026, month=6)[0]
        for column in layout.columns:
            if column in NUMERIC_COLUMNS:
                assert isinstance(row[column], (int, float)), (layout.table_name, column)
