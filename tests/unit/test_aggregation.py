"""Unit tests for aggregation."""

import pytest

from kpi_monitor.application.services.aggregation import _AGGREGATORS, aggregate, numeric_values
from kpi_monitor.domain.entities import MetricDefinition
from kpi_monitor.domain.enums import AggregationKind, DisplayFormat


def _definition(kind: AggregationKind) -> MetricDefinition:
    return MetricDefinition(
        id="test-metric",
        display_name="Test Metric",
        short_name="Test",
        source_table="kpi_test_resumen",
        value_field="valor",
        target_field="meta",
        aggregation_kind=kind,
        higher_is_better=True,
        display_format=DisplayFormat.CURRENCY,
    )


def test_every_aggregation_kind_has_a_strategy():
    """Test registry covers every aggregation kind."""
    assert set(_AGGREGATORS) == set(AggregationKind)


def test_sum_ignores_null_and_unparseable():
    """Test sum of parseable values only."""
    records = [
        {"valor": 100, "meta": 90},
        {"valor": None, "meta": 90},
        {"valor": "abc", "meta": 90},
        {"valor": "250.5", "meta": None},
        {"meta": 90},
    ]

    result = aggregate(records, _definition(AggregationKind.SUM))

    assert result.actual == pytest.approx(350.5)
    assert result.target == pytest.approx(360)
    assert result.months_with_data == 2


def test_sum_is_null_when_nothing_parses():
    """Test sum is None without parseable values."""
    records = [{"valor": None, "meta": 10}, {"valor": "", "meta": 20}]

    result = aggregate(records, _definition(AggregationKind.SUM))

    assert result.actual is None
    assert result.target == pytest.approx(30)
    assert result.months_with_data == 0


def test_average_uses_count_of_contributing_records():
    """Test average divides by contributing records, independently per field."""
    records = [
        {"valor": 92, "meta": 90},
        {"valor": 88, "meta": None},
        {"valor": None, "meta": 100},
    ]

    result = aggregate(records, _definition(AggregationKind.AVERAGE))

    assert result.actual == pytest.approx(90)
    assert result.target == pytest.approx(95)
    assert result.months_with_data == 2


def test_sum_is_order_independent():
    """Test sum does not depend on record order."""
    values = [0.1, 1e16, -1e16, 0.2, 0.3]
    forward = [{"valor": v, "meta": 1} for v in values]
    backward = list(reversed(forward))

    definition = _definition(AggregationKind.SUM)

    assert aggregate(forward, definition).actual == aggregate(backward, definition).actual


def test_empty_records():
    """Test no records yields nulls."""
    result = aggregate([], _definition(AggregationKind.AVERAGE))

    assert result.actual is None
    assert result.target is None
    assert result.months_with_data == 0


def test_numeric_values_drops_booleans_and_non_finite():
    """Test booleans, inf and nan do not contribute."""
    records = [{"valor": True}, {"valor": float("inf")}, {"valor": float("nan")}, {"valor": 5}]

    values = numeric_values(records, "valor")

    assert values.tolist() == [5.0]
