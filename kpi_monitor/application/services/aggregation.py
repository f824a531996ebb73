"""Aggregation of period records into yearly actual and target values."""

import math
from collections.abc import Callable, Sequence

import numpy as np
import pandas as pd

from kpi_monitor.domain.entities import AggregatedMetric, MetricDefinition
from kpi_monitor.domain.enums import AggregationKind
from kpi_monitor.domain.types import PeriodRecord

Reducer = Callable[[pd.Series], float]


def _sum(values: pd.Series) -> float:
    return math.fsum(values)


def _average(values: pd.Series) -> float:
    return math.fsum(values) / len(values)


# Strategy per aggregation kind; every AggregationKind member must be present
_AGGREGATORS: dict[AggregationKind, Reducer] = {
    AggregationKind.SUM: _sum,
    AggregationKind.AVERAGE: _average,
}


def numeric_values(records: Sequence[PeriodRecord], field: str) -> pd.Series:
    """Values of ``field`` that parse as finite numbers.

    Missing, null, boolean and unparseable entries are dropped.
    """
    raw = pd.Series(
        [None if isinstance(record.get(field), bool) else record.get(field) for record in records],
        dtype=object,
    )
    values = pd.to_numeric(raw, errors="coerce").astype("float64")
    return values[np.isfinite(values)]


def _reduce(values: pd.Series, kind: AggregationKind) -> float | None:
    if values.empty:
        return None
    return _AGGREGATORS[kind](values)


def aggregate(records: Sequence[PeriodRecord], definition: MetricDefinition) -> AggregatedMetric:
    """Reduce one indicator's period records into actual and target.

    Actual and target are filtered independently: a record missing the
    target still contributes to actual, and vice versa. ``fsum`` keeps the
    result independent of record order.
    """
    actual_values = numeric_values(records, definition.value_field)
    target_values = numeric_values(records, definition.target_field)

    return AggregatedMetric(
        actual=_reduce(actual_values, definition.aggregation_kind),
        target=_reduce(target_values, definition.aggregation_kind),
        months_with_data=len(actual_values),
    )
