"""Compliance classification of actual vs target."""

from collections.abc import Sequence

from kpi_monitor.application.services.aggregation import aggregate
from kpi_monitor.domain.entities import MetricDefinition, MetricStatus
from kpi_monitor.domain.enums import ComplianceStatus
from kpi_monitor.domain.types import PeriodRecord

# Higher-is-better: ratio >= 1.0 green, [0.85, 1.0) yellow, below red
YELLOW_FLOOR = 0.85
# Lower-is-better: ratio <= 1.0 green, (1.0, 1.15] yellow, above red
YELLOW_CEILING = 1.15
PROGRESS_CAP = 150.0


def classify(
    actual: float | None,
    target: float | None,
    higher_is_better: bool,
) -> ComplianceStatus:
    """Map actual vs target to a traffic-light status."""
    if actual is None or target is None or target == 0:
        return ComplianceStatus.GRAY

    ratio = actual / target

    if higher_is_better:
        if ratio >= 1.0:
            return ComplianceStatus.GREEN
        if ratio >= YELLOW_FLOOR:
            return ComplianceStatus.YELLOW
        return ComplianceStatus.RED

    if ratio <= 1.0:
        return ComplianceStatus.GREEN
    if ratio <= YELLOW_CEILING:
        return ComplianceStatus.YELLOW
    return ComplianceStatus.RED


def progress_percent(
    actual: float | None,
    target: float | None,
    higher_is_better: bool,
) -> float:
    """Progress towards target for bars and gauges, within [0, 150].

    Lower-is-better indicators invert the ratio; a zero actual there
    saturates at the cap.
    """
    if actual is None or target is None or target == 0:
        return 0.0

    if higher_is_better:
        percent = actual / target * 100
    elif actual == 0:
        percent = PROGRESS_CAP
    else:
        percent = target / actual * 100

    return max(0.0, min(percent, PROGRESS_CAP))


def evaluate(definition: MetricDefinition, records: Sequence[PeriodRecord]) -> MetricStatus:
    """Aggregate and classify one indicator."""
    aggregated = aggregate(records, definition)

    return MetricStatus(
        metric_id=definition.id,
        status=classify(aggregated.actual, aggregated.target, definition.higher_is_better),
        actual=aggregated.actual,
        target=aggregated.target,
        progress_percent=progress_percent(
            aggregated.actual,
            aggregated.target,
            definition.higher_is_better,
        ),
        months_with_data=aggregated.months_with_data,
    )
