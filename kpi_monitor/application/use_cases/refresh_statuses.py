"""Load current-year period records and compute every indicator status."""

import asyncio
from collections.abc import Mapping, Sequence

import structlog

from kpi_monitor.application.services.compliance import evaluate
from kpi_monitor.domain.entities import FetchFailed, FetchOk, FetchOutcome, MetricDefinition, MetricStatus
from kpi_monitor.domain.ports import PeriodRecordReaderPort
from kpi_monitor.infrastructure.observability.metrics import store_fetch_failures

logger = structlog.get_logger()


async def run(
    metrics: Sequence[MetricDefinition],
    reader: PeriodRecordReaderPort,
    year: int,
) -> dict[str, MetricStatus]:
    """Fetch all indicators concurrently, then aggregate and classify each.

    A failed fetch is substituted with an empty record set; the indicator
    comes out GRAY and the others are unaffected.
    """
    outcomes = await fetch_all(metrics, reader, year)

    statuses: dict[str, MetricStatus] = {}
    for definition, outcome in zip(metrics, outcomes):
        if isinstance(outcome, FetchFailed):
            store_fetch_failures.labels(table=definition.source_table).inc()
            logger.warning(
                "metric_fetch_failed",
                metric_id=definition.id,
                table=definition.source_table,
                year=year,
                reason=outcome.reason,
            )
        statuses[definition.id] = evaluate(definition, outcome.records)

    logger.info(
        "statuses_computed",
        year=year,
        metric_count=len(statuses),
        failed_count=sum(isinstance(outcome, FetchFailed) for outcome in outcomes),
    )
    return statuses


async def fetch_all(
    metrics: Sequence[MetricDefinition],
    reader: PeriodRecordReaderPort,
    year: int,
) -> list[FetchOutcome]:
    """Launch every fetch at once and wait until all have settled."""
    results = await asyncio.gather(
        *[reader.fetch_current_records(definition.source_table, year) for definition in metrics],
        return_exceptions=True,
    )

    outcomes: list[FetchOutcome] = []
    for definition, result in zip(metrics, results):
        if isinstance(result, Exception):
            outcomes.append(FetchFailed(metric_id=definition.id, reason=str(result) or type(result).__name__))
        elif isinstance(result, BaseException):
            raise result
        elif not all(isinstance(record, Mapping) for record in result):
            outcomes.append(FetchFailed(metric_id=definition.id, reason="Malformed records: expected objects"))
        else:
            outcomes.append(FetchOk(metric_id=definition.id, records=tuple(result)))
    return outcomes
