"""Export an import template for one layout."""

from pathlib import Path

import structlog

from kpi_monitor.application.catalog.columns import sample_rows
from kpi_monitor.domain.entities import ImportLayout
from kpi_monitor.domain.ports import ClockPort, TemplateWriterPort

logger = structlog.get_logger()


async def run(
    layout: ImportLayout,
    writer: TemplateWriterPort,
    output_path: Path,
    clock: ClockPort,
    sample_count: int = 0,
) -> Path:
    """Write a template whose header matches what the importer expects."""
    now = clock.now()
    rows = sample_rows(layout.columns, sample_count, now.year, now.month)

    written = writer.write_template(layout, rows, output_path, now)

    logger.info(
        "template_exported",
        table_name=layout.table_name,
        path=str(written),
        sample_rows=len(rows),
    )
    return written
