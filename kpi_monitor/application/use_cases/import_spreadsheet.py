"""Import a parsed spreadsheet: validate, normalize, then ingest."""

import structlog

from kpi_monitor.application.services.import_validator import validate_sheet
from kpi_monitor.application.services.normalizer import normalize_row
from kpi_monitor.application.use_cases.ingest_records import (
    DEFAULT_BATCH_SIZE,
    ProgressCallback,
)
from kpi_monitor.application.use_cases.ingest_records import run as ingest_records
from kpi_monitor.domain.entities import (
    ImportLayout,
    ImportProgress,
    ImportResult,
    ParsedSheet,
)
from kpi_monitor.domain.enums import ImportOutcome
from kpi_monitor.domain.ports import ClockPort, RecordWriterPort
from kpi_monitor.domain.types import NormalizedRecord

logger = structlog.get_logger()


async def run(
    sheet: ParsedSheet,
    layout: ImportLayout,
    writer: RecordWriterPort,
    clock: ClockPort,
    owner_id: str,
    batch_size: int = DEFAULT_BATCH_SIZE,
    on_progress: ProgressCallback | None = None,
) -> ImportResult:
    """Import ``sheet`` into ``layout.table_name``.

    Nothing is written when validation fails.
    """
    progress = ImportProgress()
    validation = validate_sheet(sheet, layout)

    if not validation.valid:
        logger.info(
            "import_rejected",
            table_name=layout.table_name,
            errors=validation.errors[:3],
        )
        return ImportResult(
            outcome=ImportOutcome.FAILURE,
            message=f"Validation failed: {'; '.join(validation.errors[:3])}",
            progress=progress,
            validation=validation,
        )

    created_at = clock.format_iso(clock.now())
    records = [_build_record(row, layout, owner_id, created_at) for row in sheet.rows]

    logger.info(
        "import_started",
        table_name=layout.table_name,
        record_count=len(records),
        batch_size=batch_size,
    )

    result = await ingest_records(
        records,
        layout.table_name,
        writer,
        batch_size=batch_size,
        row_numbers=[sheet.row_number(i) for i in range(len(sheet.rows))],
        on_progress=on_progress,
        progress=progress,
    )
    return ImportResult(
        outcome=result.outcome,
        message=result.message,
        progress=result.progress,
        validation=validation,
        commit_policy=result.commit_policy,
        notice=result.notice,
    )


def _build_record(
    row: dict,
    layout: ImportLayout,
    owner_id: str,
    created_at: str,
) -> NormalizedRecord:
    record: NormalizedRecord = {"owner_id": owner_id, "created_at": created_at}
    record.update(normalize_row(row, layout.columns))
    return record
