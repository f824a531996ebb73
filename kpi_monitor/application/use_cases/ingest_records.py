"""Write normalized records to the store in bounded, sequential batches."""

from collections.abc import Callable, Sequence

import structlog

from kpi_monitor.domain.entities import ImportProgress, ImportResult, ImportRowError
from kpi_monitor.domain.enums import CommitPolicy, ImportOutcome
from kpi_monitor.domain.ports import RecordWriterPort
from kpi_monitor.domain.types import NormalizedRecord
from kpi_monitor.infrastructure.observability.metrics import import_batches, import_records

logger = structlog.get_logger()

DEFAULT_BATCH_SIZE = 100

PARTIAL_IMPORT_NOTICE = (
    "Batches are written independently and are not rolled back: "
    "the destination table now holds only the rows of the successful batches."
)

ProgressCallback = Callable[[ImportProgress], None]


async def run(
    records: Sequence[NormalizedRecord],
    table_name: str,
    writer: RecordWriterPort,
    batch_size: int = DEFAULT_BATCH_SIZE,
    row_numbers: Sequence[int] | None = None,
    on_progress: ProgressCallback | None = None,
    progress: ImportProgress | None = None,
) -> ImportResult:
    """Insert records chunk by chunk under CommitPolicy.INDEPENDENT_CHUNKS.

    A failed chunk counts all its records as failed and records one error
    with the chunk's first row; later chunks are still attempted. Any
    exception from the writer fails its chunk, so success plus failed always
    reaches total. Chunks are awaited one at a time so progress only moves
    forward.
    """
    batch_size = max(1, batch_size)
    progress = progress if progress is not None else ImportProgress()
    progress.total = len(records)

    if not records:
        return ImportResult(
            outcome=ImportOutcome.FAILURE,
            message="No valid records to import",
            progress=progress,
        )

    for start in range(0, len(records), batch_size):
        batch = list(records[start:start + batch_size])
        first_row = row_numbers[start] if row_numbers is not None else start + 2

        try:
            await writer.insert_records(table_name, batch)
        except Exception as e:
            progress.failed += len(batch)
            progress.errors.append(ImportRowError(row=first_row, message=str(e) or type(e).__name__))
            import_batches.labels(result="failed").inc()
            import_records.labels(result="failed").inc(len(batch))
            logger.warning(
                "batch_write_failed",
                table_name=table_name,
                first_row=first_row,
                batch_size=len(batch),
                error=str(e),
            )
        else:
            progress.success += len(batch)
            import_batches.labels(result="written").inc()
            import_records.labels(result="written").inc(len(batch))

        progress.processed = min(start + batch_size, len(records))
        if on_progress is not None:
            on_progress(progress)

    return _classify(progress, table_name)


def _classify(progress: ImportProgress, table_name: str) -> ImportResult:
    if progress.failed == 0:
        outcome = ImportOutcome.SUCCESS
        message = f"{progress.success} records imported successfully"
        notice = None
    elif progress.success > 0:
        outcome = ImportOutcome.PARTIAL
        message = f"{progress.success} imported, {progress.failed} failed"
        notice = PARTIAL_IMPORT_NOTICE
    else:
        outcome = ImportOutcome.FAILURE
        first_error = progress.errors[0].message if progress.errors else "unknown error"
        message = f"Import failed: {first_error}"
        notice = None

    logger.info(
        "import_finished",
        table_name=table_name,
        outcome=outcome.value,
        success=progress.success,
        failed=progress.failed,
    )
    return ImportResult(
        outcome=outcome,
        message=message,
        progress=progress,
        commit_policy=CommitPolicy.INDEPENDENT_CHUNKS,
        notice=notice,
    )
