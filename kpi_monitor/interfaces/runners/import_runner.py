"""Spreadsheet import runner."""

import asyncio
from pathlib import Path

import structlog

from kpi_monitor.application.services.import_validator import validate_sheet
from kpi_monitor.application.use_cases.ingest_records import DEFAULT_BATCH_SIZE, ProgressCallback
from kpi_monitor.application.use_cases.import_spreadsheet import run as import_spreadsheet
from kpi_monitor.domain.entities import ImportLayout, ImportResult, ValidationResult
from kpi_monitor.domain.errors import ImportInProgressError
from kpi_monitor.domain.ports import ClockPort, RecordWriterPort
from kpi_monitor.infrastructure.io.formats import reader_for

logger = structlog.get_logger()


def validate_file(path: Path, layout: ImportLayout) -> ValidationResult:
    """Read and validate a file without writing anything."""
    sheet = reader_for(path).read(path)
    return validate_sheet(sheet, layout)


class ImportRunner:
    """Runs one import at a time; a second concurrent import is rejected."""

    def __init__(
        self,
        writer: RecordWriterPort,
        clock: ClockPort,
        owner_id: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        """Initialize import runner."""
        self.writer = writer
        self.clock = clock
        self.owner_id = owner_id
        self.batch_size = batch_size
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def import_file(
        self,
        path: Path,
        layout: ImportLayout,
        on_progress: ProgressCallback | None = None,
    ) -> ImportResult:
        """Read ``path`` and import it into ``layout.table_name``."""
        if self._busy:
            raise ImportInProgressError(f"An import is already running; cannot start {layout.table_name}")

        self._busy = True
        try:
            reader = reader_for(path)
            sheet = await asyncio.to_thread(reader.read, path)
            logger.info(
                "import_file_read",
                path=str(path),
                table_name=layout.table_name,
                row_count=len(sheet.rows),
            )
            return await import_spreadsheet(
                sheet,
                layout,
                self.writer,
                self.clock,
                self.owner_id,
                batch_size=self.batch_size,
                on_progress=on_progress,
            )
        finally:
            self._busy = False
