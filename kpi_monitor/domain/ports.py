"""Ports (interfaces) for infrastructure adapters."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from kpi_monitor.domain.entities import ImportLayout, ParsedSheet
from kpi_monitor.domain.types import CellValue, NormalizedRecord, PeriodRecord, Timestamp


class PeriodRecordReaderPort(ABC):
    """Port for reading period records from the backing store."""

    @abstractmethod
    async def fetch_current_records(self, table_name: str, year: int) -> list[PeriodRecord]:
        """Fetch records flagged current for ``year``, ordered by month ascending."""


class RecordWriterPort(ABC):
    """Port for writing records to the backing store."""

    @abstractmethod
    async def insert_records(self, table_name: str, records: Sequence[NormalizedRecord]) -> None:
        """Insert all records in a single bulk call.

        Raises StoreWriteError carrying the backend message on failure.
        """


class SpreadsheetReaderPort(ABC):
    """Port for reading an uploaded tabular file."""

    @abstractmethod
    def read(self, path: Path) -> ParsedSheet:
        """Read the file; parse problems are reported in ``ParsedSheet.errors``."""


class TemplateWriterPort(ABC):
    """Port for writing an import template."""

    @abstractmethod
    def write_template(
        self,
        layout: ImportLayout,
        sample_rows: list[dict[str, CellValue]],
        output_path: Path,
        generated_at: Timestamp,
    ) -> Path:
        """Write the template and return the path actually written."""


class ClockPort(ABC):
    """Port for time operations."""

    @abstractmethod
    def now(self) -> Timestamp:
        """Get current timestamp."""

    @abstractmethod
    def format_iso(self, ts: Timestamp) -> str:
        """Format timestamp as an ISO-8601 string."""
