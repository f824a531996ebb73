"""Adapter selection by file extension."""

from pathlib import Path

from kpi_monitor.domain.errors import SpreadsheetParseError
from kpi_monitor.domain.ports import SpreadsheetReaderPort, TemplateWriterPort
from kpi_monitor.infrastructure.io.csv_layout_writer import CsvLayoutWriter
from kpi_monitor.infrastructure.io.csv_reader import CsvSheetReader
from kpi_monitor.infrastructure.io.xlsx_reader import XlsxSheetReader
from kpi_monitor.infrastructure.io.xlsx_template_writer import XlsxTemplateWriter

SUPPORTED_SUFFIXES = (".xlsx", ".csv")


def reader_for(path: Path) -> SpreadsheetReaderPort:
    """Get the sheet reader matching the file extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".xlsx":
        return XlsxSheetReader()
    if suffix == ".csv":
        return CsvSheetReader()
    raise SpreadsheetParseError(
        f"Unsupported file type '{suffix}'; expected one of: {', '.join(SUPPORTED_SUFFIXES)}",
    )


def template_writer_for(path: Path) -> TemplateWriterPort:
    """Get the template writer matching the file extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".xlsx":
        return XlsxTemplateWriter()
    if suffix == ".csv":
        return CsvLayoutWriter()
    raise SpreadsheetParseError(
        f"Unsupported file type '{suffix}'; expected one of: {', '.join(SUPPORTED_SUFFIXES)}",
    )
