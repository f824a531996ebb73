"""XLSX sheet reader with openpyxl."""

from datetime import date, datetime, time
from pathlib import Path
from zipfile import BadZipFile

import structlog
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from kpi_monitor.application.catalog.columns import column_for_header
from kpi_monitor.domain.entities import ParsedSheet
from kpi_monitor.domain.ports import SpreadsheetReaderPort
from kpi_monitor.domain.types import CellValue

logger = structlog.get_logger()

DATA_SHEET_NAME = "Datos"
HEADER_ROW = 3
FIRST_DATA_ROW = HEADER_ROW + 1


class XlsxSheetReader(SpreadsheetReaderPort):
    """Reads templates produced by the xlsx exporter (or filled by hand)."""

    def __init__(self, sheet_name: str = DATA_SHEET_NAME) -> None:
        """Initialize xlsx reader."""
        self.sheet_name = sheet_name

    def read(self, path: Path) -> ParsedSheet:
        """Read header at row 3 and data from row 4; formulas yield cached values."""
        sheet = ParsedSheet()
        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
            logger.warning("xlsx_open_failed", path=str(path), error=str(e))
            sheet.errors.append(f"Could not read file: {e}")
            return sheet

        try:
            if self.sheet_name in workbook.sheetnames:
                worksheet = workbook[self.sheet_name]
            else:
                worksheet = workbook.worksheets[0]

            header = next(
                worksheet.iter_rows(min_row=HEADER_ROW, max_row=HEADER_ROW, values_only=True),
                (),
            )
            # Position -> column id; blank header cells are skipped
            positions = {
                index: column_for_header(str(cell))
                for index, cell in enumerate(header)
                if cell is not None and str(cell).strip()
            }
            if not positions:
                sheet.errors.append(f"No columns found in header row {HEADER_ROW}")
                return sheet
            sheet.columns = list(positions.values())

            for row_number, values in enumerate(
                worksheet.iter_rows(min_row=FIRST_DATA_ROW, values_only=True),
                start=FIRST_DATA_ROW,
            ):
                row = {
                    column: _cell_value(values[index]) if index < len(values) else None
                    for index, column in positions.items()
                }
                if all(_is_blank(value) for value in row.values()):
                    continue
                sheet.rows.append(row)
                sheet.row_numbers.append(row_number)
        finally:
            workbook.close()

        logger.debug("xlsx_read", path=str(path), columns=len(sheet.columns), rows=len(sheet.rows))
        return sheet


def _cell_value(value: object) -> CellValue:
    if value is None:
        return None
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float, str)):
        return value
    return str(value)


def _is_blank(value: CellValue) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())
