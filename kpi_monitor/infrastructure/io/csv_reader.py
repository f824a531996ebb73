"""CSV sheet reader with pandas."""

from pathlib import Path

import pandas as pd
import structlog

from kpi_monitor.application.catalog.columns import normalize_header
from kpi_monitor.domain.entities import ParsedSheet
from kpi_monitor.domain.ports import SpreadsheetReaderPort

logger = structlog.get_logger()

# Header is the first line; the first data row is line 2
FIRST_DATA_ROW = 2


class CsvSheetReader(SpreadsheetReaderPort):
    """Reads comma-separated files with a single header line."""

    def read(self, path: Path) -> ParsedSheet:
        """Read all cells as text; blank lines are skipped."""
        sheet = ParsedSheet()
        try:
            # Blank lines are kept so index maps to the line number
            df = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
                encoding="utf-8-sig",
            )
        except pd.errors.EmptyDataError:
            sheet.errors.append("The file is empty")
            return sheet
        except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
            logger.warning("csv_open_failed", path=str(path), error=str(e))
            sheet.errors.append(f"Could not read file: {e}")
            return sheet

        df.columns = [normalize_header(str(column)) for column in df.columns]
        sheet.columns = list(df.columns)

        for index, record in enumerate(df.to_dict(orient="records")):
            row = {column: (None if pd.isna(value) else value) for column, value in record.items()}
            if all(value is None or not str(value).strip() for value in row.values()):
                continue
            sheet.rows.append(row)
            sheet.row_numbers.append(index + FIRST_DATA_ROW)

        logger.debug("csv_read", path=str(path), columns=len(sheet.columns), rows=len(sheet.rows))
        return sheet
