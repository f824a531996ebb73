"""Validation of parsed spreadsheets against an import layout."""

import re

import structlog

from kpi_monitor.application.catalog.columns import MONTH_COLUMN, YEAR_COLUMN
from kpi_monitor.domain.entities import ImportLayout, ParsedSheet, ValidationResult
from kpi_monitor.domain.types import CellValue

logger = structlog.get_logger()

MIN_YEAR = 2020
MAX_YEAR = 2050
MIN_MONTH = 1
MAX_MONTH = 12
MAX_REPORTED_ERRORS = 10

_INTEGER_TEXT_RE = re.compile(r"^[+-]?\d+(\.0*)?$")


def validate_sheet(sheet: ParsedSheet, layout: ImportLayout) -> ValidationResult:
    """Check structure and row-level domain rules before any write.

    Every row is checked even after a hard error so the report is complete
    (up to the truncation of the error list). Warnings are not truncated.
    """
    result = ValidationResult(row_count=len(sheet.rows))

    if sheet.errors or not sheet.rows:
        result.valid = False
        result.errors.extend(sheet.errors or ["The file contains no data rows"])
        result.errors = _truncate(result.errors)
        return result

    required = [column.lower() for column in layout.columns]
    optional = {column.lower() for column in layout.optional_columns}
    present = [column.lower() for column in (sheet.columns or list(sheet.rows[0]))]

    missing = [column for column in required if column not in present]
    extra = [column for column in present if column not in required]

    if missing:
        result.valid = False
        result.errors.append(f"Missing required columns: {', '.join(missing)}")
    if extra:
        result.warnings.append(f"Extra columns ignored: {', '.join(extra)}")

    for index, row in enumerate(sheet.rows):
        row_number = sheet.row_number(index)
        cells = {key.lower(): value for key, value in row.items()}

        if YEAR_COLUMN in cells and not _in_range(cells[YEAR_COLUMN], MIN_YEAR, MAX_YEAR):
            result.valid = False
            result.errors.append(f'Row {row_number}: invalid year "{_display(cells[YEAR_COLUMN])}"')

        if MONTH_COLUMN in cells and not _in_range(cells[MONTH_COLUMN], MIN_MONTH, MAX_MONTH):
            result.valid = False
            result.errors.append(f'Row {row_number}: invalid month "{_display(cells[MONTH_COLUMN])}"')

        for column in required:
            if column in optional or column in missing:
                continue
            if _is_blank(cells.get(column)):
                result.warnings.append(f'Row {row_number}: field "{column}" is empty')

    result.errors = _truncate(result.errors)

    logger.info(
        "sheet_validated",
        table_name=layout.table_name,
        valid=result.valid,
        row_count=result.row_count,
        error_count=len(result.errors),
        warning_count=len(result.warnings),
    )
    return result


def parse_int(value: CellValue) -> int | None:
    """Parse a cell as an integer; integral floats and ``"2025.0"`` are accepted."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None

    text = str(value).strip()
    if not _INTEGER_TEXT_RE.match(text):
        return None
    return int(text.split(".")[0])


def _in_range(value: CellValue, low: int, high: int) -> bool:
    number = parse_int(value)
    return number is not None and low <= number <= high


def _is_blank(value: CellValue) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _display(value: CellValue) -> str:
    return "" if value is None else str(value)


def _truncate(errors: list[str]) -> list[str]:
    if len(errors) <= MAX_REPORTED_ERRORS:
        return errors
    hidden = len(errors) - MAX_REPORTED_ERRORS
    return [*errors[:MAX_REPORTED_ERRORS], f"...and {hidden} more errors"]
