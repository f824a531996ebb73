"""Normalization of free-form spreadsheet cells into typed values."""

import math
import re

from kpi_monitor.application.catalog.columns import INTEGER_COLUMNS, NUMERIC_COLUMNS
from kpi_monitor.domain.types import CellValue

# Currency symbols, percent signs, thousands separators and whitespace
_NUMERIC_NOISE_RE = re.compile(r"[$€£¥%,\s]")


def normalize_value(value: CellValue, column: str) -> CellValue:
    """Coerce one raw cell for ``column``.

    Never raises: unparseable numeric cells degrade to None so the import can
    continue and the gap shows up as an empty cell downstream.
    """
    if isinstance(value, bool):
        value = str(value)

    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        return value

    if value is None:
        return None

    text = str(value).strip()
    if not text:
        return None

    if column not in NUMERIC_COLUMNS:
        return text

    try:
        number = float(_NUMERIC_NOISE_RE.sub("", text))
    except ValueError:
        return None

    if not math.isfinite(number):
        return None
    if column in INTEGER_COLUMNS and number.is_integer():
        return int(number)
    return number


def normalize_row(row: dict[str, CellValue], columns: tuple[str, ...]) -> dict[str, CellValue]:
    """Normalize the layout columns of one row; other columns are dropped."""
    lowered = {key.lower(): cell for key, cell in row.items()}
    return {column: normalize_value(lowered.get(column.lower()), column) for column in columns}
