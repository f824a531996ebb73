"""Domain types and aliases."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING

Timestamp = datetime

# JSON-serializable types (recursive)
if TYPE_CHECKING:
    JsonValue = str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
else:
    JsonValue = str | int | float | bool | None | dict | list

# One row of a period table as returned by the store
PeriodRecord = Mapping[str, JsonValue]

# Raw spreadsheet cell and row
CellValue = str | int | float | None
ParsedRow = dict[str, CellValue]

# Record ready to be written to the store
NormalizedRecord = dict[str, CellValue]
