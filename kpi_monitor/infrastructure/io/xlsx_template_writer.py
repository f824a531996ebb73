"""XLSX import template writer with openpyxl."""

from pathlib import Path

from openpyxl import Workbook

from kpi_monitor.application.catalog.columns import (
    MONTH_COLUMN,
    NUMERIC_COLUMNS,
    YEAR_COLUMN,
    label_for_column,
)
from kpi_monitor.domain.entities import ImportLayout
from kpi_monitor.domain.ports import TemplateWriterPort
from kpi_monitor.domain.types import CellValue, Timestamp
from kpi_monitor.infrastructure.io.xlsx_reader import DATA_SHEET_NAME, FIRST_DATA_ROW, HEADER_ROW

INSTRUCTIONS_SHEET_NAME = "Instrucciones"


class XlsxTemplateWriter(TemplateWriterPort):
    """Writes a template the xlsx reader reads back column for column."""

    def write_template(
        self,
        layout: ImportLayout,
        sample_rows: list[dict[str, CellValue]],
        output_path: Path,
        generated_at: Timestamp,
    ) -> Path:
        """Write title, description, header labels and samples to ``Datos``."""
        workbook = Workbook()
        data = workbook.active
        data.title = DATA_SHEET_NAME

        data.cell(row=1, column=1, value=layout.title or layout.table_name)
        data.cell(row=2, column=1, value=layout.description)
        for index, column in enumerate(layout.columns, start=1):
            data.cell(row=HEADER_ROW, column=index, value=label_for_column(column))

        for offset, sample in enumerate(sample_rows):
            for index, column in enumerate(layout.columns, start=1):
                data.cell(row=FIRST_DATA_ROW + offset, column=index, value=sample.get(column))

        instructions = workbook.create_sheet(INSTRUCTIONS_SHEET_NAME)
        for line in _instructions(layout, generated_at):
            instructions.append(line)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(output_path)
        return output_path


def _instructions(layout: ImportLayout, generated_at: Timestamp) -> list[list[CellValue]]:
    lines: list[list[CellValue]] = [
        [f"Plantilla: {layout.title or layout.table_name}"],
        [f"Tabla destino: {layout.table_name}"],
        [f"Generada: {generated_at.strftime('%Y-%m-%d %H:%M')}"],
        [],
        [f"1. Capture los datos en la hoja '{DATA_SHEET_NAME}' a partir de la fila {FIRST_DATA_ROW}."],
        [f"2. No modifique los encabezados de la fila {HEADER_ROW}."],
        [f"3. '{label_for_column(YEAR_COLUMN)}' debe estar entre 2020 y 2050; "
         f"'{label_for_column(MONTH_COLUMN)}' entre 1 y 12."],
        ["4. Los valores numéricos pueden incluir $, % o separadores de miles."],
        [],
        ["Columna", "Encabezado", "Tipo", "Obligatoria"],
    ]
    for column in layout.columns:
        lines.append([
            column,
            label_for_column(column),
            "Número" if column in NUMERIC_COLUMNS else "Texto",
            "No" if column in layout.optional_columns else "Sí",
        ])
    return lines
