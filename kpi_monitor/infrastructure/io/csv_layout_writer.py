"""CSV layout writer with pandas."""

from pathlib import Path

import pandas as pd

from kpi_monitor.domain.entities import ImportLayout
from kpi_monitor.domain.ports import TemplateWriterPort
from kpi_monitor.domain.types import CellValue, Timestamp


class CsvLayoutWriter(TemplateWriterPort):
    """Writes a header of raw column ids plus optional sample rows."""

    def write_template(
        self,
        layout: ImportLayout,
        sample_rows: list[dict[str, CellValue]],
        output_path: Path,
        generated_at: Timestamp,
    ) -> Path:
        """Write UTF-8 with BOM so spreadsheet apps detect the encoding."""
        df = pd.DataFrame(sample_rows, columns=list(layout.columns))
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_path, index=False, encoding="utf-8-sig")
        return output_path
