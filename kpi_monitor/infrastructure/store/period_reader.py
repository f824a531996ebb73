"""Period record reader."""

import structlog

from kpi_monitor.domain.ports import PeriodRecordReaderPort
from kpi_monitor.domain.types import PeriodRecord
from kpi_monitor.infrastructure.store.rest_client import StoreClient

logger = structlog.get_logger()


class RestPeriodRecordReader(PeriodRecordReaderPort):
    """Reads current-year period records over REST."""

    def __init__(self, client: StoreClient) -> None:
        """Initialize period reader."""
        self.client = client

    async def fetch_current_records(self, table_name: str, year: int) -> list[PeriodRecord]:
        """Fetch ``is_current`` records of ``year`` ordered by month."""
        rows = await self.client.select(
            table_name,
            {
                "select": "*",
                "is_current": "eq.true",
                "anio": f"eq.{year}",
                "order": "mes.asc",
            },
        )
        logger.debug("period_records_fetched", table=table_name, year=year, row_count=len(rows))
        return rows
