"""Record writer."""

from collections.abc import Sequence

from kpi_monitor.domain.ports import RecordWriterPort
from kpi_monitor.domain.types import NormalizedRecord
from kpi_monitor.infrastructure.store.rest_client import StoreClient


class RestRecordWriter(RecordWriterPort):
    """Bulk-inserts records over REST."""

    def __init__(self, client: StoreClient) -> None:
        """Initialize record writer."""
        self.client = client

    async def insert_records(self, table_name: str, records: Sequence[NormalizedRecord]) -> None:
        """Insert all records in one call."""
        await self.client.insert(table_name, records)
