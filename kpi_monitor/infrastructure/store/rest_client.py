"""REST client for the hosted data backend."""

import asyncio
from collections.abc import Sequence

import requests
import structlog
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from kpi_monitor.application.dto.store import StoreErrorPayload
from kpi_monitor.domain.errors import StoreReadError, StoreWriteError
from kpi_monitor.domain.types import JsonValue, NormalizedRecord
from kpi_monitor.infrastructure.config.settings import Settings

logger = structlog.get_logger()

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class TransientStoreReadError(StoreReadError):
    """Read failed in a way worth retrying (network, 429, 5xx)."""


class StoreClient:
    """Table-level REST operations (PostgREST conventions)."""

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        """Initialize HTTP session."""
        self.settings = settings
        self.session = session or requests.Session()
        self.base_url = settings.store_url.rstrip("/") + "/rest/v1"
        self.timeout = settings.store_timeout_seconds

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.settings.store_api_key,
            "Authorization": f"Bearer {self.settings.store_api_key}",
            "Accept": "application/json",
        }

    @retry(
        retry=retry_if_exception_type(TransientStoreReadError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def select(self, table: str, params: dict[str, str]) -> list[dict[str, JsonValue]]:
        """Select rows of ``table`` filtered by PostgREST query params."""
        url = f"{self.base_url}/{table}"
        try:
            response = await asyncio.to_thread(
                self.session.get,
                url,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransientStoreReadError(f"Failed to read table {table}: {e}") from e

        if response.status_code in RETRYABLE_STATUS_CODES:
            raise TransientStoreReadError(
                f"Failed to read table {table}: {_error_message(response)}",
            )
        if not response.ok:
            raise StoreReadError(f"Failed to read table {table}: {_error_message(response)}")

        try:
            rows = response.json()
        except ValueError as e:
            raise StoreReadError(f"Invalid JSON from table {table}: {e}") from e
        if not isinstance(rows, list):
            raise StoreReadError(f"Unexpected payload from table {table}: expected a list")
        if not all(isinstance(row, dict) for row in rows):
            raise StoreReadError(f"Unexpected payload from table {table}: expected a list of objects")
        return rows

    async def insert(self, table: str, rows: Sequence[NormalizedRecord]) -> None:
        """Insert rows in one bulk call. Never retried."""
        url = f"{self.base_url}/{table}"
        headers = {
            **self._headers(),
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }
        try:
            response = await asyncio.to_thread(
                self.session.post,
                url,
                json=list(rows),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreWriteError(str(e)) from e

        if not response.ok:
            message = _error_message(response)
            logger.error(
                "store_insert_rejected",
                table=table,
                status_code=response.status_code,
                row_count=len(rows),
                error=message,
            )
            raise StoreWriteError(message)


def _error_message(response: requests.Response) -> str:
    """Best-effort message from an error response."""
    try:
        return StoreErrorPayload.model_validate(response.json()).describe()
    except (ValueError, ValidationError):
        return f"HTTP {response.status_code}: {response.text[:200]}"
