"""Clock implementation."""

from datetime import datetime, timezone

from kpi_monitor.domain.ports import ClockPort
from kpi_monitor.domain.types import Timestamp


class SystemClock(ClockPort):
    """System clock implementation."""

    def now(self) -> Timestamp:
        """Get current timestamp."""
        return datetime.now(timezone.utc)

    def format_iso(self, ts: Timestamp) -> str:
        """Format timestamp as ISO-8601, UTC with a ``Z`` suffix."""
        if ts.tzinfo is not None:
            ts = ts.astimezone(timezone.utc).replace(tzinfo=None)
        return ts.isoformat() + "Z"
