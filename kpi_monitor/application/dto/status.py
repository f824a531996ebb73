"""Status DTOs."""

from pydantic import BaseModel, ConfigDict, Field

from kpi_monitor.application.services.formatting import format_metric_value
from kpi_monitor.domain.entities import MetricDefinition, MetricStatus, StatusSnapshot
from kpi_monitor.domain.enums import ComplianceStatus, DisplayFormat


class MetricStatusView(BaseModel):
    """Status of one indicator as shown on the overview."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    short_name: str = Field(alias="shortName")
    format: DisplayFormat
    status: ComplianceStatus
    actual_value: float | None = Field(None, alias="actualValue")
    meta_value: float | None = Field(None, alias="metaValue")
    progress_percent: float = Field(0.0, alias="progressPercent")
    has_data: bool = Field(False, alias="hasData")
    months_with_data: int = Field(0, alias="monthsWithData")
    actual_display: str = Field("-", alias="actualDisplay")
    meta_display: str = Field("-", alias="metaDisplay")

    @classmethod
    def from_status(cls, definition: MetricDefinition, status: MetricStatus | None) -> "MetricStatusView":
        """Build a view; a missing status renders as GRAY without data."""
        if status is None:
            return cls(
                id=definition.id,
                name=definition.display_name,
                short_name=definition.short_name,
                format=definition.display_format,
                status=ComplianceStatus.GRAY,
            )
        return cls(
            id=definition.id,
            name=definition.display_name,
            short_name=definition.short_name,
            format=definition.display_format,
            status=status.status,
            actual_value=status.actual,
            meta_value=status.target,
            progress_percent=status.progress_percent,
            has_data=status.has_data,
            months_with_data=status.months_with_data,
            actual_display=format_metric_value(status.actual, definition.display_format),
            meta_display=format_metric_value(status.target, definition.display_format),
        )


class StatusOverview(BaseModel):
    """All indicator statuses of one refresh."""

    model_config = ConfigDict(populate_by_name=True)

    year: int
    refreshed_at: str = Field(alias="refreshedAt")  # ISO 8601 string
    metrics: list[MetricStatusView]

    @classmethod
    def from_snapshot(
        cls,
        snapshot: StatusSnapshot,
        definitions: list[MetricDefinition],
        refreshed_at: str,
    ) -> "StatusOverview":
        return cls(
            year=snapshot.year,
            refreshed_at=refreshed_at,
            metrics=[MetricStatusView.from_status(d, snapshot.statuses.get(d.id)) for d in definitions],
        )
