"""Domain entities."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from kpi_monitor.domain.enums import (
    AggregationKind,
    CommitPolicy,
    ComplianceStatus,
    DisplayFormat,
    ImportOutcome,
)
from kpi_monitor.domain.types import ParsedRow, PeriodRecord, Timestamp


@dataclass(frozen=True)
class MetricDefinition:
    """Indicator definition shared by every consumer."""

    id: str
    display_name: str
    short_name: str
    source_table: str
    value_field: str
    target_field: str
    aggregation_kind: AggregationKind
    higher_is_better: bool
    display_format: DisplayFormat


@dataclass(frozen=True)
class AggregatedMetric:
    """Yearly actual and target of one indicator."""

    actual: float | None
    target: float | None
    months_with_data: int


@dataclass(frozen=True)
class MetricStatus:
    """Compliance judgment of one indicator."""

    metric_id: str
    status: ComplianceStatus
    actual: float | None
    target: float | None
    progress_percent: float
    months_with_data: int

    @property
    def has_data(self) -> bool:
        return self.actual is not None


@dataclass(frozen=True)
class StatusSnapshot:
    """Published set of statuses for all indicators of one year."""

    year: int
    statuses: Mapping[str, MetricStatus]
    refreshed_at: Timestamp

    def __post_init__(self) -> None:
        object.__setattr__(self, "statuses", MappingProxyType(dict(self.statuses)))


@dataclass(frozen=True)
class FetchOk:
    """Records fetched for one indicator."""

    metric_id: str
    records: tuple[PeriodRecord, ...]


@dataclass(frozen=True)
class FetchFailed:
    """Fetch for one indicator failed; treated as an empty record set."""

    metric_id: str
    reason: str

    @property
    def records(self) -> tuple[PeriodRecord, ...]:
        return ()


FetchOutcome = FetchOk | FetchFailed


@dataclass(frozen=True)
class ImportLayout:
    """Expected column layout of one importable table."""

    table_name: str
    columns: tuple[str, ...]
    metric_id: str = ""
    layout_id: str = ""
    title: str = ""
    description: str = ""
    optional_columns: frozenset[str] = frozenset({"meta"})


@dataclass
class ParsedSheet:
    """Tabular content read from an uploaded file."""

    columns: list[str] = field(default_factory=list)
    rows: list[ParsedRow] = field(default_factory=list)
    row_numbers: list[int] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def row_number(self, index: int) -> int:
        """Spreadsheet row number of the row at ``index``."""
        if index < len(self.row_numbers):
            return self.row_numbers[index]
        return index + 2


@dataclass
class ValidationResult:
    """Outcome of checking a file before ingestion."""

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    row_count: int = 0


@dataclass(frozen=True)
class ImportRowError:
    """Error attributed to a spreadsheet row (or the first row of a batch)."""

    row: int
    message: str


@dataclass
class ImportProgress:
    """Progress of one import, mutated after every batch."""

    total: int = 0
    processed: int = 0
    success: int = 0
    failed: int = 0
    errors: list[ImportRowError] = field(default_factory=list)


@dataclass(frozen=True)
class ImportResult:
    """Final outcome of an import."""

    outcome: ImportOutcome
    message: str
    progress: ImportProgress
    validation: ValidationResult | None = None
    commit_policy: CommitPolicy = CommitPolicy.INDEPENDENT_CHUNKS
    notice: str | None = None

    @property
    def success(self) -> bool:
        return self.outcome is not ImportOutcome.FAILURE

