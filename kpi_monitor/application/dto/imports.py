"""Import report DTOs."""

from pydantic import BaseModel, ConfigDict, Field

from kpi_monitor.domain.entities import ImportResult, ValidationResult
from kpi_monitor.domain.enums import CommitPolicy, ImportOutcome


class ImportErrorView(BaseModel):
    """Error attributed to a spreadsheet row."""

    row: int
    message: str


class ValidationReport(BaseModel):
    """Validation outcome of an uploaded file."""

    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    row_count: int = Field(alias="rowCount")
    errors: list[str]
    warnings: list[str]

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationReport":
        return cls(
            valid=result.valid,
            row_count=result.row_count,
            errors=list(result.errors),
            warnings=list(result.warnings),
        )


class ImportReport(BaseModel):
    """Final report of an import."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    outcome: ImportOutcome
    message: str
    table_name: str = Field(alias="tableName")
    total: int
    processed: int
    imported: int
    failed: int
    errors: list[ImportErrorView]
    commit_policy: CommitPolicy = Field(alias="commitPolicy")
    notice: str | None = None
    validation: ValidationReport | None = None

    @classmethod
    def from_result(cls, result: ImportResult, table_name: str) -> "ImportReport":
        progress = result.progress
        return cls(
            success=result.success,
            outcome=result.outcome,
            message=result.message,
            table_name=table_name,
            total=progress.total,
            processed=progress.processed,
            imported=progress.success,
            failed=progress.failed,
            errors=[ImportErrorView(row=error.row, message=error.message) for error in progress.errors],
            commit_policy=result.commit_policy,
            notice=result.notice,
            validation=ValidationReport.from_result(result.validation) if result.validation else None,
        )
