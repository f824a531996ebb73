"""Command line interface."""

import asyncio
import signal
from pathlib import Path

import click
import structlog
from pydantic import ValidationError

from kpi_monitor.application.catalog.layouts import IMPORT_LAYOUTS, get_layout, layouts_for_metric
from kpi_monitor.application.catalog.metrics import METRIC_DEFINITIONS
from kpi_monitor.application.dto.imports import ImportReport, ValidationReport
from kpi_monitor.application.dto.status import MetricStatusView, StatusOverview
from kpi_monitor.application.state.status_cache import MetricsStatusCache
from kpi_monitor.application.use_cases.export_template import run as export_template
from kpi_monitor.domain.entities import ImportLayout, ImportProgress
from kpi_monitor.domain.errors import DomainError
from kpi_monitor.infrastructure.config.settings import Settings
from kpi_monitor.infrastructure.io.formats import template_writer_for
from kpi_monitor.infrastructure.observability.logging import configure_logging
from kpi_monitor.infrastructure.runtime import container
from kpi_monitor.infrastructure.runtime.clock import SystemClock
from kpi_monitor.infrastructure.runtime.health import start_metrics_server
from kpi_monitor.interfaces.runners.import_runner import validate_file

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")

TABLE_HELP = "Destination table of the import layout (see `layouts`)."

logger = structlog.get_logger()


def _settings() -> Settings:
    try:
        return container.load_settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


def _layout(table_name: str) -> ImportLayout:
    try:
        return get_layout(table_name)
    except DomainError as e:
        raise click.BadParameter(str(e), param_hint="--table") from e


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="LOG_LEVEL",
    default="info",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_format: str) -> None:
    """Monitor indicator compliance and import indicator data."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    ctx.ensure_object(dict)
    logger.debug("cli_initialized", log_level=log_level.lower(), log_format=log_format.lower())


@cli.command("status")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the overview as JSON.")
def status(as_json: bool) -> None:
    """Load and print the current-year status of every indicator."""
    cache = container.build_status_cache(_settings())
    snapshot = asyncio.run(cache.load())

    if as_json:
        overview = StatusOverview.from_snapshot(
            snapshot,
            list(cache.metrics),
            cache.clock.format_iso(snapshot.refreshed_at),
        )
        click.echo(overview.model_dump_json(by_alias=True, indent=2))
        return

    click.echo(f"Indicators {snapshot.year}")
    for definition in cache.metrics:
        view = MetricStatusView.from_status(definition, snapshot.statuses.get(definition.id))
        click.echo(
            f"{view.short_name:<15} {view.status.value:<7} "
            f"{view.actual_display:>10} / {view.meta_display:<10} "
            f"{view.progress_percent:6.1f}%  ({view.months_with_data} months)"
        )


@cli.command("watch")
@click.option(
    "--interval",
    type=click.IntRange(min=5),
    default=300,
    show_default=True,
    help="Seconds between refreshes.",
)
def watch(interval: int) -> None:
    """Refresh statuses periodically, exposing Prometheus metrics if enabled."""
    settings = _settings()
    start_metrics_server(settings)
    cache = container.build_status_cache(settings)
    asyncio.run(_watch_loop(cache, interval))


async def _watch_loop(cache: MetricsStatusCache, interval: int) -> None:
    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, shutdown_event.set)

    logger.info("watch_started", interval=interval, metric_count=len(cache.metrics))
    while not shutdown_event.is_set():
        snapshot = await cache.refresh()
        counts: dict[str, int] = {}
        for metric_status in snapshot.statuses.values():
            counts[metric_status.status.value] = counts.get(metric_status.status.value, 0) + 1
        logger.info("watch_refreshed", year=snapshot.year, **counts)

        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            continue

    logger.info("watch_stopped")


@cli.command("validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--table", "table_name", required=True, help=TABLE_HELP)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON.")
@click.pass_context
def validate(ctx: click.Context, path: Path, table_name: str, as_json: bool) -> None:
    """Check a file against an import layout without writing anything."""
    layout = _layout(table_name)
    try:
        result = validate_file(path, layout)
    except DomainError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(ValidationReport.from_result(result).model_dump_json(by_alias=True, indent=2))
    else:
        click.echo(f"{path.name}: {'valid' if result.valid else 'invalid'} ({result.row_count} rows)")
        for error in result.errors:
            click.echo(f"  error: {error}")
        for warning in result.warnings:
            click.echo(f"  warning: {warning}")

    if not result.valid:
        ctx.exit(1)


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--table", "table_name", required=True, help=TABLE_HELP)
@click.option("--owner", "owner_id", default=None, help="Owner id stamped on every record.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON.")
@click.pass_context
def import_file(
    ctx: click.Context,
    path: Path,
    table_name: str,
    owner_id: str | None,
    as_json: bool,
) -> None:
    """Validate a file and write its rows to the layout's table."""
    layout = _layout(table_name)
    settings = _settings()
    owner_id = owner_id or settings.import_owner_id
    if not owner_id:
        raise click.UsageError("An owner id is required; pass --owner or set IMPORT_OWNER_ID.")

    runner = container.build_import_runner(settings, owner_id)

    def on_progress(progress: ImportProgress) -> None:
        if not as_json:
            click.echo(f"  {progress.processed}/{progress.total} processed", err=True)

    try:
        result = asyncio.run(runner.import_file(path, layout, on_progress=on_progress))
    except DomainError as e:
        raise click.ClickException(str(e)) from e

    report = ImportReport.from_result(result, layout.table_name)
    if as_json:
        click.echo(report.model_dump_json(by_alias=True, indent=2))
    else:
        click.echo(report.message)
        for error in report.errors:
            click.echo(f"  row {error.row}: {error.message}")
        if report.notice:
            click.echo(report.notice)

    if not result.success:
        ctx.exit(1)


@cli.command("export-template")
@click.argument("table_name")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--samples",
    type=click.IntRange(min=0, max=12),
    default=0,
    show_default=True,
    help="Number of example rows to include.",
)
def export_template_command(table_name: str, output: Path, samples: int) -> None:
    """Write an .xlsx template or .csv layout for TABLE_NAME to OUTPUT."""
    try:
        layout = get_layout(table_name)
        writer = template_writer_for(output)
    except DomainError as e:
        raise click.ClickException(str(e)) from e

    written = asyncio.run(export_template(layout, writer, output, SystemClock(), sample_count=samples))
    click.echo(f"Wrote template to {written}")


@cli.command("layouts")
@click.option("--metric", "metric_id", default=None, help="Only layouts of this indicator.")
def layouts(metric_id: str | None) -> None:
    """List importable tables and their columns."""
    selected = layouts_for_metric(metric_id) if metric_id else list(IMPORT_LAYOUTS)
    if not selected:
        known = ", ".join(definition.id for definition in METRIC_DEFINITIONS)
        raise click.BadParameter(f"No layouts for {metric_id}; known indicators: {known}", param_hint="--metric")

    for layout in selected:
        click.echo(f"{layout.table_name}  [{layout.metric_id}] {layout.title}")
        click.echo(f"    {', '.join(layout.columns)}")
