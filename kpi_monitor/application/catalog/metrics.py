"""Metric catalog: indicator definitions tracked on the overview."""

from kpi_monitor.domain.entities import MetricDefinition
from kpi_monitor.domain.enums import AggregationKind, DisplayFormat
from kpi_monitor.domain.errors import UnknownMetricError

# Currency indicators are summed over the year, percentages averaged.
METRIC_DEFINITIONS: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        id="margen-financiero",
        display_name="Margen Financiero",
        short_name="Margen Fin.",
        source_table="kpi_margen_financiero_resumen",
        value_field="monto_margen_financiero",
        target_field="meta",
        aggregation_kind=AggregationKind.SUM,
        higher_is_better=True,
        display_format=DisplayFormat.CURRENCY,
    ),
    MetricDefinition(
        id="rentabilidad-operativa",
        display_name="Rentabilidad Operativa",
        short_name="ROE/ROA",
        source_table="kpi_roe_roa_resumen",
        value_field="roe",
        target_field="meta_roe",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=True,
        display_format=DisplayFormat.PERCENTAGE,
    ),
    MetricDefinition(
        id="indice-renovacion",
        display_name="Índice de Renovación",
        short_name="Renovación",
        source_table="kpi_indice_renovacion_resumen",
        value_field="indice_renovacion",
        target_field="meta",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=True,
        display_format=DisplayFormat.PERCENTAGE,
    ),
    MetricDefinition(
        id="colocacion",
        display_name="Colocación",
        short_name="Colocación",
        source_table="kpi_colocacion_resumen_1",
        value_field="monto_colocacion",
        target_field="meta",
        aggregation_kind=AggregationKind.SUM,
        higher_is_better=True,
        display_format=DisplayFormat.CURRENCY,
    ),
    MetricDefinition(
        id="rentabilidad",
        display_name="Rentabilidad",
        short_name="EBITDA",
        source_table="kpi_rentabilidad_resumen_1",
        value_field="ebitda",
        target_field="meta",
        aggregation_kind=AggregationKind.SUM,
        higher_is_better=True,
        display_format=DisplayFormat.CURRENCY,
    ),
    MetricDefinition(
        id="rotacion-personal",
        display_name="Rotación de Personal",
        short_name="Rotación",
        source_table="kpi_rotacion_resumen_1",
        value_field="indice_rotacion",
        target_field="meta",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=False,
        display_format=DisplayFormat.PERCENTAGE,
    ),
    MetricDefinition(
        id="escalabilidad",
        display_name="Escalabilidad",
        short_name="Escalabilidad",
        source_table="kpi_escalabilidad_resumen_1",
        value_field="procesos_digitalizados",
        target_field="meta",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=True,
        display_format=DisplayFormat.PERCENTAGE,
    ),
    MetricDefinition(
        id="posicionamiento-marca",
        display_name="Posicionamiento de Marca",
        short_name="Marca",
        source_table="kpi_posicionamiento_resumen_1",
        value_field="recordacion_marca",
        target_field="meta",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=True,
        display_format=DisplayFormat.PERCENTAGE,
    ),
    MetricDefinition(
        id="innovacion",
        display_name="Innovación Incremental",
        short_name="Innovación",
        source_table="kpi_innovacion_resumen",
        value_field="ideas_registradas",
        target_field="meta_anual",
        aggregation_kind=AggregationKind.SUM,
        higher_is_better=True,
        display_format=DisplayFormat.COUNT,
    ),
    MetricDefinition(
        id="satisfaccion-cliente",
        display_name="Satisfacción Cliente",
        short_name="NPS",
        source_table="kpi_satisfaccion_resumen_1",
        value_field="nps",
        target_field="meta",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=True,
        display_format=DisplayFormat.COUNT,
    ),
    MetricDefinition(
        id="cumplimiento-regulatorio",
        display_name="Cumplimiento Regulatorio",
        short_name="Cumplimiento",
        source_table="kpi_cumplimiento_resumen_1",
        value_field="reportes_a_tiempo",
        target_field="meta",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=True,
        display_format=DisplayFormat.PERCENTAGE,
    ),
    MetricDefinition(
        id="gestion-riesgos",
        display_name="Gestión de Riesgos",
        short_name="Riesgos",
        source_table="kpi_gestion_riesgos_resumen",
        value_field="exposicion",
        target_field="meta_anual",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=False,
        display_format=DisplayFormat.PERCENTAGE,
    ),
    MetricDefinition(
        id="gobierno-corporativo",
        display_name="Gobierno Corporativo",
        short_name="Gobierno",
        source_table="kpi_gobierno_corporativo_resumen",
        value_field="acuerdos_cumplidos",
        target_field="meta_anual",
        aggregation_kind=AggregationKind.AVERAGE,
        higher_is_better=True,
        display_format=DisplayFormat.PERCENTAGE,
    ),
)

_METRICS_BY_ID: dict[str, MetricDefinition] = {m.id: m for m in METRIC_DEFINITIONS}


def get_metric(metric_id: str) -> MetricDefinition:
    """Get metric definition by id."""
    try:
        return _METRICS_BY_ID[metric_id]
    except KeyError:
        raise UnknownMetricError(f"Unknown metric: {metric_id}") from None
