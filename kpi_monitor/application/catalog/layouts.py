"""Import layouts for every per-indicator detail table."""

from kpi_monitor.domain.entities import ImportLayout
from kpi_monitor.domain.errors import UnknownLayoutError


def _layout(
    metric_id: str,
    layout_id: str,
    title: str,
    description: str,
    table_name: str,
    columns: list[str],
) -> ImportLayout:
    return ImportLayout(
        table_name=table_name,
        columns=tuple(columns),
        metric_id=metric_id,
        layout_id=layout_id,
        title=title,
        description=description,
    )


IMPORT_LAYOUTS: tuple[ImportLayout, ...] = (
    _layout(
        "margen-financiero", "detalle-operativo", "Detalle por Entidad/Plaza/Producto",
        "Desagregación operativa del margen",
        "kpi_margen_financiero_detalle",
        ["anio", "mes", "entidad", "region", "plaza", "producto", "concepto", "valor", "categoria", "meta"],
    ),
    _layout(
        "indice-renovacion", "detalle-plaza", "Detalle por Plaza",
        "Renovaciones y nuevas colocaciones por plaza",
        "kpi_indice_renovacion_detalle",
        ["anio", "mes", "plaza", "total", "renovaciones", "nuevas", "indice_renovacion", "meta"],
    ),
    _layout(
        "rentabilidad-operativa", "detalle-entidad", "Detalle por Entidad",
        "Capital, utilidad y activo por entidad",
        "kpi_roe_roa_detalle",
        ["anio", "mes", "entidad", "capital_contable", "utilidad_operativa_mensual", "activo_total"],
    ),
    _layout(
        "colocacion", "detalle-colocacion", "1. Detalle Colocación",
        "Monto colocado por plaza/producto",
        "kpi_colocacion_detalle_1",
        ["anio", "mes", "entidad", "plaza", "producto", "monto_colocacion", "meta"],
    ),
    _layout(
        "colocacion", "detalle-imor", "2. Detalle IMOR",
        "Morosidad por plaza/producto",
        "kpi_colocacion_detalle_2",
        ["anio", "mes", "entidad", "plaza", "producto", "cartera_total", "cartera_vencida", "imor", "meta"],
    ),
    _layout(
        "colocacion", "detalle-crecimiento", "3. Detalle Crecimiento",
        "Crecimiento de cartera por plaza/producto",
        "kpi_colocacion_detalle_3",
        ["anio", "mes", "entidad", "plaza", "producto", "cartera_inicial", "cartera_final", "crecimiento", "meta"],
    ),
    _layout(
        "rentabilidad", "detalle-ebitda", "1. Detalle EBITDA",
        "EBITDA por entidad/plaza",
        "kpi_rentabilidad_detalle_1",
        ["anio", "mes", "entidad", "plaza", "ebitda", "meta"],
    ),
    _layout(
        "rentabilidad", "detalle-flujo-libre", "2. Detalle Flujo Libre",
        "Flujo libre por entidad/plaza",
        "kpi_rentabilidad_detalle_2",
        ["anio", "mes", "entidad", "plaza", "flujo_libre", "meta"],
    ),
    _layout(
        "rentabilidad", "detalle-flujo-operativo", "3. Detalle Flujo Operativo",
        "Flujo operativo por entidad/plaza",
        "kpi_rentabilidad_detalle_3",
        ["anio", "mes", "entidad", "plaza", "flujo_operativo", "meta"],
    ),
    _layout(
        "rentabilidad", "detalle-gasto-credito", "4. Detalle Gasto por Crédito",
        "Gasto por crédito por concepto",
        "kpi_rentabilidad_detalle_4",
        ["anio", "mes", "entidad", "plaza", "producto", "concepto", "monto", "meta"],
    ),
    _layout(
        "rotacion-personal", "detalle-rotacion", "1. Detalle Rotación",
        "Headcount, ingresos y bajas por puesto",
        "kpi_rotacion_detalle_1",
        ["anio", "mes", "region", "plaza", "puesto", "hc", "ingresos", "bajas", "indice_rotacion", "meta"],
    ),
    _layout(
        "rotacion-personal", "detalle-dias-sin-cubrir", "2. Detalle Días sin Cubrir",
        "Días de vacante sin cubrir por plaza",
        "kpi_rotacion_detalle_2",
        ["anio", "mes", "region", "plaza", "dias_sin_cubrir", "meta"],
    ),
    _layout(
        "rotacion-personal", "detalle-ausentismo", "3. Detalle Ausentismo",
        "Ausentismo por plaza",
        "kpi_rotacion_detalle_3",
        ["anio", "mes", "region", "plaza", "ausentismo", "meta"],
    ),
    _layout(
        "rotacion-personal", "detalle-permanencia", "4. Detalle Permanencia",
        "Permanencia a 12 meses por plaza",
        "kpi_rotacion_detalle_4",
        ["anio", "mes", "region", "plaza", "permanencia_12m", "meta"],
    ),
    _layout(
        "escalabilidad", "detalle-procesos", "1. Detalle Procesos",
        "Procesos digitalizados por entidad/plaza",
        "kpi_escalabilidad_detalle_1",
        ["anio", "mes", "entidad", "plaza", "procesos_digitalizados", "meta"],
    ),
    _layout(
        "escalabilidad", "detalle-transacciones", "2. Detalle Transacciones",
        "Transacciones automáticas por entidad/plaza",
        "kpi_escalabilidad_detalle_2",
        ["anio", "mes", "entidad", "plaza", "transacciones_automaticas", "meta"],
    ),
    _layout(
        "escalabilidad", "detalle-cost-to-serve", "3. Detalle Cost to Serve",
        "Costo de servicio por entidad/plaza",
        "kpi_escalabilidad_detalle_3",
        ["anio", "mes", "entidad", "plaza", "cost_to_serve", "meta"],
    ),
    _layout(
        "posicionamiento-marca", "detalle-recordacion", "1. Detalle Recordación",
        "Recordación de marca por región/plaza",
        "kpi_posicionamiento_detalle_1",
        ["anio", "mes", "region", "plaza", "recordacion_marca", "meta"],
    ),
    _layout(
        "posicionamiento-marca", "detalle-alcance", "2. Detalle Alcance",
        "Alcance de campañas por región/plaza",
        "kpi_posicionamiento_detalle_2",
        ["anio", "mes", "region", "plaza", "alcance_campanas", "meta"],
    ),
    _layout(
        "posicionamiento-marca", "detalle-nps", "3. Detalle NPS",
        "NPS por región/plaza",
        "kpi_posicionamiento_detalle_3",
        ["anio", "mes", "region", "plaza", "nps", "meta"],
    ),
    _layout(
        "innovacion", "detalle-proyectos", "Detalle de Proyectos",
        "Proyectos de innovación y su avance",
        "kpi_innovacion_detalle",
        ["anio", "mes", "proyecto", "etapa", "indicador_implementacion", "riesgo", "estimacion_ahorro", "responsable", "meta"],
    ),
    _layout(
        "satisfaccion-cliente", "detalle-nps", "1. Detalle NPS",
        "NPS por región/plaza/categoría",
        "kpi_satisfaccion_detalle_1",
        ["anio", "mes", "region", "plaza", "categoria", "nps", "meta"],
    ),
    _layout(
        "satisfaccion-cliente", "detalle-quejas", "2. Detalle Quejas",
        "Quejas atendidas en 72h por región/plaza",
        "kpi_satisfaccion_detalle_2",
        ["anio", "mes", "region", "plaza", "quejas_72h", "meta"],
    ),
    _layout(
        "satisfaccion-cliente", "detalle-clima", "3. Detalle Clima Laboral",
        "Clima laboral por región/plaza",
        "kpi_satisfaccion_detalle_3",
        ["anio", "mes", "region", "plaza", "clima_laboral", "meta"],
    ),
    _layout(
        "gestion-riesgos", "detalle-riesgos", "Detalle de Riesgos",
        "Incidentes y riesgos por tipo",
        "kpi_gestion_riesgos_detalle",
        ["anio", "mes", "tipo", "descripcion", "incidentes_criticos", "riesgos_nuevos", "riesgos_mitigados", "cumplimiento_planes", "meta"],
    ),
    _layout(
        "gobierno-corporativo", "detalle-comites", "Detalle de Comités",
        "Sesiones y acuerdos por comité",
        "kpi_gobierno_corporativo_detalle",
        ["anio", "mes", "comite", "sesiones", "acuerdos_por_area", "kpis_reportados", "seguimiento_politicas", "meta"],
    ),
)

_LAYOUTS_BY_TABLE: dict[str, ImportLayout] = {layout.table_name: layout for layout in IMPORT_LAYOUTS}


def get_layout(table_name: str) -> ImportLayout:
    """Get import layout by destination table name."""
    try:
        return _LAYOUTS_BY_TABLE[table_name]
    except KeyError:
        raise UnknownLayoutError(f"No import layout for table: {table_name}") from None


def layouts_for_metric(metric_id: str) -> list[ImportLayout]:
    """Get all import layouts of one indicator."""
    return [layout for layout in IMPORT_LAYOUTS if layout.metric_id == metric_id]
