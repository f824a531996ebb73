"""Column catalog: labels, numeric semantics and sample values."""

import re
from collections.abc import Iterable

from kpi_monitor.domain.types import CellValue

YEAR_COLUMN = "anio"
MONTH_COLUMN = "mes"

# Human-readable labels written to template headers
COLUMN_LABELS: dict[str, str] = {
    "anio": "Año",
    "mes": "Mes",
    "entidad": "Entidad",
    "region": "Región",
    "plaza": "Plaza",
    "producto": "Producto",
    "concepto": "Concepto",
    "categoria": "Categoría",
    "valor": "Valor",
    "meta": "Meta",
    "monto": "Monto",
    "monto_colocacion": "Monto Colocación",
    "monto_margen_financiero": "Margen Financiero",
    "total": "Total",
    "renovaciones": "Renovaciones",
    "nuevas": "Nuevas",
    "indice_renovacion": "Índice Renovación",
    "capital_contable": "Capital Contable",
    "utilidad_operativa": "Utilidad Operativa",
    "utilidad_operativa_mensual": "Utilidad Operativa Mensual",
    "utilidad_neta": "Utilidad Neta",
    "activo_total": "Activo Total",
    "roe": "ROE",
    "roa": "ROA",
    "meta_roe": "Meta ROE",
    "meta_roa": "Meta ROA",
    "imor": "IMOR",
    "cartera_inicial": "Cartera Inicial",
    "cartera_final": "Cartera Final",
    "cartera_total": "Cartera Total",
    "cartera_vencida": "Cartera Vencida",
    "crecimiento": "Crecimiento",
    "ebitda": "EBITDA",
    "flujo_libre": "Flujo Libre",
    "flujo_operativo": "Flujo Operativo",
    "gasto_por_credito": "Gasto por Crédito",
    "puesto": "Puesto",
    "hc": "Headcount",
    "ingresos": "Ingresos",
    "bajas": "Bajas",
    "indice_rotacion": "Índice Rotación",
    "dias_sin_cubrir": "Días sin Cubrir",
    "ausentismo": "Ausentismo",
    "permanencia_12m": "Permanencia 12M",
    "procesos_digitalizados": "Procesos Digitalizados",
    "transacciones_automaticas": "Transacciones Automáticas",
    "cost_to_serve": "Cost to Serve",
    "recordacion_marca": "Recordación de Marca",
    "alcance_campanas": "Alcance Campañas",
    "nps": "NPS",
    "quejas_72h": "Quejas 72h",
    "clima_laboral": "Clima Laboral",
    "reportes_a_tiempo": "Reportes a Tiempo",
    "observaciones_cnbv_condusef": "Observaciones CNBV/CONDUSEF",
    "riesgos_activos": "Riesgos Activos",
    "riesgos_mitigados": "Riesgos Mitigados",
    "riesgos_nuevos": "Riesgos Nuevos",
    "exposicion": "Exposición",
    "incidentes_criticos": "Incidentes Críticos",
    "cumplimiento_planes": "Cumplimiento Planes",
    "reuniones_consejo": "Reuniones Consejo",
    "acuerdos_cumplidos": "Acuerdos Cumplidos",
    "actualizaciones_politica": "Actualizaciones Política",
    "comite": "Comité",
    "sesiones": "Sesiones",
    "acuerdos_por_area": "Acuerdos por Área",
    "kpis_reportados": "KPIs Reportados",
    "seguimiento_politicas": "Seguimiento Políticas",
    "proyecto": "Proyecto",
    "etapa": "Etapa",
    "indicador_implementacion": "Indicador Implementación",
    "riesgo": "Riesgo",
    "estimacion_ahorro": "Estimación Ahorro",
    "responsable": "Responsable",
    "tipo": "Tipo",
    "descripcion": "Descripción",
    "observaciones": "Observaciones",
    "acciones_clave": "Acciones Clave",
    "ideas_registradas": "Ideas Registradas",
    "proyectos_activos": "Proyectos Activos",
    "impacto_esperado": "Impacto Esperado",
    "aprendizajes": "Aprendizajes",
}

# Monetary, percentage and count columns
NUMERIC_COLUMNS: frozenset[str] = frozenset({
    "anio", "mes", "meta", "valor", "monto", "total", "renovaciones", "nuevas",
    "indice_renovacion", "capital_contable", "utilidad_operativa_mensual", "activo_total",
    "roe", "roa", "meta_roe", "meta_roa", "monto_colocacion", "monto_margen_financiero",
    "imor", "cartera_inicial", "cartera_final", "crecimiento", "cartera_total",
    "cartera_vencida", "ebitda", "flujo_libre", "flujo_operativo", "gasto_por_credito",
    "hc", "ingresos", "bajas", "indice_rotacion", "dias_sin_cubrir", "ausentismo",
    "permanencia_12m", "procesos_digitalizados", "transacciones_automaticas",
    "cost_to_serve", "recordacion_marca", "alcance_campanas", "nps", "quejas_72h",
    "clima_laboral", "reportes_a_tiempo", "observaciones_cnbv_condusef",
    "riesgos_activos", "riesgos_mitigados", "exposicion", "incidentes_criticos",
    "riesgos_nuevos", "cumplimiento_planes", "reuniones_consejo", "acuerdos_cumplidos",
    "actualizaciones_politica", "sesiones", "acuerdos_por_area", "kpis_reportados",
    "seguimiento_politicas", "indicador_implementacion", "estimacion_ahorro",
    "ideas_registradas", "proyectos_activos", "meta_anual",
})

# Numeric columns stored as integers
INTEGER_COLUMNS: frozenset[str] = frozenset({YEAR_COLUMN, MONTH_COLUMN})

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """Normalize a header cell: trimmed, lower-case, whitespace runs to ``_``."""
    return _WHITESPACE_RE.sub("_", header.strip().lower())


# Normalized label -> column id
_LABEL_TO_COLUMN: dict[str, str] = {normalize_header(label): column for column, label in COLUMN_LABELS.items()}


def column_for_header(header: str) -> str:
    """Map a header cell (label or raw id) back to its column id."""
    normalized = normalize_header(header)
    return _LABEL_TO_COLUMN.get(normalized, normalized)


def label_for_column(column: str) -> str:
    """Human-readable label of a column, or the id itself."""
    return COLUMN_LABELS.get(column, column)


_ROTATING_SAMPLES: dict[str, list[str]] = {
    "region": ["Centro", "Norte", "Sur", "Occidente", "Oriente"],
    "plaza": ["CDMX Norte", "CDMX Sur", "Guadalajara", "Monterrey", "Puebla"],
    "producto": ["Crédito Personal", "Crédito Grupal", "Microcrédito"],
    "puesto": ["Asesor de Crédito", "Gerente de Plaza", "Analista"],
    "comite": ["Comité de Riesgos", "Comité de Crédito", "Consejo"],
    "proyecto": ["Digitalización", "Automatización", "Optimización"],
    "etapa": ["Planeación", "Implementación", "Evaluación"],
    "riesgo": ["Bajo", "Medio", "Alto"],
}

_FIXED_SAMPLES: dict[str, CellValue] = {
    "entidad": "SOFOM Principal",
    "concepto": "Intereses",
    "categoria": "General",
    "responsable": "Juan Pérez",
    "tipo": "Operativo",
    "descripcion": "Descripción del registro",
    "observaciones": "Sin observaciones",
    "valor": 50000,
    "meta": 100,
    "monto": 100000,
    "monto_colocacion": 15000000,
    "monto_margen_financiero": 5000000,
    "total": 1000,
    "renovaciones": 325,
    "nuevas": 150,
    "indice_renovacion": 32.5,
    "capital_contable": 25000000,
    "utilidad_operativa_mensual": 2500000,
    "activo_total": 100000000,
    "roe": 15.5,
    "roa": 2.8,
    "imor": 3.0,
    "cartera_inicial": 48000000,
    "cartera_final": 52000000,
    "cartera_total": 50000000,
    "cartera_vencida": 1500000,
    "crecimiento": 10,
    "ebitda": 8500000,
    "flujo_libre": 3200000,
    "flujo_operativo": 5800000,
    "gasto_por_credito": 1250,
    "hc": 50,
    "ingresos": 8,
    "bajas": 3,
    "indice_rotacion": 6.0,
    "dias_sin_cubrir": 15,
    "ausentismo": 2.3,
    "permanencia_12m": 85,
    "procesos_digitalizados": 68,
    "transacciones_automaticas": 75,
    "cost_to_serve": 125,
    "recordacion_marca": 18,
    "alcance_campanas": 500000,
    "nps": 45,
    "quejas_72h": 92,
    "clima_laboral": 78,
    "reportes_a_tiempo": 98,
    "observaciones_cnbv_condusef": 0,
    "riesgos_activos": 12,
    "riesgos_mitigados": 8,
    "riesgos_nuevos": 2,
    "exposicion": 15,
    "incidentes_criticos": 1,
    "cumplimiento_planes": 90,
    "reuniones_consejo": 2,
    "acuerdos_cumplidos": 95,
    "actualizaciones_politica": 3,
    "sesiones": 4,
    "acuerdos_por_area": 12,
    "kpis_reportados": 8,
    "seguimiento_politicas": 95,
    "indicador_implementacion": 75,
    "estimacion_ahorro": 500000,
}


def _sample_value(column: str, index: int, year: int, month: int) -> CellValue:
    if column == YEAR_COLUMN:
        return year
    if column == MONTH_COLUMN:
        return max(1, month - index)
    if column in _ROTATING_SAMPLES:
        options = _ROTATING_SAMPLES[column]
        return options[index % len(options)]
    return _FIXED_SAMPLES.get(column, "")


def sample_rows(
    columns: Iterable[str],
    count: int,
    year: int,
    month: int,
) -> list[dict[str, CellValue]]:
    """Build ``count`` example rows for a template, walking months backwards."""
    columns = list(columns)
    return [{column: _sample_value(column, i, year, month) for column in columns} for i in range(count)]
