"""Display formatting of indicator values."""

from kpi_monitor.domain.enums import DisplayFormat


def format_metric_value(value: float | None, display_format: DisplayFormat) -> str:
    """Format a value compactly for cards and navigation."""
    if value is None:
        return "-"

    if display_format is DisplayFormat.CURRENCY:
        if abs(value) >= 1_000_000:
            return f"${value / 1_000_000:.1f}M"
        if abs(value) >= 1_000:
            return f"${value / 1_000:.0f}K"
        return f"${value:,.0f}"

    if display_format is DisplayFormat.PERCENTAGE:
        return f"{value:.1f}%"

    return f"{value:,.0f}"
