from __future__ import annotations

from dashboard_service.logic_modules.formatting import format_date, format_number
from dashboard_service.schema_modules.response_schemas import (
    ChartBlock,
    DashboardPresentation,
    DashboardView,
    ForecastCard,
    ForecastSummary,
    MetricCard,
)

NO_DATA_MESSAGE = "No data available. Start logging your coding hours!"
NO_FORECAST_MESSAGE = "No forecast available"
UNKNOWN_CONFIDENCE = "—"


def build_presentation(view: DashboardView) -> DashboardPresentation:
    stats = view.stats
    metrics = [
        MetricCard(title="Total hours", value=format_number(stats.total_hours), subtitle="All time coding hours"),
        MetricCard(title="Average / day", value=format_number(stats.avg_per_day, 1), subtitle="Daily average hours"),
        MetricCard(title="Entries", value=format_number(stats.entries), subtitle="Total log entries"),
    ]

    chart = ChartBlock(
        show_forecast_band=view.series.has_forecast,
        empty_message=None if view.series.points else NO_DATA_MESSAGE,
    )

    return DashboardPresentation(
        metrics=metrics,
        next_forecast=build_forecast_card(view.summary),
        chart=chart,
    )


def build_forecast_card(summary: ForecastSummary) -> ForecastCard:
    point = summary.point
    if point is None:
        return ForecastCard(empty_message=NO_FORECAST_MESSAGE)

    band = f"{format_number(summary.range_min, 1)}h – {format_number(summary.range_max, 1)}h"
    confidence = (
        f"{summary.confidence_percent}%" if summary.confidence_percent is not None else UNKNOWN_CONFIDENCE
    )
    return ForecastCard(
        value=f"{format_number(point.hours, 1)}h",
        subtitle=f"{format_date(point.date)} • {band}",
        confidence_note=f"Model confidence: {confidence}",
    )
