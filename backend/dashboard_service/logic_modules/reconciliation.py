from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from dashboard_service.logic_modules.merging import merge_series
from dashboard_service.logic_modules.normalization import normalize_forecast, normalize_history
from dashboard_service.logic_modules.summarization import summarize_forecast
from dashboard_service.schema_modules.input_schemas import ForecastBundle, LogEntry
from dashboard_service.schema_modules.response_schemas import ForecastSummary, ReconciledSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciliation:
    series: ReconciledSeries
    summary: ForecastSummary


def reconcile(logs: Sequence[LogEntry], bundle: Optional[ForecastBundle]) -> Reconciliation:
    """
    Normalise history and forecast data into one chart series and derive the
    next-forecast summary. Pure: identical inputs give identical output.
    """

    history_points = normalize_history(logs)
    forecast_points = normalize_forecast(bundle.forecast if bundle else ())
    series = merge_series(history_points, forecast_points)
    summary = summarize_forecast(bundle)

    logger.info(
        "reconciliation.completed",
        extra={
            "history_points": len(history_points),
            "forecast_points": len(forecast_points),
            "has_forecast": series.has_forecast,
        },
    )
    return Reconciliation(series=series, summary=summary)
