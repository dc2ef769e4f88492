from __future__ import annotations

import logging
from typing import Any, Iterable, Tuple

from dashboard_service.logic_modules.coercion import coerce_number, coerce_optional_number
from dashboard_service.schema_modules.input_schemas import ForecastPoint, LogEntry
from dashboard_service.schema_modules.response_schemas import ChartPoint

logger = logging.getLogger(__name__)


def normalize_history(entries: Iterable[LogEntry]) -> Tuple[ChartPoint, ...]:
    """
    Convert log entries into history chart points.

    Every entry yields exactly one point, in input order. A duration that cannot
    be read as a number becomes 0 rather than removing the entry.
    """

    points = []
    for entry in entries:
        hours = coerce_number(entry.duration)
        points.append(
            ChartPoint(date=_date_label(entry.date), hours=hours, min=hours, max=hours, kind="history")
        )
    return tuple(points)


def normalize_forecast(forecast: Iterable[ForecastPoint]) -> Tuple[ChartPoint, ...]:
    """
    Convert forecast points into chart points carrying the min/max band.

    Each bound falls back to the point's hours independently when missing or invalid.
    Bounds are passed through as given, including min > max.
    """

    points = []
    for item in forecast:
        hours = coerce_number(item.hours)
        bounds = item.range
        low = _bound(bounds.min if bounds else None, hours)
        high = _bound(bounds.max if bounds else None, hours)
        if low > high:
            logger.debug(
                "normalization.forecast.inverted_range",
                extra={"date": item.date, "min": low, "max": high},
            )
        points.append(
            ChartPoint(date=_date_label(item.date), hours=hours, min=low, max=high, kind="forecast")
        )
    return tuple(points)


def _bound(value: Any, fallback: float) -> float:
    parsed = coerce_optional_number(value)
    return fallback if parsed is None else parsed


def _date_label(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
