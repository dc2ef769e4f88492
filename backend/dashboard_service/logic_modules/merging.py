from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import pandas as pd

from dashboard_service.logic_modules.coercion import parse_calendar_date
from dashboard_service.schema_modules.response_schemas import ChartPoint, ReconciledSeries

logger = logging.getLogger(__name__)


def chronological_key(value: object) -> Tuple[bool, pd.Timestamp]:
    """
    Sort key placing parseable dates in ascending order and unparseable ones last.

    Used with a stable sort, points sharing a key keep their relative input order.
    """

    timestamp = parse_calendar_date(value)
    if timestamp is None:
        return True, pd.Timestamp.min
    return False, timestamp


def merge_series(
    history_points: Sequence[ChartPoint], forecast_points: Sequence[ChartPoint]
) -> ReconciledSeries:
    """
    Concatenate history and forecast points and order them by date.

    No point is dropped or deduplicated: the result always holds
    len(history_points) + len(forecast_points) points.
    """

    combined: List[ChartPoint] = [*history_points, *forecast_points]
    keyed = [(chronological_key(point.date), point) for point in combined]
    keyed.sort(key=lambda item: item[0])

    unparseable = tuple(point.date for (missing, _), point in keyed if missing)
    if unparseable:
        logger.warning(
            "reconciliation.unparseable_dates",
            extra={"count": len(unparseable), "dates": list(unparseable)},
        )

    return ReconciledSeries(points=tuple(point for _, point in keyed), unparseable_dates=unparseable)
