from __future__ import annotations

import math
from typing import Any, Optional

from dashboard_service.logic_modules.coercion import coerce_optional_number
from dashboard_service.logic_modules.merging import chronological_key
from dashboard_service.schema_modules.input_schemas import ForecastBundle
from dashboard_service.schema_modules.response_schemas import ForecastSummary


def summarize_forecast(bundle: Optional[ForecastBundle]) -> ForecastSummary:
    """
    Pick the earliest-dated forecast point and express the bundle confidence in percent.

    The bundle is never modified; ordering works on a sorted copy. Points sharing
    a date keep their original order, so the first of them is selected.
    """

    if bundle is None or not bundle.forecast:
        return ForecastSummary()

    ordered = sorted(bundle.forecast, key=lambda point: chronological_key(point.date))
    return ForecastSummary(point=ordered[0], confidence_percent=confidence_percent(bundle.confidence))


def confidence_percent(confidence: Any) -> Optional[int]:
    """Round confidence * 100 half-up. Unknown confidence stays None, distinct from 0."""

    value = coerce_optional_number(confidence)
    if value is None:
        return None
    scaled = value * 100
    if not math.isfinite(scaled):
        return None
    return int(math.floor(scaled + 0.5))
