from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from numbers import Real
from typing import Any

import numpy as np
import pandas as pd

RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


def coerce_optional_number(value: Any) -> float | None:
    """
    Coerce a loosely typed source value into a finite float.

    Returns None for missing values, booleans, non-scalars, unparseable strings
    and non-finite results so callers can pick their own fallback.
    """

    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    elif not isinstance(value, (Real, Decimal, np.number)):
        return None

    parsed = pd.to_numeric(value, errors="coerce")
    try:
        result = float(parsed)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(result):
        return None
    return result


def coerce_number(value: Any, default: float = 0.0) -> float:
    parsed = coerce_optional_number(value)
    return default if parsed is None else parsed


def parse_calendar_date(value: Any, *, wall_clock: bool = False) -> pd.Timestamp | None:
    """
    Parse an ISO 8601 date into a naive timestamp, or None.

    Offset-aware input is converted to UTC so it orders correctly against plain
    dates; with `wall_clock` the local date and time are kept as written instead.
    Relative words such as "now" are rejected so results never depend on the clock.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value or value.lower() in RELATIVE_DATE_WORDS:
            return None
    elif not isinstance(value, (datetime, date, np.datetime64)):
        return None

    try:
        timestamp = pd.to_datetime(value, format="ISO8601") if isinstance(value, str) else pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(timestamp):
        return None
    if timestamp.tzinfo is not None:
        if not wall_clock:
            timestamp = timestamp.tz_convert("UTC")
        timestamp = timestamp.tz_localize(None)
    return timestamp
