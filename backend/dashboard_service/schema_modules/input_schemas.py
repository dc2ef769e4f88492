from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dashboard_service.logic_modules.coercion import coerce_number


def _as_record(data: Any) -> dict:
    # Anything that is not a mapping becomes an empty record rather than a validation error.
    return dict(data) if isinstance(data, Mapping) else {}


class LogEntry(BaseModel):
    """One completed coding session as returned by the logs source."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: Any = None
    duration: Any = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_record(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        return _as_record(data)


class ForecastRange(BaseModel):
    """Confidence range around a predicted value. Either bound may be missing."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    min: Any = None
    max: Any = None


class ForecastPoint(BaseModel):
    """Predicted coding hours for a single future date."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: Any = None
    hours: Any = None
    range: Optional[ForecastRange] = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_record(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        record = _as_record(data)
        if not isinstance(record.get("range"), (Mapping, ForecastRange)):
            record["range"] = None
        return record


class ForecastBundle(BaseModel):
    """
    Forecast source payload: the predicted points plus a single confidence scalar
    describing trust in the bundle as a whole.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    forecast: List[ForecastPoint] = Field(default_factory=list)
    confidence: Any = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_record(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        record = _as_record(data)
        if not isinstance(record.get("forecast"), (list, tuple)):
            record["forecast"] = []
        return record


class StatsSnapshot(BaseModel):
    """Aggregate metrics from the stats source. Invalid values collapse to zero."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    total_hours: float = Field(default=0.0, alias="totalHours")
    avg_per_day: float = Field(default=0.0, alias="avgPerDay")
    entries: float = 0.0

    @field_validator("total_hours", "avg_per_day", "entries", mode="before")
    @classmethod
    def _coerce_metric(cls, value: Any) -> float:
        return coerce_number(value)


class ReconcileRequest(BaseModel):
    """Caller-supplied source data reconciled without contacting any source."""

    stats: Optional[StatsSnapshot] = None
    forecast: Optional[ForecastBundle] = None
    logs: List[LogEntry] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce_record(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        record = dict(data)
        if not isinstance(record.get("stats"), (Mapping, StatsSnapshot)):
            record["stats"] = None
        if not isinstance(record.get("logs"), (list, tuple)):
            record["logs"] = []
        return record
