from __future__ import annotations

from typing import Any, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .input_schemas import ForecastPoint, StatsSnapshot

PointKind = Literal["history", "forecast"]


class ChartPoint(BaseModel):
    """Canonical chart sample. hours, min and max are always finite."""

    model_config = ConfigDict(frozen=True)

    date: str
    hours: float
    min: float
    max: float
    kind: PointKind


class ReconciledSeries(BaseModel):
    """History and forecast points in one chronological sequence."""

    model_config = ConfigDict(frozen=True)

    points: Tuple[ChartPoint, ...] = ()
    unparseable_dates: Tuple[str, ...] = Field(
        default=(), description="Dates that could not be parsed; their points sort after all dated points."
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_forecast(self) -> bool:
        return any(point.kind == "forecast" for point in self.points)


class ForecastSummary(BaseModel):
    """The next upcoming forecast point and the bundle confidence as a percentage."""

    model_config = ConfigDict(frozen=True)

    point: Optional[ForecastPoint] = None
    confidence_percent: Optional[int] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def range_min(self) -> Any:
        if self.point is None:
            return None
        bound = self.point.range.min if self.point.range else None
        return self.point.hours if bound is None else bound

    @computed_field  # type: ignore[prop-decorator]
    @property
    def range_max(self) -> Any:
        if self.point is None:
            return None
        bound = self.point.range.max if self.point.range else None
        return self.point.hours if bound is None else bound


class DashboardView(BaseModel):
    """Result of one dashboard load. Replaced wholesale, never mutated."""

    model_config = ConfigDict(frozen=True)

    request_seq: int = Field(ge=0)
    stats: StatsSnapshot = Field(default_factory=StatsSnapshot)
    series: ReconciledSeries = Field(default_factory=ReconciledSeries)
    summary: ForecastSummary = Field(default_factory=ForecastSummary)
    source_failures: Tuple[str, ...] = ()


class MetricCard(BaseModel):
    title: str
    value: str
    subtitle: str


class ForecastCard(BaseModel):
    title: str = "Next forecast"
    value: Optional[str] = None
    subtitle: Optional[str] = None
    confidence_note: Optional[str] = None
    empty_message: Optional[str] = None


class ChartBlock(BaseModel):
    title: str = "History & Forecast"
    show_forecast_band: bool
    empty_message: Optional[str] = None


class DashboardPresentation(BaseModel):
    """Display strings for the metric cards and chart block."""

    metrics: List[MetricCard]
    next_forecast: ForecastCard
    chart: ChartBlock


class DashboardResponse(BaseModel):
    """Top-level response returned by the dashboard routes."""

    view: DashboardView
    presentation: DashboardPresentation
