from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dashboard_service.schema_modules.input_schemas import (  # noqa: E402
    ForecastBundle,
    LogEntry,
    StatsSnapshot,
)


class FakeSources:
    """In-memory DashboardSources. Any source named in `errors` raises instead of returning."""

    def __init__(
        self,
        *,
        stats: Optional[StatsSnapshot] = None,
        forecast: Optional[ForecastBundle] = None,
        logs: Optional[List[LogEntry]] = None,
        errors: Optional[Dict[str, Exception]] = None,
    ) -> None:
        self.stats = stats or StatsSnapshot()
        self.forecast = forecast
        self.logs = logs or []
        self.errors = errors or {}
        self.calls: List[str] = []
        self.closed = False

    async def fetch_stats(self) -> StatsSnapshot:
        return self._resolve("stats", self.stats)

    async def fetch_forecast(self) -> Optional[ForecastBundle]:
        return self._resolve("forecast", self.forecast)

    async def fetch_logs(self) -> List[LogEntry]:
        return self._resolve("logs", self.logs)

    async def aclose(self) -> None:
        self.closed = True

    def _resolve(self, name: str, value: Any) -> Any:
        self.calls.append(name)
        if name in self.errors:
            raise self.errors[name]
        return value


class GatedSources(FakeSources):
    """Each stats fetch blocks on its own event so tests can control settle order."""

    def __init__(self) -> None:
        super().__init__()
        self.gates: List[asyncio.Event] = []

    async def fetch_stats(self) -> StatsSnapshot:
        gate = asyncio.Event()
        self.gates.append(gate)
        call_number = len(self.gates)
        await gate.wait()
        return StatsSnapshot(entries=call_number)


@pytest.fixture
def fake_sources() -> type[FakeSources]:
    return FakeSources


@pytest.fixture
def gated_sources() -> GatedSources:
    return GatedSources()


@pytest.fixture
def scenario_logs() -> List[LogEntry]:
    return [LogEntry.model_validate({"date": "2024-01-01", "duration": "2"})]


@pytest.fixture
def scenario_bundle() -> ForecastBundle:
    return ForecastBundle.model_validate(
        {
            "forecast": [{"date": "2024-01-02", "hours": 3, "range": {"min": 2, "max": 4}}],
            "confidence": 0.8,
        }
    )
