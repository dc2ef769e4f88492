from __future__ import annotations

import asyncio
import itertools
import logging
import threading
from typing import Any, List, Optional, Tuple

from dashboard_service.api_modules.sources import DashboardSources, HttpDashboardSources, Source
from dashboard_service.logic_modules.reconciliation import reconcile
from dashboard_service.schema_modules.input_schemas import ForecastBundle, LogEntry, StatsSnapshot
from dashboard_service.schema_modules.response_schemas import DashboardView

logger = logging.getLogger(__name__)

SOURCE_NAMES = ("stats", "forecast", "logs")

FetchedSources = Tuple[
    Source[StatsSnapshot],
    Source[Optional[ForecastBundle]],
    Source[List[LogEntry]],
]


async def fetch_all(sources: DashboardSources) -> FetchedSources:
    """
    Issue the three source fetches concurrently and wait until all have settled.

    A failing source never aborts the others; its error is kept in the returned Source.
    """

    results = await asyncio.gather(
        sources.fetch_stats(),
        sources.fetch_forecast(),
        sources.fetch_logs(),
        return_exceptions=True,
    )
    stats, forecast, logs = (_settle(name, result) for name, result in zip(SOURCE_NAMES, results))
    return stats, forecast, logs


def _settle(name: str, result: Any) -> Source[Any]:
    if isinstance(result, BaseException):
        if not isinstance(result, Exception):
            raise result
        logger.warning(
            "dashboard.source.failed",
            extra={"source": name, "error": str(result), "error_type": type(result).__name__},
        )
        return Source.missing(result)
    return Source.ok(result)


def build_view(request_seq: int, fetched: FetchedSources) -> DashboardView:
    """Reconcile whatever the sources produced, substituting defaults for failed ones."""

    stats, forecast, logs = fetched
    failures = tuple(name for name, source in zip(SOURCE_NAMES, fetched) if not source.is_ok)

    result = reconcile(logs.value_or([]), forecast.value_or(None))
    return DashboardView(
        request_seq=request_seq,
        stats=stats.value_or(StatsSnapshot()),
        series=result.series,
        summary=result.summary,
        source_failures=failures,
    )


class DashboardLoader:
    """
    Loads dashboard views and publishes only the most recently issued one.

    Each load is tagged with a sequence number when it starts. A load that settles
    after a newer one was issued is returned to its caller but never becomes
    `current`, so a slow stale response cannot overwrite fresher data.
    """

    _instance: "DashboardLoader | None" = None
    _lock = threading.Lock()

    def __init__(self, sources: DashboardSources) -> None:
        self._sources = sources
        self._sequence = itertools.count(1)
        self._latest_issued = 0
        self._current: DashboardView | None = None

    @classmethod
    def instance(cls) -> "DashboardLoader":
        with cls._lock:
            if cls._instance is None:
                cls._instance = DashboardLoader(HttpDashboardSources())
        return cls._instance

    @classmethod
    async def shutdown(cls) -> None:
        """Close and forget the shared instance, if one was created."""

        with cls._lock:
            loader, cls._instance = cls._instance, None
        if loader is not None:
            await loader.aclose()

    async def aclose(self) -> None:
        close = getattr(self._sources, "aclose", None)
        if close is not None:
            await close()
            logger.info("dashboard.loader.closed")

    @property
    def current(self) -> DashboardView | None:
        return self._current

    async def load(self) -> DashboardView:
        request_seq = next(self._sequence)
        self._latest_issued = request_seq
        logger.info("dashboard.load.start", extra={"request_seq": request_seq})

        fetched = await fetch_all(self._sources)
        view = build_view(request_seq, fetched)

        if self.publish(view):
            logger.info(
                "dashboard.load.completed",
                extra={
                    "request_seq": request_seq,
                    "points": len(view.series.points),
                    "source_failures": list(view.source_failures),
                },
            )
        return view

    def publish(self, view: DashboardView) -> bool:
        """Make `view` current if it belongs to the latest issued load. Returns whether it was accepted."""

        if view.request_seq != self._latest_issued:
            logger.info(
                "dashboard.load.discarded",
                extra={"request_seq": view.request_seq, "latest_issued": self._latest_issued},
            )
            return False
        self._current = view
        return True


def get_loader() -> DashboardLoader:
    """Return the shared DashboardLoader instance."""

    return DashboardLoader.instance()
