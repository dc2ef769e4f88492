from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Protocol, TypeVar

import httpx

from core.configs.dashboard_config import (
    DATA_API_BASE_URL,
    DATA_API_TIMEOUT,
    DATA_API_TOKEN,
    FORECAST_PATH,
    LOGS_PATH,
    STATS_PATH,
)
from dashboard_service.schema_modules.input_schemas import ForecastBundle, LogEntry, StatsSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SourceFailure(RuntimeError):
    """Raised when a data source rejects a request or returns an unexpected top-level shape."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"{source} source failed: {detail}")
        self.source = source
        self.detail = detail


@dataclass(frozen=True)
class Source(Generic[T]):
    """Outcome of one source fetch: either a value or the error that replaced it."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, value: T) -> "Source[T]":
        return cls(value=value)

    @classmethod
    def missing(cls, error: BaseException) -> "Source[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def value_or(self, default: T) -> T:
        return self.value if self.is_ok else default  # type: ignore[return-value]


class DashboardSources(Protocol):
    """The three independent data sources feeding the dashboard."""

    async def fetch_stats(self) -> StatsSnapshot: ...

    async def fetch_forecast(self) -> Optional[ForecastBundle]: ...

    async def fetch_logs(self) -> List[LogEntry]: ...


def parse_stats(raw: Any) -> StatsSnapshot:
    if not isinstance(raw, Mapping):
        raise SourceFailure("stats", f"expected an object, got {type(raw).__name__}")
    return StatsSnapshot.model_validate(dict(raw))


def parse_forecast(raw: Any) -> Optional[ForecastBundle]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise SourceFailure("forecast", f"expected an object or null, got {type(raw).__name__}")
    return ForecastBundle.model_validate(dict(raw))


def parse_logs(raw: Any) -> List[LogEntry]:
    # Individual malformed entries are kept as empty entries; only the container shape is checked.
    if not isinstance(raw, (list, tuple)):
        raise SourceFailure("logs", f"expected a list, got {type(raw).__name__}")
    return [LogEntry.model_validate(item) for item in raw]


class HttpDashboardSources:
    """
    Fetches the dashboard sources from the coding-hours API over HTTP.

    Authentication is handled elsewhere; this client only forwards the bearer
    token it is given.
    """

    def __init__(
        self,
        *,
        base_url: str = DATA_API_BASE_URL,
        token: str | None = DATA_API_TOKEN,
        timeout: float = DATA_API_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def fetch_stats(self) -> StatsSnapshot:
        return parse_stats(await self._get_json("stats", STATS_PATH))

    async def fetch_forecast(self) -> Optional[ForecastBundle]:
        return parse_forecast(await self._get_json("forecast", FORECAST_PATH))

    async def fetch_logs(self) -> List[LogEntry]:
        return parse_logs(await self._get_json("logs", LOGS_PATH))

    async def _get_json(self, source: str, path: str) -> Any:
        logger.info("sources.fetch.start", extra={"source": source, "path": path})
        try:
            response = await self._client.get(path)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as exc:
            raise SourceFailure(source, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise SourceFailure(source, "response body is not valid JSON") from exc

    async def __aenter__(self) -> "HttpDashboardSources":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
