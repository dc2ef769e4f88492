from __future__ import annotations

from typing import Callable, Dict

import httpx
import pytest

from dashboard_service.api_modules.sources import (
    HttpDashboardSources,
    Source,
    SourceFailure,
    parse_forecast,
    parse_logs,
    parse_stats,
)

BASE_URL = "http://testserver/api"


def _sources(routes: Dict[str, Callable[[httpx.Request], httpx.Response]], token: str | None = "secret"):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return routes[request.url.path](request)

    client = HttpDashboardSources(base_url=BASE_URL, token=token, transport=httpx.MockTransport(handler))
    return client, seen


@pytest.mark.asyncio
async def test_fetches_all_three_sources_with_bearer_token():
    routes = {
        "/api/stats": lambda request: httpx.Response(200, json={"totalHours": 12, "avgPerDay": 1.5, "entries": 8}),
        "/api/forecast": lambda request: httpx.Response(
            200, json={"forecast": [{"date": "2024-01-02", "hours": 3}], "confidence": 0.7}
        ),
        "/api/logs": lambda request: httpx.Response(200, json=[{"date": "2024-01-01", "duration": "2"}]),
    }
    client, seen = _sources(routes)

    async with client:
        stats = await client.fetch_stats()
        bundle = await client.fetch_forecast()
        logs = await client.fetch_logs()

    assert (stats.total_hours, stats.avg_per_day, stats.entries) == (12.0, 1.5, 8.0)
    assert bundle is not None and bundle.confidence == 0.7
    assert logs[0].duration == "2"
    assert all(request.headers["Authorization"] == "Bearer secret" for request in seen)


@pytest.mark.asyncio
async def test_no_authorization_header_without_token():
    client, seen = _sources({"/api/logs": lambda request: httpx.Response(200, json=[])}, token=None)

    async with client:
        assert await client.fetch_logs() == []

    assert "Authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_null_forecast_means_no_forecast():
    null_body = httpx.Response(200, content=b"null", headers={"Content-Type": "application/json"})
    client, _ = _sources({"/api/forecast": lambda request: null_body})

    async with client:
        assert await client.fetch_forecast() is None


@pytest.mark.asyncio
async def test_http_error_status_raises_source_failure():
    client, _ = _sources({"/api/stats": lambda request: httpx.Response(500, json={"error": "down"})})

    async with client:
        with pytest.raises(SourceFailure) as excinfo:
            await client.fetch_stats()

    assert excinfo.value.source == "stats"


@pytest.mark.asyncio
async def test_transport_error_raises_source_failure():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = _sources({"/api/logs": refuse})

    async with client:
        with pytest.raises(SourceFailure) as excinfo:
            await client.fetch_logs()

    assert excinfo.value.source == "logs"
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_invalid_json_raises_source_failure():
    client, _ = _sources({"/api/forecast": lambda request: httpx.Response(200, content=b"<html>")})

    async with client:
        with pytest.raises(SourceFailure):
            await client.fetch_forecast()


def test_top_level_shape_is_checked():
    with pytest.raises(SourceFailure):
        parse_stats([1, 2, 3])
    with pytest.raises(SourceFailure):
        parse_forecast(["not", "a", "bundle"])
    with pytest.raises(SourceFailure):
        parse_logs({"date": "2024-01-01"})


def test_malformed_log_items_are_kept():
    logs = parse_logs([{"date": "2024-01-01", "duration": 1}, "junk", None])

    assert len(logs) == 3
    assert logs[1].date is None and logs[2].duration is None


def test_source_result_defaults():
    failure = SourceFailure("stats", "boom")

    assert Source.ok(5).value_or(0) == 5
    assert Source.ok(None).value_or([]) is None
    assert Source.missing(failure).value_or(0) == 0
    assert Source.missing(failure).is_ok is False
    assert str(failure) == "stats source failed: boom"
