import asyncio

import httpx
import pytest

from climate_dashboard.models.location import Coordinate
from climate_dashboard.weather_service.synthetic import FALLBACK_DESCRIPTIONS
from climate_dashboard.weather_service.weather import annotate

LONDON_PAYLOAD = {
    "name": "London",
    "main": {"temp": 12.3, "feels_like": 11.0, "humidity": 81, "pressure": 1012},
    "weather": [{"description": "light rain", "icon": "10d"}],
    "clouds": {"all": 75},
    "visibility": 10000,
    "wind": {"speed": 4.1, "deg": 240, "gust": 7.2},
    "sys": {"sunrise": 1704096000, "sunset": 1704124800},
}


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setattr(
        "climate_dashboard.weather_service.weather.OPENWEATHER_API_KEY", "test-key"
    )


def run_annotate(handler, coordinate, name=None):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await annotate(coordinate, name, client=client)

    return asyncio.run(go())


def test_annotate_normalizes_live_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=LONDON_PAYLOAD)

    snapshot = run_annotate(handler, Coordinate(latitude=51.5074, longitude=-0.1278))

    assert seen["units"] == "metric"
    assert seen["appid"] == "test-key"
    assert snapshot.source == "live"
    assert snapshot.location.name == "London"
    assert snapshot.location.latitude == 51.5074
    assert snapshot.weather.temperature == 12.3
    assert snapshot.weather.pressure_hpa == 1012
    assert snapshot.weather.description == "light rain"
    assert snapshot.weather.cloudiness_pct == 75
    assert snapshot.wind.gust_mps == 7.2
    assert snapshot.sun.sunrise.isoformat() == "2024-01-01T08:00:00+00:00"


def test_annotate_prefers_caller_name():
    snapshot = run_annotate(
        lambda request: httpx.Response(200, json=LONDON_PAYLOAD),
        Coordinate(latitude=51.5, longitude=-0.12),
        name="Greater London",
    )
    assert snapshot.location.name == "Greater London"


@pytest.mark.parametrize(
    "handler",
    [
        lambda request: httpx.Response(503),
        lambda request: httpx.Response(200, json={"main": {}}),
        lambda request: httpx.Response(200, content=b"not json"),
        lambda request: httpx.Response(200, json=["unexpected"]),
    ],
)
def test_annotate_falls_back_on_bad_responses(handler):
    snapshot = run_annotate(handler, Coordinate(latitude=10, longitude=20), "Somewhere")
    assert snapshot.source == "synthetic"
    assert snapshot.location.name == "Somewhere"
    assert snapshot.weather.description


def test_annotate_during_outage_returns_equatorial_fallback():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    snapshot = run_annotate(handler, Coordinate(latitude=0, longitude=0))

    assert snapshot.source == "synthetic"
    assert snapshot.weather.description in FALLBACK_DESCRIPTIONS
    assert 27 <= snapshot.weather.temperature <= 33
    assert snapshot.location.name == "Location (0.00, 0.00)"


def test_annotate_without_api_key_skips_live_call(monkeypatch):
    monkeypatch.setattr(
        "climate_dashboard.weather_service.weather.OPENWEATHER_API_KEY", ""
    )

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"Unexpected request: {request.url}")

    snapshot = run_annotate(handler, Coordinate(latitude=-33.87, longitude=151.21))
    assert snapshot.source == "synthetic"


def test_annotate_falls_back_on_out_of_range_sun_times():
    payload = dict(LONDON_PAYLOAD, sys={"sunrise": 10**20, "sunset": -(10**20)})
    snapshot = run_annotate(
        lambda request: httpx.Response(200, json=payload),
        Coordinate(latitude=51.5, longitude=-0.12),
        name="London",
    )
    assert snapshot.source == "synthetic"
    assert snapshot.location.name == "London"
