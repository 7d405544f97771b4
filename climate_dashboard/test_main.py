import pytest
from fastapi.testclient import TestClient

from climate_dashboard.main import app
from climate_dashboard.models.health import ServiceStatus
from climate_dashboard.models.location import LocationMatch
from climate_dashboard.models.weather import (
    Conditions,
    SnapshotLocation,
    Sun,
    WeatherSnapshot,
    Wind,
)
from climate_dashboard.store.aggregation import AggregationStore
from climate_dashboard.upstream import ExternalAPIError


def make_snapshot(name, latitude, longitude, temperature=21.0):
    return WeatherSnapshot(
        source="live",
        location=SnapshotLocation(name=name, latitude=latitude, longitude=longitude),
        weather=Conditions(
            temperature=temperature,
            feels_like=temperature,
            humidity=55,
            pressure_hpa=1011,
            description="scattered clouds",
            icon_code="03d",
        ),
        wind=Wind(speed_mps=3.5, direction_deg=200),
        sun=Sun(sunrise="2024-01-01T06:00:00Z", sunset="2024-01-01T18:00:00Z"),
    )


@pytest.fixture
def store(monkeypatch):
    store = AggregationStore()
    monkeypatch.setattr("climate_dashboard.main.store", store)
    return store


@pytest.fixture
def fake_annotate(monkeypatch):
    async def annotate(coordinate, name=None):
        return make_snapshot(
            name or "Clicked", coordinate.latitude, coordinate.longitude
        )

    monkeypatch.setattr("climate_dashboard.main.annotate", annotate)


def test_root():
    client = TestClient(app)
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Climate dashboard API"}


def test_climate_series_and_summary():
    client = TestClient(app)
    response = client.get("/climate/co2", params={"time_range": "recent"})
    assert response.status_code == 200
    assert response.json()[0] == {"year": 2000, "value": 369.52}

    summary = client.get("/climate/sea-level/summary").json()
    assert summary["unit"] == "mm"
    assert summary["latest_year"] == 2022

    assert client.get("/climate/methane").status_code == 422


def test_co2_thirty_year_range():
    client = TestClient(app)
    response = client.get("/climate/co2", params={"time_range": "30years"})
    assert response.status_code == 200
    assert [point["year"] for point in response.json()] == [1990, 2000, 2010, 2020, 2022]

    summary = client.get("/climate/co2/summary", params={"time_range": "30years"})
    assert summary.status_code == 200
    assert summary.json()["baseline_year"] == 1990
    assert summary.json()["rate_period"] == "year"


@pytest.mark.parametrize(
    "path, time_range",
    [
        ("/climate/co2", "century"),
        ("/climate/co2/summary", "century"),
        ("/climate/temperature", "30years"),
        ("/climate/sea-level/summary", "30years"),
    ],
)
def test_climate_unsupported_time_range(path, time_range):
    client = TestClient(app)
    response = client.get(path, params={"time_range": time_range})
    assert response.status_code == 422
    assert "not available" in response.json()["detail"]


def test_extremes_filter():
    client = TestClient(app)
    data = client.get("/extremes", params={"type": "wildfire"}).json()
    assert [event["name"] for event in data["events"]] == ["California Camp Fire"]
    assert data["counts"]["hurricane"] == 2


def test_geocode_no_results_message(monkeypatch):
    async def fake_resolve(query):
        return []

    monkeypatch.setattr("climate_dashboard.main.resolve", fake_resolve)
    client = TestClient(app)
    response = client.get("/geocode", params={"q": "Atlantis"})
    assert response.status_code == 200
    assert response.json()["matches"] == []
    assert "No results found" in response.json()["message"]


def test_geocode_curated_city():
    client = TestClient(app)
    data = client.get("/geocode", params={"q": "tokyo tower"}).json()
    assert [match["name"] for match in data["matches"]] == ["Tokyo"]
    assert data["message"] is None


def test_suggestions():
    client = TestClient(app)
    data = client.get("/suggestions", params={"q": "chi"}).json()
    assert [match["name"] for match in data] == ["Beijing", "Shanghai", "Chicago"]


def test_weather_marker(fake_annotate):
    client = TestClient(app)
    response = client.get("/weather", params={"lat": 30.0, "lon": 31.2, "name": "Cairo"})
    assert response.status_code == 200
    data = response.json()
    assert data["color"] == "#ffaa00"
    assert data["label"] == "21°"
    assert data["snapshot"]["location"]["name"] == "Cairo"


def test_weather_invalid_coordinate(fake_annotate):
    client = TestClient(app)
    response = client.get("/weather", params={"lat": 123, "lon": 0})
    assert response.status_code == 400
    assert "Invalid coordinate" in response.json()["detail"]


def test_weather_external_error_maps_to_bad_gateway(monkeypatch):
    async def failing(coordinate, name=None):
        raise ExternalAPIError("Weather lookup failed")

    monkeypatch.setattr("climate_dashboard.main.annotate", failing)
    client = TestClient(app)
    response = client.get("/weather", params={"lat": 1, "lon": 1})
    assert response.status_code == 502
    assert response.json()["detail"] == "Weather lookup failed"


def test_search_selection_upserts_by_proximity(store, fake_annotate):
    client = TestClient(app)
    store.append(make_snapshot("Paris", 48.8566, 2.3522))
    store.append(make_snapshot("Rome", 41.9028, 12.4964))

    match = LocationMatch(
        id="1",
        name="Paris 1er",
        country="France",
        latitude=48.86,
        longitude=2.35,
        display_name="Paris 1er, France",
    )
    response = client.post("/markers/search", json=match.model_dump())
    assert response.status_code == 200
    data = response.json()
    assert data["position"] == 0
    assert data["selected"] is True
    assert [s.location.name for s in store] == ["Paris 1er", "Rome"]
    assert store.selected.location.name == "Paris 1er"


def test_map_click_appends(store, fake_annotate):
    client = TestClient(app)
    store.append(make_snapshot("Here", 10.0, 10.0))
    response = client.post("/markers/click", json={"latitude": 10.0, "longitude": 10.0})
    assert response.json()["position"] == 1
    assert len(store) == 2

    markers = client.get("/markers").json()
    assert [m["snapshot"]["location"]["name"] for m in markers] == ["Here", "Clicked"]


def test_map_click_invalid_coordinate(store, fake_annotate):
    client = TestClient(app)
    response = client.post("/markers/click", json={"latitude": 0, "longitude": 200})
    assert response.status_code == 400
    assert len(store) == 0


def test_health(monkeypatch, store):
    client = TestClient(app)

    async def available():
        return ServiceStatus.available

    async def not_available():
        return ServiceStatus.not_available

    monkeypatch.setattr("climate_dashboard.main.is_weather_api_available", available)
    monkeypatch.setattr("climate_dashboard.main.is_geocoding_api_available", available)
    monkeypatch.setattr("climate_dashboard.main.is_redis_available", not_available)

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "markers": 0,
        "dependencies": {
            "weather_api": "available",
            "geocoding_api": "available",
            "redis": "not_available",
        },
    }


def test_metrics():
    client = TestClient(app)
    client.get("/")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text
