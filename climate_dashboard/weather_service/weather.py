"""Weather annotation with live lookup and synthetic fallback."""

from dataclasses import dataclass
from datetime import datetime

import httpx

from climate_dashboard.config import OPENWEATHER_API_KEY, OPENWEATHER_BASE_URL
from climate_dashboard.logging_config import logger
from climate_dashboard.metrics import SNAPSHOT_COUNT
from climate_dashboard.models.location import Coordinate
from climate_dashboard.models.weather import (
    Conditions,
    SnapshotLocation,
    Sun,
    WeatherSnapshot,
)
from climate_dashboard.upstream import ExternalAPIError, get_json, new_client
from climate_dashboard.weather_service import synthetic


@dataclass(frozen=True)
class LiveReading:
    payload: dict


@dataclass(frozen=True)
class SyntheticReading:
    weather: synthetic.SyntheticWeather


Reading = LiveReading | SyntheticReading

PAYLOAD_ERRORS = (
    KeyError,
    IndexError,
    TypeError,
    AttributeError,
    ValueError,
    OverflowError,
    OSError,
)


def placeholder_name(coordinate: Coordinate) -> str:
    return f"Location ({coordinate.latitude:.2f}, {coordinate.longitude:.2f})"


async def get_weather_data_from_api(
    client: httpx.AsyncClient, coordinate: Coordinate
) -> dict:
    """Fetch current conditions for a coordinate from OpenWeatherMap.

    Args:
        client: Async client for the call.
        coordinate: Point to look up.

    Returns:
        Raw current-weather payload.

    Raises:
        ExternalAPIError: If the call fails or no API key is configured.
    """
    if not OPENWEATHER_API_KEY:
        raise ExternalAPIError("Weather API key not configured")
    return await get_json(
        client,
        url=f"{OPENWEATHER_BASE_URL}/data/2.5/weather",
        params={
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "units": "metric",
            "appid": OPENWEATHER_API_KEY,
        },
        event_prefix="WEATHER",
        log_context={"lat": coordinate.latitude, "lon": coordinate.longitude},
        error_message="Weather lookup failed",
    )


def to_snapshot(
    reading: Reading, coordinate: Coordinate, name: str | None
) -> WeatherSnapshot:
    """Collapse a live or synthetic reading into a flat snapshot.

    Raises:
        ExternalAPIError: If a live payload cannot be normalized.
    """
    if isinstance(reading, LiveReading):
        try:
            location = SnapshotLocation(
                name=name or reading.payload.get("name") or placeholder_name(coordinate),
                latitude=coordinate.latitude,
                longitude=coordinate.longitude,
            )
            return WeatherSnapshot.from_api_response(location, reading.payload)
        except PAYLOAD_ERRORS as exc:
            raise ExternalAPIError("Weather payload malformed") from exc

    estimate = reading.weather
    return WeatherSnapshot(
        source="synthetic",
        location=SnapshotLocation(
            name=name or placeholder_name(coordinate),
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
        ),
        weather=Conditions(
            temperature=estimate.temperature,
            feels_like=estimate.feels_like,
            humidity=estimate.humidity,
            pressure_hpa=estimate.pressure_hpa,
            description=estimate.description,
            icon_code=estimate.icon_code,
            cloudiness_pct=estimate.cloudiness_pct,
            visibility_meters=estimate.visibility_meters,
        ),
        wind=estimate.wind,
        sun=Sun(sunrise=estimate.sunrise, sunset=estimate.sunset),
    )


async def annotate(
    coordinate: Coordinate,
    name: str | None = None,
    client: httpx.AsyncClient | None = None,
    now: datetime | None = None,
) -> WeatherSnapshot:
    """Return a weather snapshot for a coordinate, never failing.

    Args:
        coordinate: Point to annotate.
        name: Display name; the provider's or a placeholder is used when absent.
        client: Async client to reuse; a short-lived one is created otherwise.
        now: Local moment handed to the synthetic generator.

    Returns:
        A live snapshot, or a synthetic one if the live lookup failed.
    """
    try:
        if client is None:
            async with new_client() as owned:
                payload = await get_weather_data_from_api(owned, coordinate)
        else:
            payload = await get_weather_data_from_api(client, coordinate)
        snapshot = to_snapshot(LiveReading(payload), coordinate, name)
    except ExternalAPIError as exc:
        logger.warning(
            "WEATHER_FALLBACK",
            lat=coordinate.latitude,
            lon=coordinate.longitude,
            reason=str(exc),
        )
        reading = SyntheticReading(synthetic.generate(coordinate.latitude, at=now))
        snapshot = to_snapshot(reading, coordinate, name)
    SNAPSHOT_COUNT.labels(source=snapshot.source).inc()
    return snapshot
