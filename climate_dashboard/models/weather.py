"""Weather snapshot model and provider payload normalization."""

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SnapshotLocation(BaseModel):
    """Where a snapshot was taken and what to call it on the map."""

    name: str
    latitude: float
    longitude: float


class Conditions(BaseModel):
    """Current conditions in metric units."""

    temperature: float
    feels_like: float
    humidity: float
    pressure_hpa: float
    description: str = Field(min_length=1)
    icon_code: str
    cloudiness_pct: float | None = None
    visibility_meters: float | None = None


class Wind(BaseModel):
    """Wind vector in metres per second and compass degrees."""

    speed_mps: float
    direction_deg: float
    gust_mps: float | None = None


class Sun(BaseModel):
    """Sunrise and sunset as absolute instants."""

    sunrise: datetime
    sunset: datetime


class WeatherSnapshot(BaseModel):
    """A live or synthesized weather observation for one coordinate."""

    id: str = Field(default_factory=_new_id)
    source: Literal["live", "synthetic"]
    location: SnapshotLocation
    weather: Conditions
    wind: Wind
    sun: Sun
    created_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_api_response(
        cls, location: SnapshotLocation, api_data: dict
    ) -> "WeatherSnapshot":
        """Create a snapshot from an OpenWeatherMap current-weather payload.

        Args:
            location: Location envelope for the snapshot.
            api_data: Decoded JSON body of the current-weather call.

        Returns:
            A populated WeatherSnapshot tagged as live.

        Raises:
            KeyError, IndexError, TypeError: If required fields are missing.
        """
        main = api_data["main"]
        summary = api_data["weather"][0]
        wind = api_data["wind"]
        sun_times = api_data["sys"]
        return cls(
            source="live",
            location=location,
            weather=Conditions(
                temperature=main["temp"],
                feels_like=main["feels_like"],
                humidity=main["humidity"],
                pressure_hpa=main["pressure"],
                description=summary["description"],
                icon_code=summary["icon"],
                cloudiness_pct=(api_data.get("clouds") or {}).get("all"),
                visibility_meters=api_data.get("visibility"),
            ),
            wind=Wind(
                speed_mps=wind["speed"],
                direction_deg=wind.get("deg", 0),
                gust_mps=wind.get("gust"),
            ),
            sun=Sun(
                sunrise=datetime.fromtimestamp(sun_times["sunrise"], tz=timezone.utc),
                sunset=datetime.fromtimestamp(sun_times["sunset"], tz=timezone.utc),
            ),
        )
