"""Map marker styling for weather snapshots."""

from pydantic import BaseModel

from climate_dashboard.models.weather import WeatherSnapshot

COLOR_LADDER = [
    (-10, "#0022ff"),
    (0, "#0066ff"),
    (10, "#00aaff"),
    (20, "#00ffaa"),
    (30, "#ffaa00"),
    (40, "#ff6600"),
]
HOTTEST_COLOR = "#ff0000"
COMPASS_POINTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]


class Marker(BaseModel):
    """A color-coded marker with the snapshot it was drawn from."""

    color: str
    label: str
    wind_direction: str
    snapshot: WeatherSnapshot


def temperature_color(temperature: float) -> str:
    for threshold, color in COLOR_LADDER:
        if temperature < threshold:
            return color
    return HOTTEST_COLOR


def wind_direction(degrees: float) -> str:
    """Name the nearest of the eight compass points."""
    return COMPASS_POINTS[round(degrees / 45) % 8]


def to_marker(snapshot: WeatherSnapshot) -> Marker:
    temperature = snapshot.weather.temperature
    return Marker(
        color=temperature_color(temperature),
        label=f"{round(temperature)}°",
        wind_direction=wind_direction(snapshot.wind.direction_deg),
        snapshot=snapshot,
    )


class MarkerUpdate(BaseModel):
    """Result of recording a marker from an interactive request."""

    marker: Marker
    position: int
    selected: bool
