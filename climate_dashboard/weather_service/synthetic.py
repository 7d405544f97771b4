"""Plausible weather estimates for when the live provider is unavailable.

Only latitude and the calendar month shape the estimate; the values
themselves are randomized, so callers should rely on ranges rather than
exact numbers.
"""

import random
from datetime import datetime

from pydantic import BaseModel

from climate_dashboard.models.weather import Wind

EQUATOR_TEMP_C = 30.0
SUMMER_POLE_TEMP_C = -10.0
WINTER_POLE_TEMP_C = -30.0
SUMMER_WIDENING_C = 15.0
MIN_TEMP_C = -45.0
MAX_TEMP_C = 45.0

NORTHERN_SUMMER_MONTHS = range(5, 10)  # May to September
DAY_START_HOUR = 6
DAY_END_HOUR = 18

DESCRIPTION_LADDER = [
    (-10, "extreme cold"),
    (0, "freezing"),
    (5, "very cold"),
    (10, "cold"),
    (15, "cool"),
    (20, "mild"),
    (25, "warm"),
    (30, "hot"),
]
HOTTEST_DESCRIPTION = "very hot"
FALLBACK_DESCRIPTIONS = frozenset(
    [label for _, label in DESCRIPTION_LADDER] + [HOTTEST_DESCRIPTION]
)


class SyntheticWeather(BaseModel):
    """Weather fields estimated without a provider."""

    temperature: float
    feels_like: float
    humidity: int
    pressure_hpa: int
    description: str
    icon_code: str
    cloudiness_pct: int
    visibility_meters: int
    wind: Wind
    sunrise: datetime
    sunset: datetime


def is_northern_summer(month: int) -> bool:
    return month in NORTHERN_SUMMER_MONTHS


def base_temperature(latitude: float, month: int) -> float:
    """Interpolate between equator and pole references for the season.

    Args:
        latitude: Latitude in decimal degrees.
        month: Calendar month, 1 to 12.

    Returns:
        The un-jittered base temperature in °C.
    """
    summer_north = is_northern_summer(month)
    pole_temp = SUMMER_POLE_TEMP_C if summer_north else WINTER_POLE_TEMP_C
    lat_factor = abs(latitude) / 90
    local_summer = summer_north if latitude >= 0 else not summer_north
    spread = EQUATOR_TEMP_C - pole_temp
    if local_summer:
        spread += SUMMER_WIDENING_C
    return EQUATOR_TEMP_C - lat_factor * spread


def describe(temperature: float) -> str:
    for threshold, label in DESCRIPTION_LADDER:
        if temperature < threshold:
            return label
    return HOTTEST_DESCRIPTION


def icon_for(temperature: float, is_day: bool) -> str:
    """Map a temperature onto an OpenWeatherMap icon code."""
    suffix = "d" if is_day else "n"
    if temperature < 0:
        return f"13{suffix}"
    if temperature < 10:
        return f"03{suffix}"
    if temperature < 20:
        return f"02{suffix}"
    return f"01{suffix}"


def _clamp(value: float) -> float:
    return max(MIN_TEMP_C, min(MAX_TEMP_C, value))


def generate(
    latitude: float,
    at: datetime | None = None,
    rng: random.Random | None = None,
) -> SyntheticWeather:
    """Synthesize current conditions for a latitude at a local moment.

    Args:
        latitude: Latitude in decimal degrees.
        at: Local wall-clock moment; defaults to now.
        rng: Random source; defaults to a fresh unseeded generator.

    Returns:
        A fully populated SyntheticWeather.
    """
    at = at or datetime.now().astimezone()
    rng = rng or random.Random()
    base = base_temperature(latitude, at.month)
    is_day = DAY_START_HOUR < at.hour < DAY_END_HOUR
    return SyntheticWeather(
        temperature=_clamp(base + rng.uniform(-3, 3)),
        feels_like=_clamp(base + rng.uniform(-2, 2)),
        humidity=rng.randrange(40, 80),
        pressure_hpa=rng.randrange(1000, 1030),
        description=describe(base),
        icon_code=icon_for(base, is_day),
        cloudiness_pct=rng.randrange(0, 100),
        visibility_meters=rng.randrange(8000, 10000),
        wind=Wind(
            speed_mps=rng.uniform(2, 10),
            direction_deg=rng.randrange(0, 360),
            gust_mps=rng.uniform(3, 13),
        ),
        sunrise=at.replace(hour=DAY_START_HOUR, minute=0, second=0, microsecond=0),
        sunset=at.replace(hour=DAY_END_HOUR, minute=0, second=0, microsecond=0),
    )
