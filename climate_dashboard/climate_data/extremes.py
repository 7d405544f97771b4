"""Catalogue of notable extreme weather events."""

from datetime import date

from climate_dashboard.models.climate import ExtremeEvent

ALL_TYPES = "all"

EXTREME_EVENTS = [
    ExtremeEvent(
        id=1,
        type="hurricane",
        name="Hurricane Maria",
        latitude=18.2208,
        longitude=-66.5901,
        date=date(2017, 9, 20),
        description="Category 5 hurricane that devastated Puerto Rico",
        impact="Over $90 billion in damage, 2,975 deaths",
        intensity=5,
    ),
    ExtremeEvent(
        id=2,
        type="wildfire",
        name="California Camp Fire",
        latitude=39.8039,
        longitude=-121.4356,
        date=date(2018, 11, 8),
        description="Most destructive wildfire in California history",
        impact="85 deaths, 18,804 structures destroyed",
        intensity=5,
    ),
    ExtremeEvent(
        id=3,
        type="flood",
        name="Kerala Floods",
        latitude=10.8505,
        longitude=76.2711,
        date=date(2018, 8, 8),
        description="Severe flooding in the Indian state of Kerala",
        impact="483 deaths, 140,000 people displaced",
        intensity=4,
    ),
    ExtremeEvent(
        id=4,
        type="drought",
        name="Cape Town Water Crisis",
        latitude=-33.9249,
        longitude=18.4241,
        date=date(2018, 1, 1),
        description="Severe water shortage in Cape Town, South Africa",
        impact="City nearly ran out of water, severe water restrictions",
        intensity=4,
    ),
    ExtremeEvent(
        id=5,
        type="heatwave",
        name="European Heatwave",
        latitude=48.8566,
        longitude=2.3522,
        date=date(2019, 7, 25),
        description="Record-breaking temperatures across Europe",
        impact="Over 2,500 deaths, infrastructure damage",
        intensity=5,
    ),
    ExtremeEvent(
        id=6,
        type="cyclone",
        name="Cyclone Idai",
        latitude=-19.8335,
        longitude=34.8888,
        date=date(2019, 3, 15),
        description="Tropical cyclone that hit Mozambique, Zimbabwe, and Malawi",
        impact="Over 1,000 deaths, $2 billion in damages",
        intensity=4,
    ),
    ExtremeEvent(
        id=7,
        type="tornado",
        name="Nashville Tornado",
        latitude=36.1627,
        longitude=-86.7816,
        date=date(2020, 3, 3),
        description="EF3 tornado that struck Nashville, Tennessee",
        impact="25 deaths, 309 injuries, $1.5 billion in damages",
        intensity=3,
    ),
    ExtremeEvent(
        id=8,
        type="hurricane",
        name="Hurricane Dorian",
        latitude=26.5124,
        longitude=-78.6483,
        date=date(2019, 9, 1),
        description="Category 5 hurricane that devastated the Bahamas",
        impact="84 deaths, $3.4 billion in damages",
        intensity=5,
    ),
]


def list_events(event_type: str = ALL_TYPES) -> list[ExtremeEvent]:
    """Return the catalogue, optionally restricted to one event type."""
    if event_type == ALL_TYPES:
        return list(EXTREME_EVENTS)
    return [event for event in EXTREME_EVENTS if event.type == event_type]


def count_by_type() -> dict[str, int]:
    """Count events per type, keeping the order types first appear in."""
    counts: dict[str, int] = {}
    for event in EXTREME_EVENTS:
        counts[event.type] = counts.get(event.type, 0) + 1
    return counts
