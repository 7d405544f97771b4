"""Climate indicator and extreme event models."""

import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class TimeRange(str, Enum):
    """Year windows offered by the indicator charts; not every series offers all."""

    all = "all"
    century = "century"
    thirty_years = "30years"
    recent = "recent"


class SeriesPoint(BaseModel):
    """A single yearly value of a climate indicator."""

    year: int
    value: float


class DecadeAverage(BaseModel):
    decade: str
    average: float


class SeriesSummary(BaseModel):
    """Headline statistics shown above an indicator chart."""

    series: str
    unit: str
    latest_year: int
    latest_value: float
    baseline_year: int
    total_change: float
    rate: float
    rate_period: Literal["year", "century"]
    decade_averages: list[DecadeAverage] = Field(default_factory=list)


class ExtremeEvent(BaseModel):
    """A notable extreme weather event plotted on the events map."""

    id: int
    type: str
    name: str
    latitude: float
    longitude: float
    date: datetime.date
    description: str
    impact: str
    intensity: int = Field(ge=1, le=5)


class SeriesName(str, Enum):
    temperature = "temperature"
    co2 = "co2"
    sea_level = "sea-level"


class ExtremesResponse(BaseModel):
    """Filtered events plus per-type counts over the whole catalogue."""

    events: list[ExtremeEvent]
    counts: dict[str, int]
