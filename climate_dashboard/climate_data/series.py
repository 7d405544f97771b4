"""Fixed climate indicator tables and the statistics derived from them."""

from dataclasses import dataclass

from climate_dashboard.models.climate import (
    DecadeAverage,
    SeriesPoint,
    SeriesSummary,
    TimeRange,
)
from climate_dashboard.upstream import WeatherServiceError

# Global temperature anomaly in °C (NASA GISS).
TEMPERATURE_ANOMALY = {
    1880: -0.16,
    1890: -0.35,
    1900: -0.09,
    1910: -0.39,
    1920: -0.27,
    1930: -0.03,
    1940: 0.12,
    1950: -0.02,
    1960: 0.03,
    1970: 0.01,
    1980: 0.27,
    1990: 0.45,
    2000: 0.61,
    2010: 0.82,
    2020: 1.02,
    2022: 1.11,
}

# Atmospheric CO2 in ppm (Mauna Loa Observatory).
CO2_PPM = {
    1960: 316.91,
    1970: 325.68,
    1980: 338.75,
    1990: 354.35,
    2000: 369.52,
    2010: 389.85,
    2020: 412.44,
    2022: 417.06,
}

# Sea level in mm relative to 2000 (CSIRO).
SEA_LEVEL_MM = {
    1880: -120,
    1900: -100,
    1920: -80,
    1940: -60,
    1960: -40,
    1980: -20,
    2000: 0,
    2020: 90,
    2022: 101,
}

TWENTY_YEAR_DECADES = [1880, 1900, 1920, 1940, 1960, 1980, 2000, 2020]
LONG_RANGES = {TimeRange.all: None, TimeRange.century: 1920, TimeRange.recent: 1970}
LAST_BUCKET_END = 2023


class UnsupportedTimeRangeError(WeatherServiceError):
    """Raised when a series does not offer the requested time range."""
    pass


@dataclass(frozen=True)
class SeriesSpec:
    table: dict
    unit: str
    decades: list[int]
    range_start: dict[TimeRange, int | None]
    # Fixed reference year for total change; the earliest shown point otherwise.
    baseline_year: int | None = None


SERIES = {
    "temperature": SeriesSpec(
        TEMPERATURE_ANOMALY, "°C", TWENTY_YEAR_DECADES, LONG_RANGES, baseline_year=1880
    ),
    "co2": SeriesSpec(
        CO2_PPM,
        "ppm",
        [1960, 1970, 1980, 1990, 2000, 2010, 2020],
        {TimeRange.all: None, TimeRange.thirty_years: 1990, TimeRange.recent: 2000},
    ),
    "sea-level": SeriesSpec(SEA_LEVEL_MM, "mm", TWENTY_YEAR_DECADES, LONG_RANGES),
}


def _points(table: dict) -> list[SeriesPoint]:
    return [SeriesPoint(year=year, value=value) for year, value in sorted(table.items())]


def temperature_series() -> list[SeriesPoint]:
    """Return the temperature anomaly table in ascending year order."""
    return _points(TEMPERATURE_ANOMALY)


def co2_series() -> list[SeriesPoint]:
    """Return the CO2 concentration table in ascending year order."""
    return _points(CO2_PPM)


def sea_level_series() -> list[SeriesPoint]:
    """Return the sea level rise table in ascending year order."""
    return _points(SEA_LEVEL_MM)


def get_series(name: str, time_range: TimeRange = TimeRange.all) -> list[SeriesPoint]:
    """Return a named series restricted to a time range.

    Args:
        name: One of ``temperature``, ``co2`` or ``sea-level``.
        time_range: Window of years to keep.

    Returns:
        The matching points, oldest first.

    Raises:
        KeyError: If the series name is unknown.
        UnsupportedTimeRangeError: If the series does not offer the range.
    """
    spec = SERIES[name]
    if time_range not in spec.range_start:
        raise UnsupportedTimeRangeError(
            f"Time range {time_range.value!r} is not available for {name}"
        )
    start = spec.range_start[time_range]
    points = _points(spec.table)
    if start is None:
        return points
    return [point for point in points if point.year >= start]


def decade_averages(points: list[SeriesPoint], decades: list[int]) -> list[DecadeAverage]:
    """Average the points falling in each bucket, skipping empty buckets."""
    averages = []
    for index, start in enumerate(decades):
        end = decades[index + 1] if index + 1 < len(decades) else LAST_BUCKET_END
        values = [point.value for point in points if start <= point.year < end]
        if values:
            averages.append(
                DecadeAverage(
                    decade=f"{start}s", average=round(sum(values) / len(values), 2)
                )
            )
    return averages


def summarize(name: str, time_range: TimeRange = TimeRange.all) -> SeriesSummary:
    """Compute the latest value, overall change and decade averages of a series.

    Series with a fixed baseline year report change against that year's value
    (0 when it falls outside the range) and a per-century rate. The others
    measure from the earliest point shown and report a per-year rate.

    Raises:
        KeyError: If the series name is unknown.
        UnsupportedTimeRangeError: If the series does not offer the range.
    """
    spec = SERIES[name]
    points = get_series(name, time_range)
    latest = points[-1]
    if spec.baseline_year is not None:
        baseline_year = spec.baseline_year
        baseline_value = next(
            (point.value for point in points if point.year == baseline_year), 0.0
        )
        total_change = latest.value - baseline_value
        span = (latest.year - baseline_year) / 100
        rate_period = "century"
    else:
        baseline_year, baseline_value = points[0].year, points[0].value
        total_change = latest.value - baseline_value
        span = latest.year - baseline_year
        rate_period = "year"
    return SeriesSummary(
        series=name,
        unit=spec.unit,
        latest_year=latest.year,
        latest_value=latest.value,
        baseline_year=baseline_year,
        total_change=round(total_change, 2),
        rate=round(total_change / span, 4) if span else 0.0,
        rate_period=rate_period,
        decade_averages=decade_averages(points, spec.decades),
    )
