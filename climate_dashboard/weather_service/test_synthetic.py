import random
from datetime import datetime

import pytest

from climate_dashboard.weather_service.synthetic import (
    FALLBACK_DESCRIPTIONS,
    base_temperature,
    describe,
    generate,
    icon_for,
    is_northern_summer,
)

JULY_NOON = datetime(2024, 7, 15, 12, 30)
JANUARY_NIGHT = datetime(2024, 1, 15, 23, 0)


def test_northern_summer_months():
    assert [m for m in range(1, 13) if is_northern_summer(m)] == [5, 6, 7, 8, 9]


def test_base_temperature_at_equator_is_reference():
    assert base_temperature(0, 7) == 30
    assert base_temperature(0, 1) == 30


def test_base_temperature_widens_in_local_summer():
    # Northern summer: pole reference -10, widened by 15.
    assert base_temperature(90, 7) == pytest.approx(-25)
    # Southern winter during northern summer keeps the -10 reference.
    assert base_temperature(-90, 7) == pytest.approx(-10)
    # Northern winter: pole reference -30 without widening.
    assert base_temperature(90, 1) == pytest.approx(-30)
    # Southern summer during northern winter.
    assert base_temperature(-90, 1) == pytest.approx(-45)


@pytest.mark.parametrize(
    "temperature, label",
    [
        (-20, "extreme cold"),
        (-5, "freezing"),
        (3, "very cold"),
        (7, "cold"),
        (12, "cool"),
        (17, "mild"),
        (22, "warm"),
        (27, "hot"),
        (30, "very hot"),
    ],
)
def test_describe_ladder(temperature, label):
    assert describe(temperature) == label


def test_icon_for_day_and_night():
    assert icon_for(-1, True) == "13d"
    assert icon_for(5, False) == "03n"
    assert icon_for(15, True) == "02d"
    assert icon_for(35, False) == "01n"


@pytest.mark.parametrize("latitude", [-90, -60, -23.5, 0, 23.5, 45, 90])
@pytest.mark.parametrize("moment", [JULY_NOON, JANUARY_NIGHT])
def test_generate_stays_within_bounds(latitude, moment):
    rng = random.Random(7)
    for _ in range(50):
        weather = generate(latitude, at=moment, rng=rng)
        assert -45 <= weather.temperature <= 45
        assert 40 <= weather.humidity < 80
        assert 1000 <= weather.pressure_hpa < 1030
        assert 0 <= weather.cloudiness_pct < 100
        assert 8000 <= weather.visibility_meters < 10000
        assert 0 <= weather.wind.direction_deg < 360
        assert weather.description in FALLBACK_DESCRIPTIONS


def test_generate_description_ignores_jitter():
    weather = generate(0, at=JULY_NOON, rng=random.Random(1))
    assert weather.description == "very hot"
    assert 27 <= weather.temperature <= 33
    assert 28 <= weather.feels_like <= 32


def test_generate_day_night_and_fixed_sun_times():
    day = generate(10, at=JULY_NOON)
    night = generate(10, at=JANUARY_NIGHT)
    assert day.icon_code.endswith("d")
    assert night.icon_code.endswith("n")
    assert (day.sunrise.hour, day.sunrise.minute) == (6, 0)
    assert (day.sunset.hour, day.sunset.minute) == (18, 0)
    assert day.sunrise.date() == JULY_NOON.date()
