from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone
from pathlib import Path

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from suncalc import ObserverError, compute_times, position, transit_and_nadir

PRAGUE = (50.0755, 14.4378)
TROMSO = (69.6492, 18.9553)
BARROW = (71.2906, -156.7886)
EQUATOR = (0.0, 0.0)
SOUTH_POLE = (-90.0, 0.0)

TWILIGHT_PAIRS = [
    ("sunrise", "sunset"),
    ("sunrise_end", "sunset_start"),
    ("dawn", "dusk"),
    ("nautical_dawn", "nautical_dusk"),
    ("night_end", "night"),
]
EQUATOR_DATES = [
    date(2025, 1, 15),
    date(2025, 3, 20),
    date(2025, 5, 10),
    date(2025, 6, 21),
    date(2025, 9, 1),
    date(2025, 11, 3),
    date(2025, 12, 21),
]


def _noon(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, 12, tzinfo=UTC)


def test_prague_summer_solstice():
    result = compute_times(_noon(2025, 6, 21), *PRAGUE)
    assert result.status == "ok"
    assert result.sunrise is not None and result.sunset is not None
    assert result.sunrise < result.sunset
    # Midnight altitude is about -16.5 degrees, above the -18 degree threshold.
    assert result.night_end is None
    assert result.night is None
    assert -17.5 < result.nadir_altitude < -15.5
    assert result.nautical_dawn is not None and result.nautical_dusk is not None


def test_prague_day_length():
    result = compute_times(_noon(2025, 6, 21), *PRAGUE)
    day_length = (result.sunset - result.sunrise).total_seconds()
    assert 16 * 3600 <= day_length <= 16 * 3600 + 45 * 60


def test_prague_solar_noon_near_local_mean_noon():
    result = compute_times(_noon(2025, 6, 21), *PRAGUE)
    expected = datetime(2025, 6, 21, 11, 4, tzinfo=UTC)
    assert abs(result.solar_noon - expected) < timedelta(minutes=3)
    assert abs(result.solar_noon - result.nadir - timedelta(hours=12)) < timedelta(
        milliseconds=1
    )


def test_tromso_polar_day():
    result = compute_times(_noon(2025, 6, 21), *TROMSO)
    assert result.status == "polar_day"
    for rising, setting in TWILIGHT_PAIRS:
        assert getattr(result, rising) is None, rising
        assert getattr(result, setting) is None, setting
    assert result.nadir_altitude > -0.83
    assert result.solar_noon is not None
    assert result.nadir is not None


def test_tromso_golden_hour_during_polar_day():
    result = compute_times(_noon(2025, 6, 21), *TROMSO)
    # The sun dips to about 3 degrees: it crosses 6 degrees but never -4.
    assert result.morning_golden_hour_end is not None
    assert result.evening_golden_hour_start is not None
    assert result.morning_golden_hour_start is None
    assert result.evening_golden_hour_end is None
    assert result.morning_blue_hour_start is None
    assert result.morning_blue_hour_end is None
    assert result.evening_blue_hour_start is None
    assert result.evening_blue_hour_end is None


def test_tromso_polar_night():
    result = compute_times(_noon(2025, 12, 21), *TROMSO)
    assert result.status == "polar_night"
    assert result.sunrise is None and result.sunset is None
    assert result.morning_golden_hour_end is None
    assert result.evening_golden_hour_start is None
    assert result.noon_altitude < -0.83
    assert result.dawn is not None and result.dusk is not None


def test_barrow_sunrise_without_civil_twilight():
    result = compute_times(_noon(2025, 5, 10), *BARROW)
    assert result.status == "ok"
    assert result.sunrise is not None and result.sunset is not None
    assert result.dawn is None and result.dusk is None
    assert result.nautical_dawn is None and result.nautical_dusk is None
    assert -1.5 < result.nadir_altitude < -0.83


@pytest.mark.parametrize("day", EQUATOR_DATES)
def test_equator_rapid_sunrise(day: date):
    result = compute_times(_noon(day.year, day.month, day.day), *EQUATOR)
    assert result.sunrise is not None and result.sunrise_end is not None
    duration = result.sunrise_end - result.sunrise
    assert timedelta(0) < duration < timedelta(minutes=5)
    for name, value in result.events().items():
        assert value is not None, name


def test_equinox_symmetry():
    result = compute_times(_noon(2025, 3, 20), *PRAGUE)
    morning = result.solar_noon - result.sunrise
    evening = result.sunset - result.solar_noon
    assert abs(morning - evening) < timedelta(minutes=10)


def test_south_pole_southern_summer():
    result = compute_times(_noon(2025, 12, 21), *SOUTH_POLE)
    assert result.status == "polar_day"
    assert result.sunrise is None and result.sunset is None
    assert all(value is None for value in result.events().values())
    assert result.solar_noon is not None
    assert result.nadir is not None


def test_north_pole_follows_declination():
    summer = compute_times(_noon(2025, 6, 21), 90.0, 0.0)
    winter = compute_times(_noon(2025, 12, 21), 90.0, 0.0)
    assert summer.status == "polar_day"
    assert winter.status == "polar_night"
    assert summer.sunrise is None and winter.sunrise is None


def test_position_at_solar_noon_faces_south():
    result = compute_times(_noon(2025, 6, 21), *PRAGUE)
    noon = position(result.solar_noon, *PRAGUE)
    assert abs(noon.azimuth_deg - 180.0) < 1.0
    assert 62.0 < noon.altitude_deg < 64.5
    before = position(result.solar_noon - timedelta(minutes=30), *PRAGUE)
    after = position(result.solar_noon + timedelta(minutes=30), *PRAGUE)
    assert before.altitude < noon.altitude
    assert after.altitude < noon.altitude
    assert before.azimuth_deg < 180.0 < after.azimuth_deg


def test_position_at_sunrise_is_at_threshold():
    result = compute_times(_noon(2025, 6, 21), *PRAGUE)
    at_sunrise = position(result.sunrise, *PRAGUE)
    assert abs(at_sunrise.altitude_deg - (-0.83)) < 0.2
    assert 0.0 < at_sunrise.azimuth_deg < 90.0


def test_position_accepts_non_utc_offsets():
    instant = datetime(2025, 6, 21, 12, tzinfo=UTC)
    shifted = instant.astimezone(timezone(timedelta(hours=2)))
    assert position(instant, *PRAGUE) == position(shifted, *PRAGUE)


@pytest.mark.parametrize(
    "latitude, longitude",
    [(90.5, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -181.0), (float("nan"), 0.0)],
)
def test_invalid_observer(latitude: float, longitude: float):
    with pytest.raises(ObserverError):
        compute_times(_noon(2025, 6, 21), latitude, longitude)
    with pytest.raises(ValueError):
        position(_noon(2025, 6, 21), latitude, longitude)


def test_naive_datetime_rejected():
    naive = datetime(2025, 6, 21, 12)
    with pytest.raises(ObserverError, match="timezone-aware"):
        compute_times(naive, *PRAGUE)
    with pytest.raises(ObserverError, match="timezone-aware"):
        position(naive, *PRAGUE)
    with pytest.raises(ObserverError):
        transit_and_nadir(naive, PRAGUE[1])
