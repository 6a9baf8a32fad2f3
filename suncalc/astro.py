"""Solar position and rise/set/twilight times for an observer."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Dict, Optional, Tuple, Union

import numpy as np

from .ephemeris import RAD, ecliptic_longitude, equatorial_coordinates, mean_anomaly
from .timebasis import J2000, day_midpoint, ensure_utc, from_julian_date, to_julian_date

__all__ = [
    "EVENT_THRESHOLDS",
    "EventThreshold",
    "Crossing",
    "HorizontalPosition",
    "ObserverError",
    "SolarTimes",
    "compute_times",
    "position",
    "solve_threshold",
    "times",
    "transit_and_nadir",
]

LOGGER = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_POLAR_DAY = "polar_day"
STATUS_POLAR_NIGHT = "polar_night"

# Latitudes this close to a pole are treated as the pole itself.
POLE_EPSILON_DEG = 1e-9

J0 = 0.0009  # Offset of the mean solar transit from the integer day count.


class ObserverError(ValueError):
    """Raised when observer coordinates or the observation instant are invalid."""


@dataclass(frozen=True)
class EventThreshold:
    """A sun altitude whose crossings name a rising and a setting event."""

    altitude_deg: float
    rising: str
    setting: str


EVENT_THRESHOLDS: Tuple[EventThreshold, ...] = (
    EventThreshold(-0.83, "sunrise", "sunset"),
    EventThreshold(-0.3, "sunrise_end", "sunset_start"),
    EventThreshold(-6.0, "dawn", "dusk"),
    EventThreshold(-12.0, "nautical_dawn", "nautical_dusk"),
    EventThreshold(-18.0, "night_end", "night"),
    EventThreshold(6.0, "morning_golden_hour_end", "evening_golden_hour_start"),
    EventThreshold(-4.0, "morning_golden_hour_start", "evening_golden_hour_end"),
)


@dataclass(frozen=True)
class HorizontalPosition:
    """Sun position above the horizon.

    ``azimuth`` is measured from south, positive towards west; ``altitude``
    from the horizon, positive upwards. Both in radians.
    """

    azimuth: float
    altitude: float

    @property
    def altitude_deg(self) -> float:
        return math.degrees(self.altitude)

    @property
    def azimuth_deg(self) -> float:
        """Compass azimuth in ``[0, 360)`` degrees, 0 at north."""
        return (180.0 + math.degrees(self.azimuth)) % 360.0


@dataclass(frozen=True)
class Crossing:
    """Rising and setting instants of one altitude threshold."""

    rising: Optional[datetime]
    setting: Optional[datetime]
    status: str


@dataclass(frozen=True)
class SolarTimes:
    """Named solar events for one UTC calendar day and observer."""

    solar_noon: datetime
    nadir: datetime
    status: str
    noon_altitude: float
    nadir_altitude: float
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    sunrise_end: Optional[datetime] = None
    sunset_start: Optional[datetime] = None
    dawn: Optional[datetime] = None
    dusk: Optional[datetime] = None
    nautical_dawn: Optional[datetime] = None
    nautical_dusk: Optional[datetime] = None
    night_end: Optional[datetime] = None
    night: Optional[datetime] = None
    morning_golden_hour_start: Optional[datetime] = None
    morning_golden_hour_end: Optional[datetime] = None
    evening_golden_hour_start: Optional[datetime] = None
    evening_golden_hour_end: Optional[datetime] = None
    morning_blue_hour_start: Optional[datetime] = None
    morning_blue_hour_end: Optional[datetime] = None
    evening_blue_hour_start: Optional[datetime] = None
    evening_blue_hour_end: Optional[datetime] = None

    def events(self) -> Dict[str, Optional[datetime]]:
        """Return the optional event instants keyed by field name."""

        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if field.name not in _REQUIRED_FIELDS
        }


_REQUIRED_FIELDS = frozenset(
    {"solar_noon", "nadir", "status", "noon_altitude", "nadir_altitude"}
)


def _observer_radians(latitude: float, longitude: float) -> Tuple[float, float]:
    if not math.isfinite(latitude) or not -90.0 <= latitude <= 90.0:
        raise ObserverError(f"latitude must be within [-90, 90] degrees, got {latitude}")
    if not math.isfinite(longitude) or not -180.0 <= longitude <= 180.0:
        raise ObserverError(
            f"longitude must be within [-180, 180] degrees, got {longitude}"
        )
    return latitude * RAD, longitude * RAD


def _observer_instant(dt: datetime) -> datetime:
    try:
        return ensure_utc(dt)
    except ValueError as exc:
        raise ObserverError(str(exc)) from exc


def _sidereal_time(d: float, lon_rad: float) -> float:
    return RAD * (280.16 + 360.9856235 * d) + lon_rad


def _horizontal(hour_angle: float, phi: float, dec: float) -> HorizontalPosition:
    sin_alt = math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(
        hour_angle
    )
    altitude = math.asin(float(np.clip(sin_alt, -1.0, 1.0)))
    azimuth = math.atan2(
        math.sin(hour_angle),
        math.cos(hour_angle) * math.sin(phi) - math.tan(dec) * math.cos(phi),
    )
    return HorizontalPosition(azimuth=azimuth, altitude=altitude)


def position(dt: datetime, latitude: float, longitude: float) -> HorizontalPosition:
    """Compute the sun's altitude and azimuth for an observer at *dt*.

    Parameters
    ----------
    dt:
        Timezone-aware instant.
    latitude, longitude:
        Geographic coordinates in degrees (east-positive longitude).
    """

    phi, lon_rad = _observer_radians(latitude, longitude)
    jd = to_julian_date(_observer_instant(dt))
    coords = equatorial_coordinates(jd)
    hour_angle = _sidereal_time(jd - J2000, lon_rad) - coords.right_ascension
    return _horizontal(hour_angle, phi, coords.declination)


def transit_and_nadir(
    day: Union[date, datetime], longitude: float
) -> Tuple[float, float]:
    """Return the Julian Dates of solar noon and the preceding solar midnight.

    Only the UTC calendar date of *day* is used. The transit is first placed
    from the longitude alone on the integer solar cycle nearest 12:00 UTC,
    then corrected once by the equation of time of the ephemeris. When the
    correction pushes it more than half a day from 12:00 UTC, the adjacent
    cycle is used instead, so the transit always falls on the requested date.
    """

    if isinstance(day, datetime):
        day = _observer_instant(day).date()
    lw = -longitude * RAD
    midday = day_midpoint(day)
    cycle = math.floor(midday - J2000 - J0 - lw / (2 * math.pi) + 0.5)
    transit = _transit_for_cycle(cycle, lw)
    if transit - midday > 0.5:
        transit = _transit_for_cycle(cycle - 1, lw)
    elif midday - transit > 0.5:
        transit = _transit_for_cycle(cycle + 1, lw)
    return transit, transit - 0.5


def _transit_for_cycle(cycle: int, lw: float) -> float:
    approx = J0 + lw / (2 * math.pi) + cycle
    m = mean_anomaly(approx)
    lam = ecliptic_longitude(m)
    return J2000 + approx + 0.0053 * math.sin(m) - 0.0069 * math.sin(2 * lam)


def solve_threshold(
    threshold_deg: float, transit: float, phi: float, declination: float
) -> Crossing:
    """Find when the sun crosses *threshold_deg* around *transit*.

    Parameters
    ----------
    threshold_deg:
        Target altitude in degrees.
    transit:
        Julian Date of solar noon.
    phi:
        Observer latitude in radians.
    declination:
        Solar declination in radians, sampled at the transit.

    Returns
    -------
    Crossing
        Both instants when the threshold is crossed, otherwise neither, with
        ``status`` telling whether the sun stays above (``polar_day``) or
        below (``polar_night``) the threshold for the whole day.
    """

    h0 = threshold_deg * RAD
    if abs(phi) >= (90.0 - POLE_EPSILON_DEG) * RAD:
        # Altitude is constant over the day at the poles.
        altitude = math.copysign(declination, phi)
        status = STATUS_POLAR_DAY if altitude > h0 else STATUS_POLAR_NIGHT
        return Crossing(rising=None, setting=None, status=status)

    cos_h = (math.sin(h0) - math.sin(phi) * math.sin(declination)) / (
        math.cos(phi) * math.cos(declination)
    )
    if cos_h > 1.0:
        return Crossing(rising=None, setting=None, status=STATUS_POLAR_NIGHT)
    if cos_h < -1.0:
        return Crossing(rising=None, setting=None, status=STATUS_POLAR_DAY)

    offset = math.acos(cos_h) / (2 * math.pi)
    return Crossing(
        rising=from_julian_date(transit - offset),
        setting=from_julian_date(transit + offset),
        status=STATUS_OK,
    )


def _blue_hours(events: Dict[str, Optional[datetime]]) -> Dict[str, Optional[datetime]]:
    blue: Dict[str, Optional[datetime]] = dict.fromkeys(
        (
            "morning_blue_hour_start",
            "morning_blue_hour_end",
            "evening_blue_hour_start",
            "evening_blue_hour_end",
        )
    )
    if events["dawn"] is not None and events["morning_golden_hour_start"] is not None:
        blue["morning_blue_hour_start"] = events["dawn"]
        blue["morning_blue_hour_end"] = events["morning_golden_hour_start"]
    if events["evening_golden_hour_end"] is not None and events["dusk"] is not None:
        blue["evening_blue_hour_start"] = events["evening_golden_hour_end"]
        blue["evening_blue_hour_end"] = events["dusk"]
    return blue


def compute_times(dt: datetime, latitude: float, longitude: float) -> SolarTimes:
    """Compute solar noon, nadir and every named event for the day of *dt*.

    Parameters
    ----------
    dt:
        Timezone-aware instant; only its UTC calendar date matters.
    latitude, longitude:
        Geographic coordinates in degrees (east-positive longitude).

    Returns
    -------
    SolarTimes
        Event instants in UTC. Events whose threshold is not crossed that
        day are ``None``.
    """

    phi, _ = _observer_radians(latitude, longitude)
    day = _observer_instant(dt).date()
    transit, nadir = transit_and_nadir(day, longitude)
    declination = equatorial_coordinates(transit).declination

    events: Dict[str, Optional[datetime]] = {}
    crossings = []
    for threshold in EVENT_THRESHOLDS:
        crossing = solve_threshold(threshold.altitude_deg, transit, phi, declination)
        events[threshold.rising] = crossing.rising
        events[threshold.setting] = crossing.setting
        crossings.append(crossing)
    # Day status follows the sunrise/sunset threshold.
    status = crossings[0].status
    events.update(_blue_hours(events))

    solar_noon = from_julian_date(transit)
    solar_nadir = from_julian_date(nadir)
    noon_altitude = position(solar_noon, latitude, longitude).altitude_deg
    nadir_altitude = position(solar_nadir, latitude, longitude).altitude_deg

    LOGGER.debug(
        json.dumps(
            {
                "event": "solar_times",
                "lat": latitude,
                "lon": longitude,
                "date": day.isoformat(),
                "status": status,
            }
        )
    )
    return SolarTimes(
        solar_noon=solar_noon,
        nadir=solar_nadir,
        status=status,
        noon_altitude=noon_altitude,
        nadir_altitude=nadir_altitude,
        **events,
    )


times = compute_times
