"""Low-precision analytic solar ephemeris."""

from __future__ import annotations

import math
from dataclasses import dataclass

import erfa

from .timebasis import J2000

__all__ = [
    "EquatorialCoordinates",
    "equatorial_coordinates",
    "mean_anomaly",
    "ecliptic_longitude",
    "obliquity",
]

RAD = math.pi / 180.0

PERIHELION = RAD * 102.9372  # Longitude of perihelion of the Earth.


@dataclass(frozen=True)
class EquatorialCoordinates:
    """Geocentric equatorial coordinates of the sun, in radians."""

    declination: float
    right_ascension: float


def days_since_j2000(jd: float) -> float:
    return jd - J2000


def mean_anomaly(d: float) -> float:
    """Solar mean anomaly for *d* days since J2000."""

    return RAD * (357.5291 + 0.98560028 * d)


def equation_of_center(m: float) -> float:
    return RAD * (
        1.9148 * math.sin(m) + 0.02 * math.sin(2 * m) + 0.0003 * math.sin(3 * m)
    )


def ecliptic_longitude(m: float) -> float:
    """Apparent ecliptic longitude of the sun from its mean anomaly *m*."""

    return m + equation_of_center(m) + PERIHELION + math.pi


def obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic (IAU 2006) at *jd*."""

    return float(erfa.obl06(jd, 0.0))


def equatorial_coordinates(jd: float) -> EquatorialCoordinates:
    """Return the sun's declination and right ascension at Julian Date *jd*.

    Parameters
    ----------
    jd:
        Julian Date (UTC is used in place of TT; the difference is far below
        the precision of the model).

    Returns
    -------
    EquatorialCoordinates
        Declination in ``[-eps, eps]`` and right ascension in ``(-pi, pi]``.
    """

    longitude = ecliptic_longitude(mean_anomaly(days_since_j2000(jd)))
    eps = obliquity(jd)
    declination = math.asin(math.sin(eps) * math.sin(longitude))
    right_ascension = math.atan2(
        math.sin(longitude) * math.cos(eps), math.cos(longitude)
    )
    return EquatorialCoordinates(declination=declination, right_ascension=right_ascension)
