"""Conversion between UTC instants and Julian Dates."""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta

import erfa

__all__ = ["J2000", "to_julian_date", "from_julian_date", "ensure_utc", "day_midpoint"]

J2000 = 2451545.0  # Julian Date of 2000-01-01 12:00 TT, used as UTC epoch here.
SECONDS_PER_DAY = 86400.0


def ensure_utc(dt: datetime) -> datetime:
    """Return *dt* converted to UTC; naive datetimes are rejected."""

    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return dt.astimezone(UTC)


def to_julian_date(dt: datetime) -> float:
    """Convert a timezone-aware instant into a continuous Julian Date.

    The calendar part goes through :func:`erfa.cal2jd`; the time of day is
    appended as a fraction of a 86400 s day (leap seconds are ignored).
    """

    dt_utc = ensure_utc(dt)
    djm0, djm = erfa.cal2jd(dt_utc.year, dt_utc.month, dt_utc.day)
    seconds = (
        dt_utc.hour * 3600
        + dt_utc.minute * 60
        + dt_utc.second
        + dt_utc.microsecond / 1_000_000
    )
    return float(djm0) + float(djm) + seconds / SECONDS_PER_DAY


def from_julian_date(jd: float) -> datetime:
    """Inverse of :func:`to_julian_date`, returning a UTC-aware datetime."""

    year, month, day, fraction = erfa.jd2cal(jd, 0.0)
    midnight = datetime(int(year), int(month), int(day), tzinfo=UTC)
    return midnight + timedelta(seconds=float(fraction) * SECONDS_PER_DAY)


def day_midpoint(day: date) -> float:
    """Julian Date of 12:00 UTC on *day*."""

    return to_julian_date(datetime.combine(day, time(12, 0), tzinfo=UTC))
