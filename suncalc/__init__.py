"""Sun position and daylight/twilight times."""

from .astro import (
    EVENT_THRESHOLDS,
    Crossing,
    EventThreshold,
    HorizontalPosition,
    ObserverError,
    SolarTimes,
    compute_times,
    position,
    solve_threshold,
    times,
    transit_and_nadir,
)
from .batch import compute_times_range
from .ephemeris import EquatorialCoordinates, equatorial_coordinates
from .timebasis import from_julian_date, to_julian_date

__version__ = "1.0.0"

__all__ = [
    "EVENT_THRESHOLDS",
    "Crossing",
    "EquatorialCoordinates",
    "EventThreshold",
    "HorizontalPosition",
    "ObserverError",
    "SolarTimes",
    "compute_times",
    "compute_times_range",
    "equatorial_coordinates",
    "from_julian_date",
    "position",
    "solve_threshold",
    "times",
    "to_julian_date",
    "transit_and_nadir",
]
