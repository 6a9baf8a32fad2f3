"""Solar times for consecutive days, optionally computed in parallel."""

from __future__ import annotations

import json
import logging
from datetime import UTC, date, datetime, time, timedelta
from typing import List, Optional

from joblib import Parallel, cpu_count, delayed

from .astro import SolarTimes, compute_times
from .settings import load_settings

__all__ = ["compute_times_range"]

LOGGER = logging.getLogger(__name__)


def _times_for_day(day: date, latitude: float, longitude: float) -> SolarTimes:
    return compute_times(datetime.combine(day, time(12, 0), tzinfo=UTC), latitude, longitude)


def compute_times_range(
    start_date: date,
    days: int,
    latitude: float,
    longitude: float,
    n_jobs: Optional[int] = None,
) -> List[SolarTimes]:
    """Compute :class:`SolarTimes` for *days* consecutive UTC dates.

    Parameters
    ----------
    start_date:
        First UTC calendar date.
    days:
        Number of dates, at least one.
    latitude, longitude:
        Geographic coordinates in degrees.
    n_jobs:
        joblib worker count. ``None`` uses ``SUNCALC_N_JOBS``; values above
        one dispatch the days to a :class:`joblib.Parallel` pool.

    Returns
    -------
    list[SolarTimes]
        One entry per date, in date order.
    """

    if days < 1:
        raise ValueError(f"days must be positive, got {days}")
    if n_jobs is None:
        n_jobs = load_settings().n_jobs
    dates = [start_date + timedelta(days=offset) for offset in range(days)]

    n_jobs = max(1, min(n_jobs, cpu_count(), len(dates)))
    if n_jobs == 1:
        results = [_times_for_day(day, latitude, longitude) for day in dates]
    else:
        results = Parallel(n_jobs=n_jobs)(
            delayed(_times_for_day)(day, latitude, longitude) for day in dates
        )

    LOGGER.debug(
        json.dumps(
            {
                "event": "solar_times_range",
                "lat": latitude,
                "lon": longitude,
                "start": start_date.isoformat(),
                "days": days,
                "n_jobs": n_jobs,
            }
        )
    )
    return list(results)
