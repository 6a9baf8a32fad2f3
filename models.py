"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _check_offset_hours(value: Optional[float]) -> Optional[float]:
    if value is None:
        return value
    if not -24.0 <= value <= 24.0:
        raise ValueError("offset_hours must be within ±24 hours")
    return value


class PositionQueryParams(BaseModel):
    """Validated query parameters for the ``/position`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    time_utc: datetime = Field(
        ..., alias="time", description="Instant (ISO-8601 with UTC offset)"
    )


class TimesQueryParams(BaseModel):
    """Validated query parameters for the ``/times`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    date_utc: date = Field(..., alias="date", description="UTC calendar date (YYYY-MM-DD)")
    offset_hours: Optional[float] = Field(
        None,
        description="Optional fixed offset in hours applied to derive local times",
    )

    @field_validator("offset_hours")
    def validate_offset_hours(cls, value: Optional[float]) -> Optional[float]:
        return _check_offset_hours(value)


class RangeQueryParams(BaseModel):
    """Validated query parameters for the ``/times/range`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    start: date = Field(..., description="First UTC calendar date (YYYY-MM-DD)")
    days: int = Field(..., ge=1, description="Number of consecutive dates")
    offset_hours: Optional[float] = Field(
        None,
        description="Optional fixed offset in hours applied to derive local times",
    )

    @field_validator("offset_hours")
    def validate_offset_hours(cls, value: Optional[float]) -> Optional[float]:
        return _check_offset_hours(value)


class PositionResponse(BaseModel):
    """Sun position for one instant."""

    ok: bool = True
    time_utc: str = Field(..., description="Instant in UTC (ISO-8601)")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    altitude: float = Field(..., description="Altitude in radians above the horizon")
    azimuth: float = Field(
        ..., description="Azimuth in radians from south, positive towards west"
    )
    altitude_deg: float = Field(..., description="Altitude in degrees")
    azimuth_deg: float = Field(
        ..., description="Compass azimuth in degrees, 0 at north, in [0, 360)"
    )


class SolarEvents(BaseModel):
    """Event instants, ``None`` when the threshold is not crossed that day."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    sunrise_end: Optional[str] = None
    sunset_start: Optional[str] = None
    dawn: Optional[str] = None
    dusk: Optional[str] = None
    nautical_dawn: Optional[str] = None
    nautical_dusk: Optional[str] = None
    night_end: Optional[str] = None
    night: Optional[str] = None
    morning_golden_hour_start: Optional[str] = None
    morning_golden_hour_end: Optional[str] = None
    evening_golden_hour_start: Optional[str] = None
    evening_golden_hour_end: Optional[str] = None
    morning_blue_hour_start: Optional[str] = None
    morning_blue_hour_end: Optional[str] = None
    evening_blue_hour_start: Optional[str] = None
    evening_blue_hour_end: Optional[str] = None


class TimesResponse(BaseModel):
    """Successful solar times response payload."""

    ok: bool = True
    status: str = Field(..., description="Sunrise/sunset status for the day")
    date_utc: date = Field(..., description="Requested UTC date")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    solar_noon_utc: str = Field(..., description="Solar noon in UTC (ISO-8601)")
    nadir_utc: str = Field(..., description="Solar midnight in UTC (ISO-8601)")
    noon_altitude_deg: float = Field(..., description="Sun altitude at solar noon")
    nadir_altitude_deg: float = Field(..., description="Sun altitude at solar midnight")
    events_utc: SolarEvents
    offset_hours: Optional[float] = Field(
        None, description="User-specified offset in hours"
    )
    events_local: Optional[SolarEvents] = Field(
        None, description="Events expressed in local time when offset provided"
    )


class RangeResponse(BaseModel):
    """Solar times for consecutive dates."""

    ok: bool = True
    days: List[TimesResponse]


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    version: str


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
