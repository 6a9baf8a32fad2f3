"""FastAPI application exposing sun position and solar times."""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, time as dt_time, timedelta, timezone
from typing import Callable, Optional, Type, TypeVar

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from models import (
    ErrorResponse,
    HealthResponse,
    PositionQueryParams,
    PositionResponse,
    RangeQueryParams,
    RangeResponse,
    SolarEvents,
    TimesQueryParams,
    TimesResponse,
)
from suncalc import SolarTimes, __version__, compute_times, compute_times_range, position
from suncalc.settings import load_settings

SETTINGS = load_settings()

logging.basicConfig(level=SETTINGS.log_level, format="%(message)s")
LOGGER = logging.getLogger("suncalc-api")

QueryModel = TypeVar("QueryModel", bound=BaseModel)

APP_DESCRIPTION = (
    "Sun position, sunrise/sunset, twilight, golden and blue hour times"
)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - exercised in integration tests
    LOGGER.info(
        json.dumps(
            {
                "event": "startup",
                "version": __version__,
                "n_jobs": SETTINGS.n_jobs,
                "max_range_days": SETTINGS.max_range_days,
            }
        )
    )
    yield


app = FastAPI(
    title="SunCalc API",
    description=APP_DESCRIPTION,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _format_local(dt: Optional[datetime], offset_hours: Optional[float]) -> Optional[str]:
    if dt is None or offset_hours is None:
        return None
    offset = timezone(timedelta(hours=offset_hours))
    return dt.astimezone(offset).isoformat()


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


def _query_params(model: Type[QueryModel]) -> Callable[[Request], QueryModel]:
    """Build a dependency validating the query string against *model*."""

    def dependency(request: Request) -> QueryModel:
        try:
            return model.model_validate(dict(request.query_params))
        except ValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc

    return dependency


def _times_response(
    result: SolarTimes,
    day: date,
    lat: float,
    lon: float,
    offset_hours: Optional[float],
) -> TimesResponse:
    events = result.events()
    events_local = None
    if offset_hours is not None:
        events_local = SolarEvents(
            **{name: _format_local(value, offset_hours) for name, value in events.items()}
        )
    return TimesResponse(
        status=result.status,
        date_utc=day,
        latitude=lat,
        longitude=lon,
        solar_noon_utc=_format_utc(result.solar_noon),
        nadir_utc=_format_utc(result.nadir),
        noon_altitude_deg=result.noon_altitude,
        nadir_altitude_deg=result.nadir_altitude,
        events_utc=SolarEvents(
            **{name: _format_utc(value) for name, value in events.items()}
        ),
        offset_hours=offset_hours,
        events_local=events_local,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, version=__version__)


@app.get(
    "/position",
    response_model=PositionResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def position_endpoint(
    params: PositionQueryParams = Depends(_query_params(PositionQueryParams)),
) -> PositionResponse:
    start_time = time.perf_counter()
    try:
        result = position(params.time_utc, params.lat, params.lon)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    duration_ms = (time.perf_counter() - start_time) * 1000.0
    LOGGER.info(
        json.dumps(
            {
                "event": "position",
                "lat": params.lat,
                "lon": params.lon,
                "time": _format_utc(params.time_utc),
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return PositionResponse(
        time_utc=_format_utc(params.time_utc),
        latitude=params.lat,
        longitude=params.lon,
        altitude=result.altitude,
        azimuth=result.azimuth,
        altitude_deg=result.altitude_deg,
        azimuth_deg=result.azimuth_deg,
    )


@app.get(
    "/times",
    response_model=TimesResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def times_endpoint(
    params: TimesQueryParams = Depends(_query_params(TimesQueryParams)),
) -> TimesResponse:
    start_time = time.perf_counter()
    try:
        result = compute_times(
            datetime.combine(params.date_utc, dt_time(12, 0), tzinfo=UTC),
            params.lat,
            params.lon,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    duration_ms = (time.perf_counter() - start_time) * 1000.0
    response = _times_response(
        result, params.date_utc, params.lat, params.lon, params.offset_hours
    )

    LOGGER.info(
        json.dumps(
            {
                "event": "times",
                "lat": params.lat,
                "lon": params.lon,
                "date": params.date_utc.isoformat(),
                "status": response.status,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response


@app.get(
    "/times/range",
    response_model=RangeResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def times_range_endpoint(
    params: RangeQueryParams = Depends(_query_params(RangeQueryParams)),
) -> RangeResponse:
    if params.days > SETTINGS.max_range_days:
        raise HTTPException(
            status_code=400,
            detail=f"days must not exceed {SETTINGS.max_range_days}",
        )
    start_time = time.perf_counter()
    try:
        results = compute_times_range(params.start, params.days, params.lat, params.lon)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    duration_ms = (time.perf_counter() - start_time) * 1000.0
    days = [
        _times_response(
            result,
            params.start + timedelta(days=offset),
            params.lat,
            params.lon,
            params.offset_hours,
        )
        for offset, result in enumerate(results)
    ]

    LOGGER.info(
        json.dumps(
            {
                "event": "times_range",
                "lat": params.lat,
                "lon": params.lon,
                "start": params.start.isoformat(),
                "days": params.days,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return RangeResponse(days=days)
