"""Astronomical computations for sunrise, sunset and solar altitude."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, UTC, date, datetime, timedelta, timezone
from typing import Dict, Iterable, Optional, Union

import erfa
import numpy as np
from pydantic import ValidationError

from .models import DayStatus, GeoCoordinate, SunTimes, Twilight

__all__ = [
    "compute_sun_times",
    "compute_day_status",
    "expect_sun_times",
    "compute_altitude",
    "compute_altitudes",
    "InvalidInputError",
    "NoSunEventError",
    "TWILIGHT_ANGLES",
]

LOGGER = logging.getLogger(__name__)

TWILIGHT_ANGLES: Dict[str, float] = {
    "official": -0.833,
    "civil": -6.0,
    "nautical": -12.0,
    "astronomical": -18.0,
}

J2000 = 2451545.0  # Julian date of 2000-01-01 12:00 UT.
ARGUMENT_OF_PERIHELION = 102.9372  # Degrees.
AXIAL_TILT = 23.44  # Degrees.
SECONDS_PER_DAY = 86400.0


class InvalidInputError(ValueError):
    """Raised when a coordinate, date or option is outside its valid domain."""


class NoSunEventError(LookupError):
    """Raised by :func:`expect_sun_times` when the day has no sunrise/sunset."""

    def __init__(self, status: DayStatus) -> None:
        super().__init__(f"No sunrise/sunset on the requested day: {status.value}")
        self.status = status


@dataclass(frozen=True)
class _SunEvents:
    """Outcome of the sunrise equation for one day."""

    status: DayStatus
    times: Optional[SunTimes] = None


def _validate_coordinate(latitude: float, longitude: float) -> GeoCoordinate:
    try:
        return GeoCoordinate(latitude=latitude, longitude=longitude)
    except ValidationError as exc:
        messages = ", ".join(error["msg"] for error in exc.errors())
        raise InvalidInputError(
            f"Invalid coordinate ({latitude!r}, {longitude!r}): {messages}"
        ) from exc


def _validate_day(day: date) -> None:
    # datetime is a date subclass but carries time-of-day and tz semantics.
    if isinstance(day, datetime) or not isinstance(day, date):
        raise InvalidInputError(f"Expected a calendar date, got {type(day).__name__}")


def _horizon_dip_degrees(elev_m: float) -> float:
    """Depression of the apparent horizon for an observer *elev_m* metres up."""

    if not math.isfinite(elev_m):
        raise InvalidInputError(f"Elevation must be finite: {elev_m}")
    if elev_m <= 0:
        return 0.0
    return 2.076 * math.sqrt(elev_m) / 60.0


def _twilight_altitude_degrees(twilight: Union[str, Twilight], elev_m: float) -> float:
    try:
        base_altitude = TWILIGHT_ANGLES[Twilight(twilight).value]
    except ValueError as exc:
        raise InvalidInputError(f"Unsupported twilight selector: {twilight}") from exc
    return base_altitude - _horizon_dip_degrees(elev_m)


def _solar_terms(days):
    """Return declination (radians) and equation of time (days).

    *days* counts from J2000.0 in UT and may be a scalar or a numpy array. The
    equation of time is expressed as the transit delay, positive when apparent
    noon follows mean noon.
    """

    anomaly_deg = np.remainder(357.5291 + 0.98560028 * days, 360.0)
    anomaly = np.radians(anomaly_deg)
    center = (
        1.9148 * np.sin(anomaly)
        + 0.0200 * np.sin(2.0 * anomaly)
        + 0.0003 * np.sin(3.0 * anomaly)
    )
    ecliptic_longitude = np.radians(
        np.remainder(anomaly_deg + center + 180.0 + ARGUMENT_OF_PERIHELION, 360.0)
    )
    declination = np.arcsin(np.sin(ecliptic_longitude) * math.sin(math.radians(AXIAL_TILT)))
    equation_of_time = 0.0053 * np.sin(anomaly) - 0.0069 * np.sin(2.0 * ecliptic_longitude)
    return declination, equation_of_time


def _midnight_days(day: date) -> float:
    """Days from J2000.0 to 00:00 UT of *day*."""

    djm0, djm = erfa.cal2jd(day.year, day.month, day.day)
    return float(djm0 - J2000) + float(djm)


def _instant_days(instants: Iterable[datetime]) -> np.ndarray:
    """Days from J2000.0 (UT) for each timezone-aware instant."""

    values = list(instants)
    for instant in values:
        if not isinstance(instant, datetime) or instant.utcoffset() is None:
            raise InvalidInputError("instant must be a timezone-aware datetime")
    if not values:
        return np.empty(0, dtype=float)

    # Work from the local fields so instants near date.min/date.max never overflow.
    djm0, djm = erfa.cal2jd(
        np.array([value.year for value in values], dtype=np.int32),
        np.array([value.month for value in values], dtype=np.int32),
        np.array([value.day for value in values], dtype=np.int32),
    )
    seconds = np.array(
        [
            value.hour * 3600
            + value.minute * 60
            + value.second
            + value.microsecond / 1_000_000
            - value.utcoffset().total_seconds()
            for value in values
        ],
        dtype=float,
    )
    midnight = (np.asarray(djm0, dtype=float) - J2000) + np.asarray(djm, dtype=float)
    return midnight + seconds / SECONDS_PER_DAY


def _days_to_datetime(days: float) -> Optional[datetime]:
    """Convert days since J2000.0 to a UTC datetime rounded to the second.

    Returns ``None`` when the instant lies outside the range of :class:`datetime`.
    """

    year, month, day, fraction = erfa.jd2cal(J2000, days)
    if not MINYEAR <= int(year) <= MAXYEAR:
        return None
    midnight = datetime(int(year), int(month), int(day), tzinfo=UTC)
    try:
        return midnight + timedelta(seconds=round(float(fraction) * SECONDS_PER_DAY))
    except OverflowError:
        return None


def _local_mean_time(longitude: float) -> timezone:
    """Fixed-offset zone for local mean solar time at *longitude*."""

    return timezone(timedelta(seconds=round(longitude * 240.0)))


def _no_event(status: DayStatus, day: date, coordinate: GeoCoordinate) -> _SunEvents:
    LOGGER.debug(
        json.dumps(
            {
                "event": "no_sun_event",
                "date": day.isoformat(),
                "lat": coordinate.latitude,
                "lon": coordinate.longitude,
                "status": status.value,
            }
        )
    )
    return _SunEvents(status=status)


def _sun_events(
    day: date,
    latitude: float,
    longitude: float,
    elevation_m: float,
    twilight: Union[str, Twilight],
) -> _SunEvents:
    _validate_day(day)
    coordinate = _validate_coordinate(latitude, longitude)
    threshold = math.radians(_twilight_altitude_degrees(twilight, elevation_m))
    lat_rad = math.radians(coordinate.latitude)

    # Anchor on mean local noon of the requested day, not on UT noon.
    mean_noon = _midnight_days(day) + 0.5 - coordinate.longitude / 360.0
    declination, equation_of_time = (float(value) for value in _solar_terms(mean_noon))
    transit = mean_noon + equation_of_time

    cos_hour_angle = (
        math.sin(threshold) - math.sin(lat_rad) * math.sin(declination)
    ) / (math.cos(lat_rad) * math.cos(declination))
    if cos_hour_angle <= -1.0:
        return _no_event(DayStatus.polar_day, day, coordinate)
    if cos_hour_angle >= 1.0:
        return _no_event(DayStatus.polar_night, day, coordinate)

    hour_angle = math.degrees(math.acos(cos_hour_angle))
    rise_utc = _days_to_datetime(transit - hour_angle / 360.0)
    set_utc = _days_to_datetime(transit + hour_angle / 360.0)
    if rise_utc is None or set_utc is None:
        return _no_event(DayStatus.unrepresentable, day, coordinate)

    zone = _local_mean_time(coordinate.longitude)
    try:
        sunrise = rise_utc.astimezone(zone)
        sunset = set_utc.astimezone(zone)
    except OverflowError:
        return _no_event(DayStatus.unrepresentable, day, coordinate)

    if sunrise.date() != day or sunset.date() != day:
        return _no_event(DayStatus.spans_midnight, day, coordinate)
    if sunrise >= sunset:
        # The sun only grazes the threshold; nothing survives rounding to seconds.
        return _no_event(DayStatus.polar_night, day, coordinate)
    return _SunEvents(status=DayStatus.ok, times=SunTimes(sunrise=sunrise, sunset=sunset))


def compute_sun_times(
    day: date,
    latitude: float,
    longitude: float,
    elevation_m: float = 0.0,
    twilight: Union[str, Twilight] = Twilight.official,
) -> Optional[SunTimes]:
    """Compute sunrise and sunset for *day* at the given location.

    Parameters
    ----------
    day:
        Calendar date. Interpreted as a day of local mean solar time at
        *longitude*.
    latitude, longitude:
        Geographic coordinates in degrees (east-positive longitude).
    elevation_m:
        Observer elevation above mean sea level in meters.
    twilight:
        Twilight definition key; ``official`` is the usual sunrise/sunset.

    Returns
    -------
    SunTimes or None
        Sunrise and sunset in local mean solar time, both on *day*, or ``None``
        during polar day/night or when an instant cannot be represented.

    Raises
    ------
    InvalidInputError
        If any argument is outside its valid domain.
    """

    return _sun_events(day, latitude, longitude, elevation_m, twilight).times


def compute_day_status(
    day: date,
    latitude: float,
    longitude: float,
    elevation_m: float = 0.0,
    twilight: Union[str, Twilight] = Twilight.official,
) -> DayStatus:
    """Report why :func:`compute_sun_times` does or does not return times."""

    return _sun_events(day, latitude, longitude, elevation_m, twilight).status


def expect_sun_times(
    day: date,
    latitude: float,
    longitude: float,
    elevation_m: float = 0.0,
    twilight: Union[str, Twilight] = Twilight.official,
) -> SunTimes:
    """Like :func:`compute_sun_times` but raise :class:`NoSunEventError` instead of returning ``None``."""

    events = _sun_events(day, latitude, longitude, elevation_m, twilight)
    if events.times is None:
        raise NoSunEventError(events.status)
    return events.times


def compute_altitudes(
    instants: Iterable[datetime],
    latitude: float,
    longitude: float,
) -> np.ndarray:
    """Geometric altitude of the sun's centre, in degrees, for each instant.

    No refraction correction is applied and values below the horizon are
    returned as they are. At the instants returned by
    :func:`compute_sun_times` the altitude is close to -0.833 degrees.
    """

    coordinate = _validate_coordinate(latitude, longitude)
    days = _instant_days(instants)
    declination, equation_of_time = _solar_terms(days)
    # Whole days land on apparent local noon.
    hour_angle = 2.0 * np.pi * np.remainder(
        days + coordinate.longitude / 360.0 - equation_of_time, 1.0
    )
    lat_rad = math.radians(coordinate.latitude)
    sin_altitude = math.sin(lat_rad) * np.sin(declination) + math.cos(lat_rad) * np.cos(
        declination
    ) * np.cos(hour_angle)
    return np.degrees(np.arcsin(np.clip(sin_altitude, -1.0, 1.0)))


def compute_altitude(instant: datetime, latitude: float, longitude: float) -> float:
    """Geometric solar altitude in degrees at *instant* (timezone-aware)."""

    return float(compute_altitudes([instant], latitude, longitude)[0])
