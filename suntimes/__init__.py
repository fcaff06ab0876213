"""Sunrise, sunset and solar altitude for a date and location."""

from .astro import (
    TWILIGHT_ANGLES,
    InvalidInputError,
    NoSunEventError,
    compute_altitude,
    compute_altitudes,
    compute_day_status,
    compute_sun_times,
    expect_sun_times,
)
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
    "DayStatus",
    "GeoCoordinate",
    "SunTimes",
    "Twilight",
]
