"""Value and input models for sun-time computations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Twilight(str, Enum):
    """Enumeration of supported twilight definitions."""

    official = "official"
    civil = "civil"
    nautical = "nautical"
    astronomical = "astronomical"


class DayStatus(str, Enum):
    """Outcome of a sunrise/sunset computation for one calendar day."""

    ok = "ok"
    polar_day = "polar_day"
    polar_night = "polar_night"
    unrepresentable = "unrepresentable"
    spans_midnight = "spans_midnight"


class GeoCoordinate(BaseModel):
    """Validated observer position (degrees, east-positive longitude)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")


@dataclass(frozen=True)
class SunTimes:
    """Sunrise and sunset for one day, in local mean solar time.

    Both instants are timezone-aware and fall on the requested calendar date.
    """

    sunrise: datetime
    sunset: datetime

    def __post_init__(self) -> None:
        if not self.sunrise < self.sunset:
            raise ValueError("sunrise must precede sunset")

    @property
    def day_length(self) -> timedelta:
        return self.sunset - self.sunrise

    def in_utc(self) -> SunTimes:
        """Return the same pair of instants expressed in UTC."""

        return SunTimes(self.sunrise.astimezone(UTC), self.sunset.astimezone(UTC))
