"""Weather snapshot and forecast window models.

## Canonical Units
- Temperature: Celsius (°C), whole degrees
- Wind speed: kilometers per hour (km/h), whole numbers
- Pressure: hectopascals (hPa)
- Precipitation: millimeters (mm)
- Visibility: kilometers (km)
- Humidity: percentage (0-100)
- Wind direction: degrees (0-359, where 0=N, 90=E)
- Timestamps: timezone-aware UTC
"""

from __future__ import annotations

import math
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up.

    Python's round() uses banker's rounding, which would turn 22.5 into 22.
    """
    return math.floor(value + 0.5)


class WeatherSnapshot(BaseModel):
    """A single observation or forecast slot for a location."""

    model_config = ConfigDict(frozen=True)

    location: str = Field(..., description="Location name as reported by the provider")
    country: str | None = Field(default=None, description="ISO country code")

    temperature: float = Field(..., description="Temperature in Celsius")
    feels_like: float | None = Field(
        default=None, description="Feels-like temperature in Celsius"
    )
    humidity: float | None = Field(
        default=None, ge=0, le=100, description="Relative humidity percentage"
    )
    pressure: float | None = Field(
        default=None, description="Atmospheric pressure in hPa"
    )

    wind_speed: float = Field(default=0, ge=0, description="Wind speed in km/h")
    wind_direction: float | None = Field(
        default=None, description="Wind direction in degrees (0=N, 90=E)"
    )

    condition: str = Field(..., description="Condition label, e.g. 'Clear' or 'Rain'")
    description: str = Field(default="", description="Free-text condition description")
    precipitation: float = Field(
        default=0, ge=0, description="Precipitation in mm over the reporting window"
    )
    visibility: float | None = Field(
        default=None, ge=0, description="Visibility in kilometers"
    )

    timestamp: datetime = Field(..., description="Observation or forecast time (UTC)")

    @property
    def day(self) -> date:
        """Calendar day of this snapshot."""
        return self.timestamp.date()


class ForecastWindow(BaseModel):
    """Multi-day forecast for a location, one snapshot per forecast slot."""

    model_config = ConfigDict(frozen=True)

    location: str = Field(..., description="Location name as reported by the provider")
    country: str | None = Field(default=None, description="ISO country code")
    fetched_at: datetime = Field(..., description="When this window was retrieved")
    slots: tuple[WeatherSnapshot, ...] = Field(
        default=(), description="Forecast slots in ascending time order"
    )

    @model_validator(mode="after")
    def check_slot_order(self) -> "ForecastWindow":
        """Slots must be in ascending timestamp order."""
        times = [slot.timestamp for slot in self.slots]
        if times != sorted(times):
            raise ValueError("Forecast slots must be in ascending time order")
        return self

    def slot_for(self, day: date) -> WeatherSnapshot | None:
        """Get the first forecast slot falling on a calendar day."""
        for slot in self.slots:
            if slot.day == day:
                return slot
        return None

    def days(self) -> list[date]:
        """Distinct calendar days covered by this window."""
        return sorted({slot.day for slot in self.slots})
