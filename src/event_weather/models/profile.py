"""Event type profiles defining weather tolerances per event category."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TemperatureRange(BaseModel):
    """Acceptable temperature range in Celsius."""

    model_config = ConfigDict(frozen=True)

    min_c: float = Field(..., description="Minimum comfortable temperature")
    max_c: float = Field(..., description="Maximum comfortable temperature")

    @model_validator(mode="after")
    def check_bounds(self) -> "TemperatureRange":
        if self.min_c > self.max_c:
            raise ValueError("min_c must not exceed max_c")
        return self

    def contains(self, temp_c: float, margin: float = 0) -> bool:
        """Check if a temperature lies within the range widened by margin."""
        return self.min_c - margin <= temp_c <= self.max_c + margin


class FactorWeights(BaseModel):
    """Share of the 100-point score given to each factor."""

    model_config = ConfigDict(frozen=True)

    temperature: int = Field(..., ge=0, le=100)
    precipitation: int = Field(..., ge=0, le=100)
    wind: int = Field(..., ge=0, le=100)
    condition: int = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def check_total(self) -> "FactorWeights":
        total = self.temperature + self.precipitation + self.wind + self.condition
        if total != 100:
            raise ValueError(f"Factor weights must sum to 100, got {total}")
        return self


class EventTypeProfile(BaseModel):
    """Weather tolerances for one event category."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Event category name (lower case)")
    temperature: TemperatureRange
    max_precipitation_mm: float = Field(..., gt=0)
    max_wind_speed_kmh: float = Field(..., gt=0)
    good_conditions: tuple[str, ...] = Field(
        ..., description="Condition substrings that score full weight"
    )
    okay_conditions: tuple[str, ...] = Field(
        default=(), description="Condition substrings that score 70% weight"
    )
    weights: FactorWeights


OUTDOOR_SPORTS = EventTypeProfile(
    name="outdoor sports",
    temperature=TemperatureRange(min_c=15, max_c=30),
    max_precipitation_mm=20,
    max_wind_speed_kmh=20,
    good_conditions=("clear", "sunny", "partly cloudy"),
    okay_conditions=("cloudy", "overcast"),
    weights=FactorWeights(temperature=30, precipitation=25, wind=20, condition=25),
)

WEDDING = EventTypeProfile(
    name="wedding",
    temperature=TemperatureRange(min_c=18, max_c=28),
    max_precipitation_mm=10,
    max_wind_speed_kmh=15,
    good_conditions=("clear", "sunny", "partly cloudy"),
    okay_conditions=("cloudy",),
    weights=FactorWeights(temperature=30, precipitation=30, wind=25, condition=15),
)

HIKING = EventTypeProfile(
    name="hiking",
    temperature=TemperatureRange(min_c=10, max_c=25),
    max_precipitation_mm=30,
    max_wind_speed_kmh=25,
    good_conditions=("clear", "sunny", "partly cloudy", "cloudy"),
    okay_conditions=("overcast", "mist"),
    weights=FactorWeights(temperature=25, precipitation=30, wind=20, condition=25),
)

CORPORATE = EventTypeProfile(
    name="corporate",
    temperature=TemperatureRange(min_c=16, max_c=26),
    max_precipitation_mm=15,
    max_wind_speed_kmh=18,
    good_conditions=("clear", "sunny", "partly cloudy"),
    okay_conditions=("cloudy",),
    weights=FactorWeights(temperature=25, precipitation=35, wind=20, condition=20),
)

EVENT_TYPE_PROFILES: dict[str, EventTypeProfile] = {
    profile.name: profile
    for profile in (OUTDOOR_SPORTS, WEDDING, HIKING, CORPORATE)
}

# Unrecognized categories (including festival, picnic and concert) score
# against the outdoor sports profile.
DEFAULT_PROFILE = OUTDOOR_SPORTS


def get_profile(category: str) -> EventTypeProfile:
    """Look up the profile for an event category (case-insensitive)."""
    return EVENT_TYPE_PROFILES.get(category.strip().lower(), DEFAULT_PROFILE)
