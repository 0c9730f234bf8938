"""Domain models for event weather planning."""

from event_weather.models.weather import ForecastWindow, WeatherSnapshot
from event_weather.models.profile import (
    EVENT_TYPE_PROFILES,
    DEFAULT_PROFILE,
    EventTypeProfile,
    FactorWeights,
    TemperatureRange,
    get_profile,
)
from event_weather.models.suitability import (
    AlternativeDate,
    AlternativeDates,
    FactorRating,
    Improvement,
    Rating,
    SuitabilityFactors,
    SuitabilityResult,
    WeatherAnalysis,
)
from event_weather.models.event import (
    Event,
    EventCategory,
    EventPage,
    Pagination,
)

__all__ = [
    # Weather
    "WeatherSnapshot",
    "ForecastWindow",
    # Profiles
    "EVENT_TYPE_PROFILES",
    "DEFAULT_PROFILE",
    "EventTypeProfile",
    "FactorWeights",
    "TemperatureRange",
    "get_profile",
    # Suitability
    "AlternativeDate",
    "AlternativeDates",
    "FactorRating",
    "Improvement",
    "Rating",
    "SuitabilityFactors",
    "SuitabilityResult",
    "WeatherAnalysis",
    # Event
    "Event",
    "EventCategory",
    "EventPage",
    "Pagination",
]
