"""Suitability result models."""

from __future__ import annotations

import datetime as dt
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from event_weather.models.weather import WeatherSnapshot


class Rating(str, Enum):
    """Overall suitability bucket derived from the score."""

    EXCELLENT = "Excellent"  # score >= 80
    GOOD = "Good"  # score >= 60
    OKAY = "Okay"  # score >= 40
    POOR = "Poor"

    @classmethod
    def from_score(cls, score: int) -> "Rating":
        if score >= 80:
            return cls.EXCELLENT
        if score >= 60:
            return cls.GOOD
        if score >= 40:
            return cls.OKAY
        return cls.POOR


class FactorRating(str, Enum):
    """Qualitative label for a single scoring factor."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"


class SuitabilityFactors(BaseModel):
    """Per-factor labels for a suitability result."""

    temperature: FactorRating
    precipitation: FactorRating
    wind: FactorRating
    condition: FactorRating


class SuitabilityResult(BaseModel):
    """How well the weather fits an event category."""

    score: int = Field(..., ge=0, le=100, description="Overall score (0-100)")
    rating: Rating
    factors: SuitabilityFactors
    recommendations: list[str] = Field(
        default_factory=list, description="Human-readable advice, in factor order"
    )


class WeatherAnalysis(BaseModel):
    """Weather and suitability bundle for a stored event."""

    event_id: str | None = None
    weather: WeatherSnapshot
    suitability: SuitabilityResult
    analyzed_at: datetime


class Improvement(str, Enum):
    """Coarse tag for an alternative date's score."""

    BETTER = "Better"  # score > 70
    MODERATE = "Moderate"  # score > 50
    POOR = "Poor"

    @classmethod
    def from_score(cls, score: int) -> "Improvement":
        if score > 70:
            return cls.BETTER
        if score > 50:
            return cls.MODERATE
        return cls.POOR


class AlternativeDate(BaseModel):
    """A candidate day with its forecast and suitability."""

    date: dt.date
    weather: WeatherSnapshot
    suitability: SuitabilityResult
    improvement: Improvement


class AlternativeDates(BaseModel):
    """Ranked alternative dates for an event."""

    original_date: date
    alternatives: list[AlternativeDate] = Field(
        default_factory=list, description="Up to five candidates, best first"
    )
    best_alternative: AlternativeDate | None = None
