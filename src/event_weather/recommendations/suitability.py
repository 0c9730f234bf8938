"""Weather suitability scoring for event categories.

Each of four factors is scored independently against the event category's
profile, and the weighted contributions are summed into a 0-100 score.

## Factor Tiers

| Factor | Full weight | Partial weight | Remainder |
|--------|-------------|----------------|-----------|
| Temperature | within [min, max] | 70% within 5°C of the range | 30% |
| Precipitation | <= max | 50% up to 2x max | 0% |
| Wind | <= max | 70% up to 1.5x max | 30% |
| Condition | label contains a "good" term | 70% for an "okay" term | 30% |

The final score is rounded half-up and bucketed into a `Rating`
(Excellent >= 80, Good >= 60, Okay >= 40, else Poor).

Scoring is pure: the same snapshot and category always give the same result.
"""

from __future__ import annotations

from dataclasses import dataclass

from event_weather.models.profile import EventTypeProfile, get_profile
from event_weather.models.suitability import (
    FactorRating,
    Rating,
    SuitabilityFactors,
    SuitabilityResult,
)
from event_weather.models.weather import WeatherSnapshot, round_half_up

TEMPERATURE_MARGIN_C = 5


@dataclass
class FactorScore:
    """Outcome of scoring a single factor."""

    rating: FactorRating
    fraction: float  # share of the factor's weight awarded
    recommendation: str | None = None

    def points(self, weight: int) -> float:
        return weight * self.fraction


class SuitabilityScorer:
    """Scores weather snapshots against event type profiles.

    Example:
        ```python
        scorer = SuitabilityScorer()
        result = scorer.score(snapshot, "wedding")
        print(result.score, result.rating)
        ```
    """

    def score(self, snapshot: WeatherSnapshot, category: str) -> SuitabilityResult:
        """Score a snapshot for an event category.

        Args:
            snapshot: Weather observation or forecast slot
            category: Event category (case-insensitive, unknown falls back
                to the outdoor sports profile)

        Returns:
            SuitabilityResult with score, rating, factor labels and advice
        """
        profile = get_profile(category)

        temperature = self._score_temperature(snapshot.temperature, profile, category)
        precipitation = self._score_precipitation(snapshot.precipitation, profile)
        wind = self._score_wind(snapshot.wind_speed, profile)
        condition = self._score_condition(snapshot.condition, profile)

        weights = profile.weights
        total = (
            temperature.points(weights.temperature)
            + precipitation.points(weights.precipitation)
            + wind.points(weights.wind)
            + condition.points(weights.condition)
        )
        score = min(100, max(0, round_half_up(total)))

        recommendations = [
            factor.recommendation
            for factor in (temperature, precipitation, wind, condition)
            if factor.recommendation
        ]

        return SuitabilityResult(
            score=score,
            rating=Rating.from_score(score),
            factors=SuitabilityFactors(
                temperature=temperature.rating,
                precipitation=precipitation.rating,
                wind=wind.rating,
                condition=condition.rating,
            ),
            recommendations=recommendations,
        )

    def _score_temperature(
        self, temp_c: float, profile: EventTypeProfile, category: str
    ) -> FactorScore:
        if profile.temperature.contains(temp_c):
            return FactorScore(FactorRating.EXCELLENT, 1.0)
        if profile.temperature.contains(temp_c, margin=TEMPERATURE_MARGIN_C):
            return FactorScore(FactorRating.GOOD, 0.7)
        return FactorScore(
            FactorRating.POOR,
            0.3,
            f"Temperature ({temp_c:g}°C) is not ideal for {category}",
        )

    def _score_precipitation(
        self, precipitation_mm: float, profile: EventTypeProfile
    ) -> FactorScore:
        limit = profile.max_precipitation_mm
        if precipitation_mm <= limit:
            return FactorScore(FactorRating.EXCELLENT, 1.0)
        if precipitation_mm <= limit * 2:
            return FactorScore(
                FactorRating.MODERATE,
                0.5,
                "Light rain expected - consider indoor backup",
            )
        return FactorScore(
            FactorRating.POOR,
            0.0,
            "Heavy rain expected - strongly consider rescheduling",
        )

    def _score_wind(self, wind_kmh: float, profile: EventTypeProfile) -> FactorScore:
        limit = profile.max_wind_speed_kmh
        if wind_kmh <= limit:
            return FactorScore(FactorRating.EXCELLENT, 1.0)
        if wind_kmh <= limit * 1.5:
            return FactorScore(FactorRating.MODERATE, 0.7)
        return FactorScore(
            FactorRating.POOR,
            0.3,
            f"High winds ({wind_kmh:g} km/h) may affect the event",
        )

    def _score_condition(self, condition: str, profile: EventTypeProfile) -> FactorScore:
        label = condition.lower()
        if any(term in label for term in profile.good_conditions):
            return FactorScore(FactorRating.EXCELLENT, 1.0)
        if any(term in label for term in profile.okay_conditions):
            return FactorScore(FactorRating.GOOD, 0.7)
        return FactorScore(FactorRating.POOR, 0.3)


def score_suitability(snapshot: WeatherSnapshot, category: str) -> SuitabilityResult:
    """Convenience function to score a snapshot with a default scorer."""
    return SuitabilityScorer().score(snapshot, category)
