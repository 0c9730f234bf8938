"""Suitability scoring and alternative date ranking."""

from event_weather.recommendations.suitability import (
    SuitabilityScorer,
    score_suitability,
)
from event_weather.recommendations.alternatives import (
    MAX_ALTERNATIVES,
    AlternativeDateRanker,
)

__all__ = [
    "SuitabilityScorer",
    "score_suitability",
    "MAX_ALTERNATIVES",
    "AlternativeDateRanker",
]
