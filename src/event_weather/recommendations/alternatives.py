"""Alternative date search for events with unsuitable weather.

Scans the days following an event's planned date, scores the forecast slot
for each day against the event's category and returns the best candidates.
It can:
- Skip days the forecast does not cover instead of failing
- Rank candidates by score, keeping forecast order for ties
- Tag each candidate as Better / Moderate / Poor
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Protocol

from event_weather.models.event import Event
from event_weather.models.suitability import (
    AlternativeDate,
    AlternativeDates,
    Improvement,
)
from event_weather.models.weather import ForecastWindow
from event_weather.recommendations.suitability import SuitabilityScorer

logger = logging.getLogger(__name__)

MAX_ALTERNATIVES = 5


class ForecastSource(Protocol):
    """Anything that can supply a forecast window by location."""

    async def get_forecast(self, location: str) -> ForecastWindow: ...


class AlternativeDateRanker:
    """Ranks the days after an event by forecast suitability.

    Example:
        ```python
        ranker = AlternativeDateRanker(source=weather_service)
        result = await ranker.rank(event, days_range=7)

        if result.best_alternative:
            print(f"Best day: {result.best_alternative.date}")
        ```
    """

    def __init__(
        self,
        source: ForecastSource,
        scorer: SuitabilityScorer | None = None,
        max_alternatives: int = MAX_ALTERNATIVES,
    ):
        """Initialize the ranker.

        Args:
            source: Cached forecast lookups
            scorer: Scorer used for each candidate day
            max_alternatives: Maximum number of candidates to return
        """
        self.source = source
        self.scorer = scorer if scorer is not None else SuitabilityScorer()
        self.max_alternatives = max_alternatives

    async def rank(self, event: Event, days_range: int = 7) -> AlternativeDates:
        """Find better dates for an event within days_range after it.

        Args:
            event: Event with location, date and category
            days_range: Number of following days to consider

        Returns:
            AlternativeDates with up to max_alternatives candidates, best first

        Raises:
            UpstreamUnavailable, LocationNotFound: If the forecast fetch fails
        """
        window = await self.source.get_forecast(event.location)
        return self.rank_window(window, event, days_range)

    def rank_window(
        self, window: ForecastWindow, event: Event, days_range: int
    ) -> AlternativeDates:
        """Rank candidate days from an already fetched forecast window."""
        candidates: list[AlternativeDate] = []

        for offset in range(1, days_range + 1):
            day = event.date + timedelta(days=offset)
            slot = window.slot_for(day)
            if slot is None:
                continue

            suitability = self.scorer.score(slot, event.event_type)
            candidates.append(
                AlternativeDate(
                    date=day,
                    weather=slot,
                    suitability=suitability,
                    improvement=Improvement.from_score(suitability.score),
                )
            )

        logger.debug(
            f"Scored {len(candidates)} of {max(days_range, 0)} days after "
            f"{event.date.isoformat()} for {event.location}"
        )

        # sorted() is stable, so equal scores keep forecast order
        ranked = sorted(candidates, key=lambda c: c.suitability.score, reverse=True)
        top = ranked[: self.max_alternatives]

        return AlternativeDates(
            original_date=event.date,
            alternatives=top,
            best_alternative=top[0] if top else None,
        )
