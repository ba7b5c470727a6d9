"""Lunch recommendation orchestration."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from lunch_recommender.domain.catalog import SAMPLE_RESTAURANTS
from lunch_recommender.domain.meals import MealLogEntry, Mood
from lunch_recommender.domain.restaurants import Restaurant, ScoredRestaurant
from lunch_recommender.domain.weather import WeatherCondition, WeatherSnapshot
from lunch_recommender.services.meals import MealLogService
from lunch_recommender.services.messages import compose_message
from lunch_recommender.services.ranking import DEFAULT_LIMIT, rank_restaurants
from lunch_recommender.services.scoring import ScoringContext
from lunch_recommender.services.search import DEFAULT_RADIUS_M, RestaurantSearchService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recommendation:
    """Ranked picks with the message shown to the user."""

    restaurants: list[ScoredRestaurant]
    message: str
    total_candidates: int
    recent_meal_count: int
    weather_condition: WeatherCondition | None = None
    mood: Mood | None = None


@dataclass(frozen=True)
class RecommendationRequest:
    """Inputs for a single recommendation."""

    user_id: UUID | None = None
    latitude: float | None = None
    longitude: float | None = None
    mood: Mood | None = None
    weather: WeatherSnapshot | None = None
    restaurants: list[Restaurant] | None = None
    radius: int = DEFAULT_RADIUS_M
    now: datetime | None = None


@dataclass
class RecommendationService:
    """Gathers candidates and history, then ranks and explains the picks."""

    meal_log_service: MealLogService
    search_service: RestaurantSearchService | None = None
    limit: int = DEFAULT_LIMIT
    fallback_catalog: tuple[Restaurant, ...] = field(
        default_factory=lambda: SAMPLE_RESTAURANTS
    )

    async def recommend(self, request: RecommendationRequest) -> Recommendation:
        """Return the top picks for a request."""
        now = request.now or datetime.now(tz=UTC)
        candidates = await self._collect_candidates(request)
        recent_meals = self._recent_meals(request.user_id, now)

        ranked = rank_restaurants(
            candidates,
            ScoringContext(
                weather=request.weather,
                recent_meals=recent_meals,
                mood=request.mood,
                now=now,
            ),
            limit=self.limit,
        )
        message = compose_message(ranked, weather=request.weather, mood=request.mood)
        _logger.info(
            "Recommendation: candidates=%s recent_meals=%s picks=%s",
            len(candidates),
            len(recent_meals),
            len(ranked),
        )
        return Recommendation(
            restaurants=ranked,
            message=message,
            total_candidates=len(candidates),
            recent_meal_count=len(recent_meals),
            weather_condition=request.weather.condition if request.weather else None,
            mood=request.mood,
        )

    async def _collect_candidates(
        self, request: RecommendationRequest
    ) -> list[Restaurant]:
        if request.restaurants is not None:
            return list(request.restaurants)
        if (
            self.search_service is not None
            and request.latitude is not None
            and request.longitude is not None
        ):
            result = await self.search_service.search_by_location(
                request.latitude, request.longitude, request.radius
            )
            return result.restaurants
        return list(self.fallback_catalog)

    def _recent_meals(self, user_id: UUID | None, now: datetime) -> list[MealLogEntry]:
        if user_id is None:
            return []
        try:
            return self.meal_log_service.list_recent(user_id, now=now)
        except Exception:
            _logger.exception(
                "Failed to load recent meals; ranking without history",
                extra={"user_id": str(user_id)},
            )
            return []
