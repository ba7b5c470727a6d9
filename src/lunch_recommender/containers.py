"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from lunch_recommender.adapters.kakao_local_client import HttpxKakaoLocalClient
from lunch_recommender.adapters.kma_client import HttpxKmaClient
from lunch_recommender.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from lunch_recommender.adapters.supabase_team_repository import SupabaseTeamRepository
from lunch_recommender.config import Settings
from lunch_recommender.services.cache import InMemoryCache
from lunch_recommender.services.meals import MealLogService
from lunch_recommender.services.recommendations import RecommendationService
from lunch_recommender.services.search import RestaurantSearchService
from lunch_recommender.services.weather import WeatherService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_log_service: MealLogService
    search_service: RestaurantSearchService
    weather_service: WeatherService
    recommendation_service: RecommendationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_log_service = MealLogService(
        repository=SupabaseMealLogRepository(supabase_client),
        team_repository=SupabaseTeamRepository(supabase_client),
        lookback_days=resolved_settings.meal_lookback_days,
    )
    kakao_client = HttpxKakaoLocalClient.create(
        api_key=resolved_settings.kakao_rest_api_key,
        base_url=resolved_settings.kakao_base_url,
    )
    search_service = RestaurantSearchService(kakao_client)
    kma_client = (
        HttpxKmaClient.create(
            service_key=resolved_settings.kma_api_key,
            base_url=resolved_settings.kma_base_url,
        )
        if resolved_settings.kma_api_key
        else None
    )
    weather_service = WeatherService(
        client=kma_client,
        cache=InMemoryCache(),
        cache_ttl_seconds=resolved_settings.weather_cache_ttl_seconds,
    )
    recommendation_service = RecommendationService(
        meal_log_service=meal_log_service,
        search_service=search_service,
        limit=resolved_settings.recommend_limit,
    )

    async def close_resources() -> None:
        await kakao_client.close()
        if kma_client is not None:
            await kma_client.close()

    return AppContainer(
        settings=resolved_settings,
        meal_log_service=meal_log_service,
        search_service=search_service,
        weather_service=weather_service,
        recommendation_service=recommendation_service,
        close_resources=close_resources,
    )
