"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    kakao_rest_api_key: str
    kakao_base_url: str = "https://dapi.kakao.com/v2/local"
    kma_api_key: str | None = None
    kma_base_url: str = "http://apis.data.go.kr/1360000/VilageFcstInfoService_2.0"
    meal_lookback_days: int = 7
    recommend_limit: int = 3
    search_radius_m: int = 500
    weather_cache_ttl_seconds: int = 600
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
