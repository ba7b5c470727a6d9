"""Request and response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lunch_recommender.domain.meals import Mood
from lunch_recommender.domain.weather import WeatherCondition


class ApiModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RestaurantPayload(ApiModel):
    id: str
    name: str
    category: str
    address: str = ""
    distance: float | None = None
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    phone: str | None = None
    place_url: str | None = None
    x: float | None = None
    y: float | None = None


class ScoredRestaurantPayload(RestaurantPayload):
    score: float
    reasons: list[str]


class WeatherPayload(ApiModel):
    condition: WeatherCondition
    temperature: float
    description: str = ""
    recommendations: list[str] = Field(default_factory=list)


class RecommendRequestBody(ApiModel):
    user_id: UUID | None = None
    latitude: float | None = None
    longitude: float | None = None
    mood: Mood | None = None
    weather: WeatherPayload | None = None
    restaurants: list[RestaurantPayload] | None = None
    radius: int | None = Field(default=None, gt=0)


class RecommendDebug(ApiModel):
    total_restaurants: int
    recent_meals_count: int
    weather_condition: WeatherCondition | None = None
    mood: Mood | None = None


class RecommendResponse(ApiModel):
    restaurants: list[ScoredRestaurantPayload]
    message: str
    debug: RecommendDebug


class GridPayload(ApiModel):
    nx: int
    ny: int


class WeatherResponse(ApiModel):
    weather: WeatherPayload
    source: str
    grid: GridPayload | None = None
    error: str | None = None


class CenterPayload(ApiModel):
    lat: float
    lng: float


class SearchResponse(ApiModel):
    success: bool = True
    restaurants: list[RestaurantPayload]
    total_count: int
    center: CenterPayload | None = None
    address: str | None = None
    expanded_radius: int | None = None


class MealLogPayload(ApiModel):
    id: str | None = None
    restaurant_id: str
    restaurant_name: str
    category: str
    ate_at: datetime
    weather: str | None = None
    mood: str | None = None


class MealLogsResponse(ApiModel):
    meal_logs: list[MealLogPayload]


class CreateMealLogBody(ApiModel):
    user_id: UUID
    restaurant_id: str = Field(min_length=1)
    restaurant_name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    weather: str | None = None
    mood: str | None = None


class CreateMealLogResponse(ApiModel):
    success: bool = True
    meal_log: MealLogPayload


class TeamMealLogBody(ApiModel):
    team_id: UUID
    restaurant_id: str = Field(min_length=1)
    restaurant_name: str = Field(min_length=1)
    category: str = Field(min_length=1)


class TeamMealLogResponse(ApiModel):
    success: bool = True
    count: int
