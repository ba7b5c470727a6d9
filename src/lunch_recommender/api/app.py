"""FastAPI application factory."""

import logging
import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lunch_recommender.api.schemas import (
    CenterPayload,
    CreateMealLogBody,
    CreateMealLogResponse,
    GridPayload,
    MealLogPayload,
    MealLogsResponse,
    RecommendDebug,
    RecommendRequestBody,
    RecommendResponse,
    RestaurantPayload,
    ScoredRestaurantPayload,
    SearchResponse,
    TeamMealLogBody,
    TeamMealLogResponse,
    WeatherPayload,
    WeatherResponse,
)
from lunch_recommender.app_logging import configure_logging
from lunch_recommender.containers import AppContainer
from lunch_recommender.domain.meals import MealLogEntry
from lunch_recommender.domain.restaurants import Restaurant, ScoredRestaurant
from lunch_recommender.domain.weather import WeatherSnapshot
from lunch_recommender.services.meals import TeamMembersNotFoundError
from lunch_recommender.services.recommendations import RecommendationRequest
from lunch_recommender.services.search import SearchResult

DEFAULT_LAT = 37.5665
DEFAULT_LNG = 126.9780


class ApiError(Exception):
    """Error answered as `{"error": message}` with a status code."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def create_app(container: AppContainer) -> FastAPI:  # noqa: C901, PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400, content={"error": "필수 필드가 누락되었습니다."}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/recommend")
    async def recommend(
        body: RecommendRequestBody, request: Request
    ) -> RecommendResponse:
        """Rank nearby restaurants for the user's weather, mood and history."""
        state_container: AppContainer = request.app.state.container
        weather = _to_weather(body.weather) if body.weather else None
        try:
            recommendation = await state_container.recommendation_service.recommend(
                RecommendationRequest(
                    user_id=body.user_id,
                    latitude=body.latitude,
                    longitude=body.longitude,
                    mood=body.mood,
                    weather=weather,
                    restaurants=(
                        [_to_restaurant(item) for item in body.restaurants]
                        if body.restaurants is not None
                        else None
                    ),
                    radius=body.radius or state_container.settings.search_radius_m,
                )
            )
        except Exception as exc:
            logger.exception("Recommendation failed")
            raise ApiError(500, "추천을 생성할 수 없습니다.") from exc

        return RecommendResponse(
            restaurants=[_scored_payload(item) for item in recommendation.restaurants],
            message=recommendation.message,
            debug=RecommendDebug(
                total_restaurants=recommendation.total_candidates,
                recent_meals_count=recommendation.recent_meal_count,
                weather_condition=recommendation.weather_condition,
                mood=recommendation.mood,
            ),
        )

    @app.get("/api/weather", response_model_exclude_none=True)
    async def weather(
        request: Request, lat: float = DEFAULT_LAT, lng: float = DEFAULT_LNG
    ) -> WeatherResponse:
        """Return current weather for a coordinate."""
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise ApiError(400, "유효하지 않은 좌표입니다.")
        state_container: AppContainer = request.app.state.container
        report = await state_container.weather_service.get_current(lat, lng)
        return WeatherResponse(
            weather=_weather_payload(report.weather),
            source=report.source,
            grid=(
                GridPayload(nx=report.grid.nx, ny=report.grid.ny)
                if report.grid
                else None
            ),
            error=report.error,
        )

    @app.get("/api/search", response_model_exclude_none=True)
    async def search(  # noqa: PLR0913
        request: Request,
        address: str | None = None,
        lat: float | None = None,
        lng: float | None = None,
        keyword: str | None = None,
        radius: int | None = Query(default=None, gt=0),
    ) -> SearchResponse:
        """Search restaurants by keyword, coordinates or address."""
        has_coords = lat is not None and lng is not None
        if not address and not has_coords and not keyword:
            raise ApiError(400, "주소, 좌표 또는 키워드를 입력해주세요.")
        state_container: AppContainer = request.app.state.container
        search_service = state_container.search_service
        radius = radius or state_container.settings.search_radius_m
        try:
            if keyword:
                result = await search_service.search_by_keyword(keyword)
            elif has_coords:
                result = await search_service.search_by_location(lat, lng, radius)
            else:
                result = await search_service.search_by_address(address, radius)
        except Exception as exc:
            logger.exception("Restaurant search failed")
            raise ApiError(500, "검색 중 오류가 발생했습니다.") from exc
        if result is None:
            raise ApiError(404, "주소를 찾을 수 없습니다.")
        return _search_response(result)

    @app.get("/api/meal-logs")
    async def list_meal_logs(
        request: Request,
        user_id: UUID = Query(alias="userId"),
        days: int = Query(default=7, ge=0),
    ) -> MealLogsResponse:
        """Return the user's meals within the last `days` days."""
        state_container: AppContainer = request.app.state.container
        try:
            entries = state_container.meal_log_service.list_recent(user_id, days=days)
        except Exception as exc:
            logger.exception("Failed to list meal logs", extra={"user_id": user_id})
            raise ApiError(500, "식사 기록을 조회할 수 없습니다.") from exc
        return MealLogsResponse(meal_logs=[_meal_payload(entry) for entry in entries])

    @app.post("/api/meal-logs")
    async def create_meal_log(
        body: CreateMealLogBody, request: Request
    ) -> CreateMealLogResponse:
        """Record a meal for a user."""
        state_container: AppContainer = request.app.state.container
        try:
            entry = state_container.meal_log_service.log_meal(
                user_id=body.user_id,
                restaurant_id=body.restaurant_id,
                restaurant_name=body.restaurant_name,
                category=body.category,
                weather=body.weather,
                mood=body.mood,
            )
        except Exception as exc:
            logger.exception("Failed to save meal log", extra={"user_id": body.user_id})
            raise ApiError(500, "식사 기록을 저장할 수 없습니다.") from exc
        return CreateMealLogResponse(meal_log=_meal_payload(entry))

    @app.post("/api/team-meal-logs")
    async def create_team_meal_log(
        body: TeamMealLogBody, request: Request
    ) -> TeamMealLogResponse:
        """Record a team lunch for every member of the team."""
        state_container: AppContainer = request.app.state.container
        try:
            count = state_container.meal_log_service.log_team_meal(
                team_id=body.team_id,
                restaurant_id=body.restaurant_id,
                restaurant_name=body.restaurant_name,
                category=body.category,
            )
        except TeamMembersNotFoundError as exc:
            raise ApiError(404, "팀 멤버를 조회할 수 없습니다.") from exc
        except Exception as exc:
            logger.exception(
                "Failed to save team meal log", extra={"team_id": body.team_id}
            )
            raise ApiError(500, "팀 식사 기록을 저장할 수 없습니다.") from exc
        return TeamMealLogResponse(count=count)

    return app


def _to_weather(payload: WeatherPayload) -> WeatherSnapshot:
    return WeatherSnapshot(
        condition=payload.condition,
        temperature=payload.temperature,
        description=payload.description,
        recommendations=list(payload.recommendations),
    )


def _to_restaurant(payload: RestaurantPayload) -> Restaurant:
    return Restaurant(
        id=payload.id,
        name=payload.name,
        category=payload.category,
        address=payload.address,
        distance=payload.distance,
        rating=payload.rating,
        phone=payload.phone,
        place_url=payload.place_url,
        x=payload.x,
        y=payload.y,
    )


def _restaurant_fields(restaurant: Restaurant) -> dict[str, object]:
    return {
        "id": restaurant.id,
        "name": restaurant.name,
        "category": restaurant.category,
        "address": restaurant.address,
        "distance": restaurant.distance,
        "rating": restaurant.rating,
        "phone": restaurant.phone,
        "place_url": restaurant.place_url,
        "x": restaurant.x,
        "y": restaurant.y,
    }


def _scored_payload(scored: ScoredRestaurant) -> ScoredRestaurantPayload:
    return ScoredRestaurantPayload(
        **_restaurant_fields(scored.restaurant),
        score=scored.score,
        reasons=list(scored.reasons),
    )


def _weather_payload(snapshot: WeatherSnapshot) -> WeatherPayload:
    return WeatherPayload(
        condition=snapshot.condition,
        temperature=snapshot.temperature,
        description=snapshot.description,
        recommendations=list(snapshot.recommendations),
    )


def _meal_payload(entry: MealLogEntry) -> MealLogPayload:
    return MealLogPayload(
        id=entry.id,
        restaurant_id=entry.restaurant_id,
        restaurant_name=entry.restaurant_name,
        category=entry.category,
        ate_at=entry.ate_at,
        weather=entry.weather,
        mood=entry.mood,
    )


def _search_response(result: SearchResult) -> SearchResponse:
    return SearchResponse(
        restaurants=[
            RestaurantPayload(**_restaurant_fields(item)) for item in result.restaurants
        ],
        total_count=len(result.restaurants),
        center=(
            CenterPayload(lat=result.center.lat, lng=result.center.lng)
            if result.center
            else None
        ),
        address=result.address,
        expanded_radius=result.expanded_radius,
    )
