"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from lunch_recommender.adapters.kakao_local_client import KakaoLocalClient
from lunch_recommender.adapters.kma_client import KmaClient
from lunch_recommender.config import Settings
from lunch_recommender.containers import AppContainer
from lunch_recommender.domain.meals import MealLogDraft, MealLogEntry
from lunch_recommender.services.cache import InMemoryCache
from lunch_recommender.services.meals import (
    MealLogRepository,
    MealLogService,
    TeamRepository,
)
from lunch_recommender.services.recommendations import RecommendationService
from lunch_recommender.services.search import RestaurantSearchService
from lunch_recommender.services.weather import WeatherService

NOW = datetime(2026, 10, 18, 3, 0, tzinfo=UTC)

_END_PAGE: dict[str, object] = {"documents": [], "meta": {"is_end": True}}


def kakao_place(  # noqa: PLR0913
    place_id: str,
    name: str = "식당",
    category_name: str = "음식점 > 한식 > 국밥",
    distance: str = "120",
    x: str = "127.0276",
    y: str = "37.4979",
) -> dict[str, object]:
    """Build a Kakao place document."""
    return {
        "id": place_id,
        "place_name": name,
        "category_name": category_name,
        "address_name": "서울 강남구 역삼동 1",
        "road_address_name": "서울 강남구 테헤란로 1",
        "phone": "02-000-0000",
        "place_url": f"http://place.map.kakao.com/{place_id}",
        "distance": distance,
        "x": x,
        "y": y,
    }


def kakao_page(places: list[dict[str, object]], is_end: bool) -> dict[str, object]:
    return {"documents": places, "meta": {"is_end": is_end}}


def kma_payload(
    items: list[dict[str, str]], result_code: str = "00", result_msg: str = "OK"
) -> dict[str, object]:
    """Build a KMA ultra-short forecast response."""
    return {
        "response": {
            "header": {"resultCode": result_code, "resultMsg": result_msg},
            "body": {"items": {"item": items}},
        }
    }


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    logs: list[tuple[UUID, MealLogEntry]] = field(default_factory=list)
    fail: bool = False

    def add(
        self,
        user_id: UUID,
        restaurant_id: str,
        category: str,
        ate_at: datetime,
        restaurant_name: str = "",
    ) -> MealLogEntry:
        entry = MealLogEntry(
            id=str(uuid4()),
            restaurant_id=restaurant_id,
            restaurant_name=restaurant_name,
            category=category,
            ate_at=ate_at,
        )
        self.logs.append((user_id, entry))
        return entry

    def list_meal_logs(self, user_id: UUID, since: datetime) -> list[MealLogEntry]:
        if self.fail:
            raise RuntimeError("database unavailable")
        entries = [
            entry
            for owner, entry in self.logs
            if owner == user_id and entry.ate_at >= since
        ]
        return sorted(entries, key=lambda entry: entry.ate_at, reverse=True)

    def create_meal_log(self, user_id: UUID, draft: MealLogDraft) -> MealLogEntry:
        if self.fail:
            raise RuntimeError("database unavailable")
        entry = MealLogEntry(
            id=str(uuid4()),
            restaurant_id=draft.restaurant_id,
            restaurant_name=draft.restaurant_name,
            category=draft.category,
            ate_at=draft.ate_at,
            weather=draft.weather,
            mood=draft.mood,
        )
        self.logs.append((user_id, entry))
        return entry

    def create_meal_logs(self, user_ids: list[UUID], draft: MealLogDraft) -> int:
        for user_id in user_ids:
            self.create_meal_log(user_id, draft)
        return len(user_ids)


@dataclass
class InMemoryTeamRepository(TeamRepository):
    """In-memory team membership for tests."""

    members: dict[UUID, list[UUID]] = field(default_factory=dict)

    def list_member_ids(self, team_id: UUID) -> list[UUID]:
        return list(self.members.get(team_id, []))


@dataclass
class FakeKakaoLocalClient(KakaoLocalClient):
    """Fake Kakao client serving canned pages."""

    address_documents: list[dict[str, object]] = field(default_factory=list)
    keyword_pages: list[dict[str, object]] = field(default_factory=list)
    category_pages: dict[int, list[dict[str, object]]] = field(default_factory=dict)
    reverse_documents: list[dict[str, object]] = field(default_factory=list)
    calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    async def search_address(self, query: str) -> dict[str, object]:
        self.calls.append(("address", {"query": query}))
        return {"documents": self.address_documents}

    async def search_keyword(  # noqa: PLR0913
        self,
        query: str,
        *,
        category_group_code: str | None = None,
        x: str | None = None,
        y: str | None = None,
        radius: int | None = None,
        page: int = 1,
        size: int = 15,
    ) -> dict[str, object]:
        self.calls.append(
            (
                "keyword",
                {
                    "query": query,
                    "category_group_code": category_group_code,
                    "page": page,
                },
            )
        )
        return _page(self.keyword_pages, page)

    async def search_category(  # noqa: PLR0913
        self,
        category_group_code: str,
        *,
        x: str,
        y: str,
        radius: int,
        page: int = 1,
        size: int = 15,
    ) -> dict[str, object]:
        self.calls.append(("category", {"radius": radius, "page": page}))
        return _page(self.category_pages.get(radius, []), page)

    async def coord_to_address(self, x: str, y: str) -> dict[str, object]:
        self.calls.append(("coord2address", {"x": x, "y": y}))
        return {"documents": self.reverse_documents}


def _page(pages: list[dict[str, object]], page: int) -> dict[str, object]:
    if page <= len(pages):
        return pages[page - 1]
    return _END_PAGE


@dataclass
class FakeKmaClient(KmaClient):
    """Fake KMA client returning a canned payload or raising."""

    payload: dict[str, object] = field(
        default_factory=lambda: kma_payload(
            [
                {"category": "T1H", "fcstValue": "18"},
                {"category": "SKY", "fcstValue": "3"},
                {"category": "PTY", "fcstValue": "1"},
            ]
        )
    )
    error: Exception | None = None
    calls: list[tuple[int, int, str, str]] = field(default_factory=list)

    async def get_ultra_short_forecast(
        self, nx: int, ny: int, base_date: str, base_time: str
    ) -> dict[str, object]:
        self.calls.append((nx, ny, base_date, base_time))
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        kakao_rest_api_key="kakao-key",
        kma_api_key=None,
    )


@pytest.fixture
def meal_log_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def team_repository() -> InMemoryTeamRepository:
    return InMemoryTeamRepository()


@pytest.fixture
def kakao_client() -> FakeKakaoLocalClient:
    return FakeKakaoLocalClient()


@pytest.fixture
def kma_client() -> FakeKmaClient:
    return FakeKmaClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    meal_log_repository: InMemoryMealLogRepository,
    team_repository: InMemoryTeamRepository,
    kakao_client: FakeKakaoLocalClient,
    kma_client: FakeKmaClient,
) -> AppContainer:
    meal_log_service = MealLogService(
        repository=meal_log_repository,
        team_repository=team_repository,
    )
    search_service = RestaurantSearchService(kakao_client)
    weather_service = WeatherService(client=kma_client, cache=InMemoryCache())
    recommendation_service = RecommendationService(
        meal_log_service=meal_log_service,
        search_service=search_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        meal_log_service=meal_log_service,
        search_service=search_service,
        weather_service=weather_service,
        recommendation_service=recommendation_service,
        close_resources=close_resources,
    )
