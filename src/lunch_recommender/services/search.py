"""Nearby restaurant search on top of Kakao Local."""

import logging
from dataclasses import dataclass, field

import httpx

from lunch_recommender.adapters.kakao_local_client import (
    RESTAURANT_GROUP_CODE,
    KakaoLocalClient,
)
from lunch_recommender.domain.restaurants import Restaurant

_logger = logging.getLogger(__name__)

DEFAULT_RADIUS_M = 500
MIN_RESULTS = 20
EXPANSION_RADII_M = (1500, 2000, 3000, 5000)
MAX_PAGES = 3
PAGE_SIZE = 15
UNKNOWN_CATEGORY = "기타"
CURRENT_LOCATION_LABEL = "현재 위치"
_MIN_PATH_SEGMENTS = 2

# Cafes and bars are not lunch options. Matching is by substring, so "바"
# also drops paths such as "바베큐".
EXCLUDED_KEYWORDS = (
    "카페",
    "커피",
    "술집",
    "주점",
    "호프",
    "바",
    "포장마차",
    "와인",
    "칵테일",
    "이자카야",
)

_CATEGORY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("한식", ("한식",)),
    ("중식", ("중식", "중국")),
    ("일식", ("일식", "초밥")),
    ("양식", ("양식", "이탈리안")),
    ("분식", ("분식",)),
    ("패스트푸드", ("패스트푸드", "햄버거", "피자")),
    ("아시안", ("아시안", "베트남", "태국")),
)


@dataclass(frozen=True)
class Coordinates:
    """WGS84 point; Kakao calls longitude x and latitude y."""

    lat: float
    lng: float


@dataclass(frozen=True)
class SearchResult:
    """Restaurants found for a search request."""

    restaurants: list[Restaurant] = field(default_factory=list)
    center: Coordinates | None = None
    address: str | None = None
    expanded_radius: int | None = None


def normalize_category(category_name: str) -> str:
    """Fold a Kakao category path like "음식점 > 한식 > 국밥" to a label."""
    parts = category_name.split(" > ")
    if len(parts) < _MIN_PATH_SEGMENTS:
        return UNKNOWN_CATEGORY
    sub_category = parts[1]
    for label, keywords in _CATEGORY_RULES:
        if any(keyword in sub_category for keyword in keywords):
            return label
    return sub_category


def is_excluded(category_name: str) -> bool:
    lowered = category_name.lower()
    return any(keyword in lowered for keyword in EXCLUDED_KEYWORDS)


def map_place(place: dict[str, object]) -> Restaurant:
    """Convert a Kakao place document into a restaurant."""
    return Restaurant(
        id=str(place["id"]),
        name=str(place.get("place_name", "")),
        category=normalize_category(str(place.get("category_name", ""))),
        address=str(
            place.get("road_address_name") or place.get("address_name") or ""
        ),
        distance=_parse_distance(place.get("distance")),
        phone=str(place["phone"]) if place.get("phone") else None,
        place_url=str(place["place_url"]) if place.get("place_url") else None,
        x=_parse_float(place.get("x")),
        y=_parse_float(place.get("y")),
    )


@dataclass
class RestaurantSearchService:
    """Finds lunch candidates around a location, address or keyword."""

    client: KakaoLocalClient
    min_results: int = MIN_RESULTS

    async def resolve_coordinates(self, address: str) -> tuple[str, str] | None:
        """Geocode an address, falling back to a keyword search."""
        data = await self.client.search_address(address)
        documents = data.get("documents") or []
        if not documents:
            data = await self.client.search_keyword(address)
            documents = data.get("documents") or []
        if not documents:
            return None
        first = documents[0]
        return str(first["x"]), str(first["y"])

    async def reverse_geocode(self, x: str, y: str) -> str:
        """Return the road or lot address of a point."""
        try:
            data = await self.client.coord_to_address(x, y)
        except httpx.HTTPError:
            _logger.warning("Reverse geocoding failed for x=%s y=%s", x, y)
            return CURRENT_LOCATION_LABEL
        documents = data.get("documents") or []
        if documents:
            document = documents[0]
            for key in ("road_address", "address"):
                section = document.get(key)
                if section:
                    return str(section["address_name"])
        return CURRENT_LOCATION_LABEL

    async def search_nearby(
        self, x: str, y: str, radius: int = DEFAULT_RADIUS_M
    ) -> list[Restaurant]:
        """Return restaurants within `radius` meters, nearest first."""
        restaurants: list[Restaurant] = []
        seen: set[str] = set()
        for page in range(1, MAX_PAGES + 1):
            data = await self.client.search_category(
                RESTAURANT_GROUP_CODE,
                x=x,
                y=y,
                radius=radius,
                page=page,
                size=PAGE_SIZE,
            )
            for place in data.get("documents") or []:
                place_id = str(place["id"])
                if place_id in seen:
                    continue
                seen.add(place_id)
                if not is_excluded(str(place.get("category_name", ""))):
                    restaurants.append(map_place(place))
            if (data.get("meta") or {}).get("is_end"):
                break
        return restaurants

    async def search_by_location(
        self, lat: float, lng: float, radius: int = DEFAULT_RADIUS_M
    ) -> SearchResult:
        """Search around the user's position and label it with an address."""
        x, y = str(lng), str(lat)
        address = await self.reverse_geocode(x, y)
        restaurants, used_radius = await self._search_expanding(x, y, radius)
        return SearchResult(
            restaurants=restaurants,
            center=Coordinates(lat=lat, lng=lng),
            address=address,
            expanded_radius=used_radius if used_radius > radius else None,
        )

    async def search_by_address(
        self, address: str, radius: int = DEFAULT_RADIUS_M
    ) -> SearchResult | None:
        """Search around an address; return None when it cannot be found."""
        coords = await self.resolve_coordinates(address)
        if coords is None:
            return None
        x, y = coords
        restaurants, used_radius = await self._search_expanding(x, y, radius)
        return SearchResult(
            restaurants=restaurants,
            center=Coordinates(lat=float(y), lng=float(x)),
            expanded_radius=used_radius if used_radius > radius else None,
        )

    async def search_by_keyword(self, keyword: str) -> SearchResult:
        """Search restaurants by name or keyword anywhere."""
        restaurants: list[Restaurant] = []
        seen: set[str] = set()
        for page in range(1, MAX_PAGES + 1):
            data = await self.client.search_keyword(
                keyword,
                category_group_code=RESTAURANT_GROUP_CODE,
                page=page,
                size=PAGE_SIZE,
            )
            for place in data.get("documents") or []:
                place_id = str(place["id"])
                if place_id not in seen:
                    seen.add(place_id)
                    restaurants.append(map_place(place))
            if (data.get("meta") or {}).get("is_end"):
                break
        return SearchResult(restaurants=restaurants)

    async def _search_expanding(
        self, x: str, y: str, radius: int
    ) -> tuple[list[Restaurant], int]:
        """Widen the radius until enough restaurants are found."""
        steps = [radius, *(step for step in EXPANSION_RADII_M if step > radius)]
        restaurants: list[Restaurant] = []
        used_radius = radius
        for step in steps:
            restaurants = await self.search_nearby(x, y, step)
            used_radius = step
            if len(restaurants) >= self.min_results:
                break
        if used_radius > radius:
            _logger.info(
                "Expanded search radius from %s to %s (results=%s)",
                radius,
                used_radius,
                len(restaurants),
            )
        return restaurants, used_radius


def _parse_distance(raw: object) -> int | None:
    text = str(raw).strip() if raw is not None else ""
    if not text:
        return None
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


def _parse_float(raw: object) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None
