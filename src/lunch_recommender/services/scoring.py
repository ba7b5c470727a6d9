"""Restaurant scoring from weather, recent meals, mood and distance."""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from lunch_recommender.domain.meals import MealLogEntry, Mood
from lunch_recommender.domain.restaurants import Restaurant, ScoredRestaurant
from lunch_recommender.domain.weather import WeatherCondition, WeatherSnapshot

BASE_SCORE = 50.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0

WEATHER_WEIGHT = 30
RECENT_MEAL_WEIGHT = -50
MOOD_WEIGHT = 25
DISTANCE_WEIGHT = 15

TODAY_WINDOW_DAYS = 1
RECENT_WINDOW_DAYS = 3
NEAR_DISTANCE_M = 300
MODERATE_DISTANCE_M = 500
WALKABLE_DISTANCE_M = 1000

WEATHER_CATEGORY_BONUS: dict[WeatherCondition, list[str]] = {
    WeatherCondition.RAIN: ["국밥", "한식", "칼국수", "수제비", "라면", "우동", "탕류"],
    WeatherCondition.SNOW: ["국밥", "한식", "설렁탕", "찌개", "탕류"],
    WeatherCondition.HOT: ["냉면", "일식", "회", "샐러드", "초밥"],
    WeatherCondition.COLD: ["국밥", "한식", "설렁탕", "탕류", "찌개"],
    WeatherCondition.CLEAR: [],
    WeatherCondition.CLOUDY: [],
}

WEATHER_REASONS: dict[WeatherCondition, str] = {
    WeatherCondition.RAIN: "비 오는 날엔 따뜻한 국물이 딱!",
    WeatherCondition.SNOW: "눈 오는 날 뜨끈한 음식 추천",
    WeatherCondition.HOT: "더운 날엔 시원한 음식이 최고",
    WeatherCondition.COLD: "추운 날엔 몸을 녹여줄 음식",
    WeatherCondition.CLEAR: "",
    WeatherCondition.CLOUDY: "",
}

MOOD_CATEGORY_BONUS: dict[Mood, list[str]] = {
    Mood.HEARTY: ["고기", "한식", "국밥", "삼겹살", "치킨", "돈까스", "중식"],
    Mood.LIGHT: ["샐러드", "일식", "베트남", "분식", "김밥"],
    Mood.SPECIAL: ["양식", "스테이크", "이탈리안", "일식", "퓨전"],
    Mood.QUICK: ["분식", "패스트푸드", "김밥", "햄버거", "샌드위치"],
}

MOOD_REASONS: dict[Mood, str] = {
    Mood.HEARTY: "든든하게 배 채우기 좋아요",
    Mood.LIGHT: "가볍고 건강하게",
    Mood.SPECIAL: "특별한 날에 어울려요",
    Mood.QUICK: "빠르게 먹기 좋아요",
}

# Table order matters: a category joins the first group it matches.
CATEGORY_GROUPS: dict[str, list[str]] = {
    "한식": ["한식", "국밥", "찌개", "비빔밥", "백반", "정식"],
    "일식": ["일식", "초밥", "라멘", "우동", "돈까스", "회"],
    "중식": ["중식", "짜장면", "짬뽕", "탕수육"],
    "양식": ["양식", "스테이크", "파스타", "이탈리안", "피자"],
    "분식": ["분식", "김밥", "떡볶이", "라면"],
    "고기": ["고기", "삼겹살", "소고기", "갈비", "불고기"],
    "치킨": ["치킨", "통닭", "양념치킨"],
    "패스트푸드": ["패스트푸드", "햄버거", "버거"],
}

SAME_PLACE_TODAY_REASON = "어제/오늘 다녀온 곳"
SAME_PLACE_RECENT_REASON = "최근 다녀온 곳"
SIMILAR_FOOD_TODAY_REASON = "어제/오늘 비슷한 음식을 드셨어요"
SIMILAR_FOOD_RECENT_REASON = "최근 비슷한 음식을 드셨어요"
NEARBY_REASON = "가까워서 금방 갈 수 있어요"
MODERATE_DISTANCE_REASON = "적당한 거리예요"

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class FactorResult:
    """Contribution of a single scoring factor."""

    score: float = 0.0
    reason: str | None = None


@dataclass(frozen=True)
class ScoringContext:
    """Signals shared by every candidate in one scoring call."""

    weather: WeatherSnapshot | None = None
    recent_meals: Sequence[MealLogEntry] = field(default_factory=tuple)
    mood: Mood | None = None
    now: datetime | None = None


def matches_keyword(category: str, keyword: str) -> bool:
    """Return true when either string contains the other."""
    return keyword in category or category in keyword


def matches_any(category: str, keywords: Iterable[str]) -> bool:
    """Return true when the category loosely matches any keyword."""
    return any(matches_keyword(category, keyword) for keyword in keywords)


def find_category_group(category: str) -> list[str]:
    """Return the similarity group for a category, or the category alone."""
    for group in CATEGORY_GROUPS.values():
        if matches_any(category, group):
            return group
    return [category]


def is_similar_category(left: str, right: str) -> bool:
    """Return true when two categories share a similarity group keyword."""
    right_group = find_category_group(right)
    return any(keyword in right_group for keyword in find_category_group(left))


def weather_factor(category: str, weather: WeatherSnapshot | None) -> FactorResult:
    if weather is None or weather.condition in {
        WeatherCondition.CLEAR,
        WeatherCondition.CLOUDY,
    }:
        return FactorResult()
    if matches_any(category, WEATHER_CATEGORY_BONUS[weather.condition]):
        return FactorResult(WEATHER_WEIGHT, WEATHER_REASONS[weather.condition])
    return FactorResult()


def recent_meal_factor(
    restaurant: Restaurant, recent_meals: Sequence[MealLogEntry], now: datetime
) -> FactorResult:
    """Penalize the candidate using the first recent meal that applies.

    Meals are scanned in the order given. The same restaurant within three
    days, or a similar category within three days, stops the scan.
    """
    for meal in recent_meals:
        days = _days_since(meal.ate_at, now)
        if days is None:
            continue

        if meal.restaurant_id == restaurant.id:
            if days <= TODAY_WINDOW_DAYS:
                return FactorResult(RECENT_MEAL_WEIGHT, SAME_PLACE_TODAY_REASON)
            if days <= RECENT_WINDOW_DAYS:
                return FactorResult(
                    RECENT_MEAL_WEIGHT * 0.6, SAME_PLACE_RECENT_REASON
                )

        if is_similar_category(restaurant.category, meal.category):
            if days <= TODAY_WINDOW_DAYS:
                return FactorResult(
                    RECENT_MEAL_WEIGHT * 0.4, SIMILAR_FOOD_TODAY_REASON
                )
            if days <= RECENT_WINDOW_DAYS:
                return FactorResult(
                    RECENT_MEAL_WEIGHT * 0.2, SIMILAR_FOOD_RECENT_REASON
                )

    return FactorResult()


def mood_factor(category: str, mood: Mood | None) -> FactorResult:
    if mood is None:
        return FactorResult()
    if matches_any(category, MOOD_CATEGORY_BONUS[mood]):
        return FactorResult(MOOD_WEIGHT, MOOD_REASONS[mood])
    return FactorResult()


def distance_factor(distance: float | None) -> FactorResult:
    """Score walking distance in meters; malformed values score nothing."""
    if distance is None or not _is_valid_distance(distance):
        return FactorResult()
    if distance <= NEAR_DISTANCE_M:
        return FactorResult(DISTANCE_WEIGHT, NEARBY_REASON)
    if distance <= MODERATE_DISTANCE_M:
        return FactorResult(DISTANCE_WEIGHT * 0.7, MODERATE_DISTANCE_REASON)
    if distance <= WALKABLE_DISTANCE_M:
        return FactorResult(DISTANCE_WEIGHT * 0.3)
    return FactorResult()


def score_restaurant(
    restaurant: Restaurant, context: ScoringContext | None = None
) -> ScoredRestaurant:
    """Compute a restaurant's score and the reasons behind it.

    The four factors are added to a base of 50 and the total is clamped to
    [0, 100]. Reasons keep the factor order: weather, recent meal, mood,
    distance.
    """
    resolved = context or ScoringContext()
    now = resolved.now or datetime.now(tz=UTC)
    factors = [
        weather_factor(restaurant.category, resolved.weather),
        recent_meal_factor(restaurant, resolved.recent_meals, now),
        mood_factor(restaurant.category, resolved.mood),
        distance_factor(restaurant.distance),
    ]

    total = BASE_SCORE + sum(factor.score for factor in factors)
    reasons = [factor.reason for factor in factors if factor.reason]
    return ScoredRestaurant(
        restaurant=restaurant,
        score=max(MIN_SCORE, min(MAX_SCORE, total)),
        reasons=reasons,
    )


def _days_since(ate_at: object, now: datetime) -> int | None:
    if not isinstance(ate_at, datetime):
        return None
    if ate_at.tzinfo is None:
        ate_at = ate_at.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return (now - ate_at) // _ONE_DAY


def _is_valid_distance(distance: object) -> bool:
    if isinstance(distance, bool) or not isinstance(distance, int | float):
        return False
    return math.isfinite(distance) and distance >= 0
