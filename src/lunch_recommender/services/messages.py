"""Compose the one-line recommendation message."""

from lunch_recommender.domain.meals import Mood
from lunch_recommender.domain.restaurants import ScoredRestaurant
from lunch_recommender.domain.weather import WeatherCondition, WeatherSnapshot

NO_RESULTS_MESSAGE = "주변에 추천할 만한 식당을 찾지 못했어요. 검색 범위를 넓혀볼까요?"

WEATHER_MESSAGES: dict[WeatherCondition, str] = {
    WeatherCondition.RAIN: "비 오는 날이네요! 따뜻한 국물 요리는 어떨까요?",
    WeatherCondition.SNOW: "눈이 오는 날이에요! 뜨끈한 음식으로 몸을 녹여보세요.",
    WeatherCondition.HOT: "덥네요! 시원한 음식이 땡기지 않나요?",
    WeatherCondition.COLD: "추운 날씨예요! 몸을 녹여줄 따뜻한 음식 추천드려요.",
}

MOOD_MESSAGES: dict[Mood, str] = {
    Mood.HEARTY: "든든하게 드시고 싶으시군요!",
    Mood.LIGHT: "가볍게 드시고 싶으시군요!",
    Mood.SPECIAL: "특별한 식사를 원하시군요!",
    Mood.QUICK: "빠르게 드셔야 하시군요!",
}


def compose_message(
    ranked: list[ScoredRestaurant],
    weather: WeatherSnapshot | None = None,
    mood: Mood | None = None,
) -> str:
    """Summarize a ranking as a single sentence for the user."""
    if not ranked:
        return NO_RESULTS_MESSAGE

    parts: list[str] = []
    if weather is not None and weather.condition in WEATHER_MESSAGES:
        parts.append(WEATHER_MESSAGES[weather.condition])
    if mood is not None:
        parts.append(MOOD_MESSAGES[mood])

    top = ranked[0].restaurant
    parts.append(f"{top.name}({top.category}) 어떠세요?")
    return " ".join(parts)
