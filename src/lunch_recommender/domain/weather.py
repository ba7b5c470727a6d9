"""Weather domain models."""

from dataclasses import dataclass, field
from enum import StrEnum


class WeatherCondition(StrEnum):
    """Discrete weather condition used for scoring."""

    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAIN = "rain"
    SNOW = "snow"
    HOT = "hot"
    COLD = "cold"


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current weather at the user's location."""

    condition: WeatherCondition
    temperature: float
    description: str
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class GridPoint:
    """KMA forecast grid coordinate."""

    nx: int
    ny: int
