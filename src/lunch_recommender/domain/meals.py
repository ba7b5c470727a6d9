"""Domain models for meal history."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Mood(StrEnum):
    """What the user feels like eating today."""

    HEARTY = "hearty"
    LIGHT = "light"
    SPECIAL = "special"
    QUICK = "quick"


@dataclass(frozen=True)
class MealLogEntry:
    """A single "ate here at this time" record."""

    restaurant_id: str
    category: str
    ate_at: datetime
    restaurant_name: str = ""
    id: str | None = None
    weather: str | None = None
    mood: str | None = None


@dataclass(frozen=True)
class MealLogDraft:
    """Meal to be recorded for one or more users."""

    restaurant_id: str
    restaurant_name: str
    category: str
    ate_at: datetime
    weather: str | None = None
    mood: str | None = None
