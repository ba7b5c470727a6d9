"""Domain models for restaurant candidates."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Restaurant:
    """Represents a restaurant candidate near the user."""

    id: str
    name: str
    category: str
    address: str
    distance: float | None = None
    rating: float | None = None
    phone: str | None = None
    place_url: str | None = None
    x: float | None = None
    y: float | None = None


@dataclass(frozen=True)
class ScoredRestaurant:
    """Restaurant with its recommendation score and reasons."""

    restaurant: Restaurant
    score: float
    reasons: list[str] = field(default_factory=list)
