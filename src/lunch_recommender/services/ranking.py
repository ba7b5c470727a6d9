"""Rank restaurant candidates by recommendation score."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import UTC, datetime

from lunch_recommender.domain.restaurants import Restaurant, ScoredRestaurant
from lunch_recommender.services.scoring import ScoringContext, score_restaurant

DEFAULT_LIMIT = 3


def rank_restaurants(
    restaurants: Iterable[Restaurant],
    context: ScoringContext | None = None,
    limit: int = DEFAULT_LIMIT,
) -> list[ScoredRestaurant]:
    """Score every candidate and return the best `limit`, highest first.

    Candidates with equal scores keep their input order.
    """
    if limit < 0:
        raise ValueError("limit must be non-negative")
    resolved = context or ScoringContext()
    if resolved.now is None:
        resolved = replace(resolved, now=datetime.now(tz=UTC))

    scored = [score_restaurant(restaurant, resolved) for restaurant in restaurants]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:limit]
