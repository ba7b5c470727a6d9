"""Tests for restaurant ranking."""

from datetime import timedelta

import pytest

from lunch_recommender.domain.catalog import SAMPLE_RESTAURANTS
from lunch_recommender.domain.meals import MealLogEntry, Mood
from lunch_recommender.domain.restaurants import Restaurant
from lunch_recommender.services.ranking import rank_restaurants
from lunch_recommender.services.scoring import ScoringContext
from tests.conftest import NOW


def _restaurant(
    restaurant_id: str, category: str, distance: float | None = None
) -> Restaurant:
    return Restaurant(
        id=restaurant_id,
        name=f"식당 {restaurant_id}",
        category=category,
        address="서울 중구",
        distance=distance,
    )


def _candidates() -> list[Restaurant]:
    return [
        _restaurant("a", "양식"),
        _restaurant("b", "김밥", distance=250),
        _restaurant("c", "햄버거", distance=100),
        _restaurant("d", "중식"),
    ]


def _context() -> ScoringContext:
    meals = [
        MealLogEntry(restaurant_id="d", category="중식", ate_at=NOW),
        MealLogEntry(
            restaurant_id="c", category="햄버거", ate_at=NOW - timedelta(days=2)
        ),
        MealLogEntry(
            restaurant_id="x", category="파스타", ate_at=NOW - timedelta(hours=2)
        ),
    ]
    return ScoringContext(recent_meals=meals, mood=Mood.QUICK, now=NOW)


def test_rank_returns_highest_scores_first() -> None:
    ranked = rank_restaurants(_candidates(), _context(), limit=2)

    assert [item.restaurant.id for item in ranked] == ["b", "c"]
    assert [item.score for item in ranked] == [90, 60]


def test_rank_scores_every_candidate() -> None:
    ranked = rank_restaurants(_candidates(), _context(), limit=10)

    assert [item.restaurant.id for item in ranked] == ["b", "c", "a", "d"]
    assert [item.score for item in ranked] == [90, 60, 30, 0]


def test_rank_defaults_to_three() -> None:
    ranked = rank_restaurants(SAMPLE_RESTAURANTS, ScoringContext(now=NOW))

    assert len(ranked) == 3


def test_rank_empty_input() -> None:
    assert rank_restaurants([], _context()) == []


def test_rank_zero_limit() -> None:
    assert rank_restaurants(_candidates(), _context(), limit=0) == []


def test_rank_rejects_negative_limit() -> None:
    with pytest.raises(ValueError):
        rank_restaurants(_candidates(), _context(), limit=-1)


def test_rank_keeps_input_order_for_ties() -> None:
    candidates = [
        _restaurant("first", "기타음식"),
        _restaurant("second", "기타음식"),
        _restaurant("third", "기타음식"),
    ]

    ranked = rank_restaurants(candidates, ScoringContext(now=NOW), limit=3)

    assert [item.restaurant.id for item in ranked] == ["first", "second", "third"]
    assert all(item.score == 50 for item in ranked)


def test_rank_does_not_mutate_input() -> None:
    candidates = _candidates()
    snapshot = list(candidates)

    rank_restaurants(candidates, _context(), limit=2)

    assert candidates == snapshot


def test_rank_without_context() -> None:
    ranked = rank_restaurants([_restaurant("a", "기타음식", distance=200)])

    assert ranked[0].score == 65
    assert ranked[0].reasons == ["가까워서 금방 갈 수 있어요"]
