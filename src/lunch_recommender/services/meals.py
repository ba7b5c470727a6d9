"""Meal history service for personal and team lunches."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from lunch_recommender.domain.meals import MealLogDraft, MealLogEntry

DEFAULT_LOOKBACK_DAYS = 7

_logger = logging.getLogger(__name__)


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def list_meal_logs(self, user_id: UUID, since: datetime) -> list[MealLogEntry]:
        """Return meal logs eaten at or after `since`, newest first."""

    def create_meal_log(self, user_id: UUID, draft: MealLogDraft) -> MealLogEntry:
        """Create a meal log and return the stored row."""

    def create_meal_logs(self, user_ids: list[UUID], draft: MealLogDraft) -> int:
        """Create the same meal log for several users; return rows written."""


class TeamRepository(Protocol):
    """Read access to team membership."""

    def list_member_ids(self, team_id: UUID) -> list[UUID]:
        """Return user ids of the team's members."""


class TeamMembersNotFoundError(LookupError):
    """Raised when a team has no members to log a meal for."""


@dataclass
class MealLogService:
    """Records meals and reads back recent history."""

    repository: MealLogRepository
    team_repository: TeamRepository
    lookback_days: int = DEFAULT_LOOKBACK_DAYS

    def list_recent(
        self,
        user_id: UUID,
        days: int | None = None,
        now: datetime | None = None,
    ) -> list[MealLogEntry]:
        """Return the user's meals within the lookback window, newest first."""
        window = self.lookback_days if days is None else days
        since = (now or datetime.now(tz=UTC)) - timedelta(days=window)
        return self.repository.list_meal_logs(user_id, since)

    def log_meal(  # noqa: PLR0913
        self,
        user_id: UUID,
        restaurant_id: str,
        restaurant_name: str,
        category: str,
        weather: str | None = None,
        mood: str | None = None,
    ) -> MealLogEntry:
        """Record that the user ate at a restaurant now."""
        draft = MealLogDraft(
            restaurant_id=restaurant_id,
            restaurant_name=restaurant_name,
            category=category,
            ate_at=datetime.now(tz=UTC),
            weather=weather,
            mood=mood,
        )
        return self.repository.create_meal_log(user_id, draft)

    def log_team_meal(
        self,
        team_id: UUID,
        restaurant_id: str,
        restaurant_name: str,
        category: str,
    ) -> int:
        """Record a team lunch for every member and return the row count."""
        member_ids = self.team_repository.list_member_ids(team_id)
        if not member_ids:
            raise TeamMembersNotFoundError(f"Team {team_id} has no members")
        draft = MealLogDraft(
            restaurant_id=restaurant_id,
            restaurant_name=restaurant_name,
            category=category,
            ate_at=datetime.now(tz=UTC),
        )
        count = self.repository.create_meal_logs(member_ids, draft)
        _logger.info("Logged team meal: team_id=%s members=%s", team_id, count)
        return count
