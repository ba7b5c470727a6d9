"""Supabase repository for meal logs."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from lunch_recommender.domain.meals import MealLogDraft, MealLogEntry
from lunch_recommender.services.meals import MealLogRepository

_logger = logging.getLogger(__name__)

_COLUMNS = "id, restaurant_id, restaurant_name, category, ate_at, weather, mood"


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def list_meal_logs(self, user_id: UUID, since: datetime) -> list[MealLogEntry]:
        """Return meal logs since a point in time, newest first."""
        response = (
            self.client.table("meal_logs")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("ate_at", since.isoformat())
            .order("ate_at", desc=True)
            .execute()
        )
        entries: list[MealLogEntry] = []
        for row in response.data or []:
            try:
                entries.append(_parse_row(row))
            except (KeyError, TypeError, ValueError):
                _logger.warning(
                    "Skipping meal log with unreadable ate_at: id=%s", row.get("id")
                )
        return entries

    def create_meal_log(self, user_id: UUID, draft: MealLogDraft) -> MealLogEntry:
        """Insert a meal log row and return it."""
        response = (
            self.client.table("meal_logs")
            .insert(_to_row(user_id, draft))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal log")
        return _parse_row(response.data[0])

    def create_meal_logs(self, user_ids: list[UUID], draft: MealLogDraft) -> int:
        """Bulk insert one meal log per user."""
        payload = [_to_row(user_id, draft) for user_id in user_ids]
        if not payload:
            return 0
        self.client.table("meal_logs").insert(payload).execute()
        return len(payload)


def _to_row(user_id: UUID, draft: MealLogDraft) -> dict[str, object]:
    return {
        "user_id": str(user_id),
        "restaurant_id": draft.restaurant_id,
        "restaurant_name": draft.restaurant_name,
        "category": draft.category,
        "ate_at": draft.ate_at.isoformat(),
        "weather": draft.weather or None,
        "mood": draft.mood or None,
    }


def _parse_row(row: dict[str, object]) -> MealLogEntry:
    return MealLogEntry(
        id=str(row["id"]) if row.get("id") else None,
        restaurant_id=str(row.get("restaurant_id") or ""),
        restaurant_name=str(row.get("restaurant_name") or ""),
        category=str(row.get("category") or ""),
        ate_at=datetime.fromisoformat(str(row["ate_at"])),
        weather=row.get("weather"),
        mood=row.get("mood"),
    )
