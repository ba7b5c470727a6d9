"""Supabase repository for team membership."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from lunch_recommender.services.meals import TeamRepository


@dataclass
class SupabaseTeamRepository(TeamRepository):
    """Supabase implementation for team lookups."""

    client: Client

    def list_member_ids(self, team_id: UUID) -> list[UUID]:
        response = (
            self.client.table("team_members")
            .select("user_id")
            .eq("team_id", str(team_id))
            .execute()
        )
        return [UUID(str(row["user_id"])) for row in response.data or []]
