"""Supabase repository for gamification activities."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from protein_exchange.domain.activities import Activity
from protein_exchange.services.activities import ActivityRepository


@dataclass
class SupabaseActivityRepository(ActivityRepository):
    """Supabase-backed activity ledger."""

    client: Client

    def create_activities(self, activities: list[Activity]) -> None:
        """Insert activity rows."""
        self.client.table("gamification_activities").insert(
            [
                {
                    "user_id": str(activity.user_id),
                    "activity_type": activity.activity_type,
                    "description": activity.description,
                    "points": activity.points,
                    "metadata": activity.metadata,
                }
                for activity in activities
            ]
        ).execute()

    def total_points(self, user_id: UUID) -> int:
        """Return the sum of a user's points."""
        response = (
            self.client.table("gamification_activities")
            .select("points")
            .eq("user_id", str(user_id))
            .execute()
        )
        return sum(int(row.get("points") or 0) for row in response.data or [])
