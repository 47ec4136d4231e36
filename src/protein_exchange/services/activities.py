"""Gamification activity ledger."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from protein_exchange.domain.activities import Activity
from protein_exchange.domain.exchanges import ExchangeRecord

PROTEIN_EXCHANGE = "protein_exchange"

PROTEIN_EXCHANGE_POINTS = 5


class ActivityRepository(Protocol):
    """Persistence interface for activities."""

    def create_activities(self, activities: list[Activity]) -> None:
        """Insert activity rows."""

    def total_points(self, user_id: UUID) -> int:
        """Return the sum of a user's points."""


@dataclass
class ActivityService:
    """Service for awarding points."""

    repository: ActivityRepository

    def record_exchanges(self, user_id: UUID, records: list[ExchangeRecord]) -> int:
        """Award points for stored exchanges and return the points awarded."""
        points = PROTEIN_EXCHANGE_POINTS
        activities = [
            Activity(
                user_id=user_id,
                activity_type=PROTEIN_EXCHANGE,
                description=(
                    f"Exchanged protein for {record.day.strftime('%d/%m')}"
                ),
                points=points,
                metadata={
                    "data": record.day.isoformat(),
                    "proteina_original": record.original_protein,
                    "proteina_nova": record.new_protein.value
                    if record.new_protein
                    else None,
                },
            )
            for record in records
        ]
        if activities:
            self.repository.create_activities(activities)
        return points * len(activities)

    def total_points(self, user_id: UUID) -> int:
        """Return the user's accumulated points."""
        return self.repository.total_points(user_id)
