"""Domain models for gamification activities."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Activity:
    """A point-earning action performed by a user."""

    user_id: UUID
    activity_type: str
    description: str
    points: int
    metadata: dict[str, object]
    created_at: datetime | None = None
