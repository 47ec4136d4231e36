"""Domain models for protein exchanges."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from protein_exchange.domain.proteins import Protein


class ExchangeState(str, Enum):
    """Display state of a menu day."""

    NONE = "NONE"
    PENDING = "PENDING"
    SAVED = "SAVED"


class RejectionReason(str, Enum):
    """Why a date produced no exchange."""

    UNRECOGNIZED_PROTEIN = "UNRECOGNIZED_PROTEIN"
    NO_OP_SELECTION = "NO_OP_SELECTION"
    DEADLINE_EXPIRED = "DEADLINE_EXPIRED"
    NO_MENU_FOR_DATE = "NO_MENU_FOR_DATE"
    MISSING_ORIGINAL = "MISSING_ORIGINAL"
    STORE_ERROR = "STORE_ERROR"


@dataclass(frozen=True)
class ExchangeRecord:
    """A user's substitution of the default protein on one day."""

    day: date
    original_protein: str
    new_protein: Protein | None


@dataclass(frozen=True)
class StoredExchange:
    """Persisted exchange row with ownership."""

    user_id: UUID
    record: ExchangeRecord
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ExchangeDecision:
    """Derived per-day view used for rendering and validation."""

    day: date
    original_protein: str
    within_deadline: bool
    effective_protein: str
    state: ExchangeState


@dataclass(frozen=True)
class RejectedRecord:
    """A record left out of a submission, with the reason."""

    record: ExchangeRecord
    reason: RejectionReason


@dataclass(frozen=True)
class SubmissionBatch:
    """Records split into the submittable and the refused."""

    accepted: list[ExchangeRecord]
    rejected: list[RejectedRecord]


@dataclass(frozen=True)
class UpsertResult:
    """Outcome of a bulk upsert against the store."""

    stored: list[ExchangeRecord]
    failed: list[ExchangeRecord] = field(default_factory=list)


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a user submission reported back to the caller."""

    inserted_count: int
    total_points_awarded: int
    rejected: list[RejectedRecord]


@dataclass(frozen=True)
class MonthSummary:
    """Counters shown above the month table."""

    saved: int
    pending: int
    remaining: int


@dataclass(frozen=True)
class MonthView:
    """Rows and counters for one month of a user's exchanges."""

    month: date
    rows: list[ExchangeDecision]
    summary: MonthSummary
    deadline_message: str
