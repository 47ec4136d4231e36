"""Pydantic models for API payloads."""

from datetime import date

from pydantic import BaseModel, Field, field_validator

from protein_exchange.domain.exchanges import ExchangeRecord
from protein_exchange.domain.proteins import Protein


def parse_month(value: str) -> date:
    """Parse a YYYY-MM string into the first day of that month."""
    try:
        return date.fromisoformat(f"{value.strip()}-01")
    except ValueError as exc:
        raise ValueError(f"Invalid month: {value!r}, expected YYYY-MM") from exc


class TrocaPayload(BaseModel):
    """A single exchange selection as sent by the portal."""

    data: date
    proteina_original: str = ""
    proteina_nova: str | None = None

    def to_record(self) -> ExchangeRecord:
        """Convert to the domain record; unknown proteins become None."""
        return ExchangeRecord(
            day=self.data,
            original_protein=self.proteina_original,
            new_protein=Protein.from_label(self.proteina_nova),
        )


class MonthViewRequest(BaseModel):
    """Month view request with the in-session selections."""

    month: str
    pending: list[TrocaPayload] = Field(default_factory=list)

    @field_validator("month")
    @classmethod
    def _check_month(cls, value: str) -> str:
        parse_month(value)
        return value


class ApplyAllRequest(BaseModel):
    """Apply one protein to every remaining eligible day of a month."""

    month: str
    protein: Protein

    @field_validator("month")
    @classmethod
    def _check_month(cls, value: str) -> str:
        parse_month(value)
        return value


class BulkSubmitRequest(BaseModel):
    """Bulk submission of pending selections."""

    trocas: list[TrocaPayload]
