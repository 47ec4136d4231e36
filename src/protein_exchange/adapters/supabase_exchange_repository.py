"""Supabase repository for protein exchanges."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from protein_exchange.domain.exchanges import ExchangeRecord, UpsertResult
from protein_exchange.domain.proteins import Protein
from protein_exchange.services.exchanges import ExchangeRepository

logger = logging.getLogger(__name__)

TABLE = "trocas_proteina"
UPSERT_KEY = "usuario_id,data_troca"


@dataclass
class SupabaseExchangeRepository(ExchangeRepository):
    """Supabase implementation for exchange persistence."""

    client: Client
    max_attempts: int = 3

    def list_exchanges(
        self, user_id: UUID, start: date, end: date
    ) -> list[ExchangeRecord]:
        """Return the user's exchanges in the date range."""
        query = (
            self.client.table(TABLE)
            .select("data_troca, proteina_original, proteina_nova")
            .eq("usuario_id", str(user_id))
            .gte("data_troca", start.isoformat())
            .lte("data_troca", end.isoformat())
            .order("data_troca", desc=False)
        )
        response = self._execute(query)
        return [_parse_row(row) for row in response.data or []]

    def upsert_exchanges(
        self, user_id: UUID, records: list[ExchangeRecord]
    ) -> UpsertResult:
        """Upsert the batch, falling back to one row at a time if it is refused."""
        if not records:
            return UpsertResult(stored=[])
        updated_at = datetime.now(tz=UTC).isoformat()
        payload = [_to_row(user_id, record, updated_at) for record in records]
        try:
            self._execute(
                self.client.table(TABLE).upsert(payload, on_conflict=UPSERT_KEY)
            )
        except APIError:
            logger.warning(
                "Batch upsert refused, retrying per record",
                extra={"user_id": str(user_id), "count": len(records)},
            )
        else:
            return UpsertResult(stored=list(records))

        stored: list[ExchangeRecord] = []
        failed: list[ExchangeRecord] = []
        for record, row in zip(records, payload, strict=True):
            try:
                self._execute(
                    self.client.table(TABLE).upsert(row, on_conflict=UPSERT_KEY)
                )
            except APIError:
                logger.exception(
                    "Failed to store exchange",
                    extra={"user_id": str(user_id), "day": record.day.isoformat()},
                )
                failed.append(record)
            else:
                stored.append(record)
        return UpsertResult(stored=stored, failed=failed)

    def _execute(self, query):  # type: ignore[no-untyped-def]
        attempt = 1
        while True:
            try:
                return query.execute()
            except httpx.TransportError:
                if attempt >= self.max_attempts:
                    raise
                logger.warning(
                    "Transient store error, retrying", extra={"attempt": attempt}
                )
                attempt += 1


def _to_row(
    user_id: UUID, record: ExchangeRecord, updated_at: str
) -> dict[str, object]:
    return {
        "usuario_id": str(user_id),
        "data_troca": record.day.isoformat(),
        "proteina_original": record.original_protein,
        "proteina_nova": record.new_protein.value if record.new_protein else None,
        "status": "ativa",
        "updated_at": updated_at,
    }


def _parse_row(row: dict[str, object]) -> ExchangeRecord:
    return ExchangeRecord(
        day=date.fromisoformat(str(row["data_troca"])[:10]),
        original_protein=str(row.get("proteina_original") or ""),
        new_protein=Protein.from_label(row.get("proteina_nova")),
    )
