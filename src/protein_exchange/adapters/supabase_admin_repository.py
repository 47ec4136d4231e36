"""Supabase admin data access."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from protein_exchange.domain.exchanges import ExchangeRecord, StoredExchange
from protein_exchange.domain.proteins import Protein
from protein_exchange.services.admin import AdminRepository


@dataclass
class SupabaseAdminRepository(AdminRepository):
    """Supabase implementation for admin queries."""

    client: Client

    def list_exchanges_between(self, start: date, end: date) -> list[StoredExchange]:
        """Return every user's exchanges in the date range."""
        response = (
            self.client.table("trocas_proteina")
            .select(
                "usuario_id, data_troca, proteina_original, proteina_nova, updated_at"
            )
            .gte("data_troca", start.isoformat())
            .lte("data_troca", end.isoformat())
            .order("data_troca", desc=False)
            .execute()
        )
        exchanges = []
        for row in response.data or []:
            updated = row.get("updated_at")
            exchanges.append(
                StoredExchange(
                    user_id=UUID(row["usuario_id"]),
                    record=ExchangeRecord(
                        day=date.fromisoformat(str(row["data_troca"])[:10]),
                        original_protein=str(row.get("proteina_original") or ""),
                        new_protein=Protein.from_label(row.get("proteina_nova")),
                    ),
                    updated_at=datetime.fromisoformat(updated)
                    if isinstance(updated, str) and updated
                    else None,
                )
            )
        return exchanges
