"""Admin service for cafeteria reporting."""

import csv
import io
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from protein_exchange.domain.exchanges import StoredExchange
from protein_exchange.services.menu import MenuService

CSV_COLUMNS = ("usuario_id", "data", "proteina_original", "proteina_nova", "updated_at")


class AdminRepository(Protocol):
    """Persistence interface for admin data."""

    def list_exchanges_between(self, start: date, end: date) -> list[StoredExchange]:
        """Return all users' exchanges between start and end, inclusive."""


@dataclass
class AdminService:
    """Service for admin dashboards."""

    admin_repository: AdminRepository
    menu_service: MenuService

    def kitchen_report(self, day: date) -> dict[str, object]:
        """Return the exchanges for a day and how many of each protein to cook."""
        exchanges = self.admin_repository.list_exchanges_between(day, day)
        counts = Counter(
            exchange.record.new_protein.value
            for exchange in exchanges
            if exchange.record.new_protein
        )
        return {
            "day": day.isoformat(),
            "total": len(exchanges),
            "by_protein": dict(sorted(counts.items())),
            "exchanges": [_serialize_exchange(exchange) for exchange in exchanges],
        }

    def export_csv(self, start: date, end: date) -> str:
        """Return the exchanges between start and end as CSV text."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_COLUMNS)
        for exchange in self.admin_repository.list_exchanges_between(start, end):
            row = _serialize_exchange(exchange)
            writer.writerow([row[column] or "" for column in CSV_COLUMNS])
        return buffer.getvalue()

    def refresh_menu(self) -> int:
        """Drop cached menus so the next read hits the feed."""
        return self.menu_service.invalidate()


def _serialize_exchange(exchange: StoredExchange) -> dict[str, object]:
    record = exchange.record
    return {
        "usuario_id": str(exchange.user_id),
        "data": record.day.isoformat(),
        "proteina_original": record.original_protein,
        "proteina_nova": record.new_protein.value if record.new_protein else None,
        "updated_at": exchange.updated_at.isoformat() if exchange.updated_at else None,
    }
