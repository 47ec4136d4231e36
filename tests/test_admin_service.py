"""Tests for the admin service."""

import asyncio
import csv
import io
from datetime import UTC, date, datetime
from uuid import UUID

from protein_exchange.domain.exchanges import ExchangeRecord
from protein_exchange.domain.proteins import Protein
from protein_exchange.services.admin import CSV_COLUMNS, AdminService
from protein_exchange.services.menu import MenuService
from tests.conftest import InMemoryAdminRepository, InMemoryExchangeRepository

ANA = UUID("00000000-0000-0000-0000-00000000000a")
BRUNO = UUID("00000000-0000-0000-0000-00000000000b")


def _service(menu_service: MenuService) -> AdminService:
    exchanges = InMemoryExchangeRepository()
    exchanges.records[(ANA, date(2025, 8, 18))] = ExchangeRecord(
        date(2025, 8, 18), "Frango grelhado", Protein.OMELETE
    )
    exchanges.records[(BRUNO, date(2025, 8, 18))] = ExchangeRecord(
        date(2025, 8, 18), "Frango grelhado", Protein.OVO_COZIDO
    )
    exchanges.records[(ANA, date(2025, 8, 20))] = ExchangeRecord(
        date(2025, 8, 20), "Ovo frito", Protein.OMELETE
    )
    return AdminService(
        admin_repository=InMemoryAdminRepository(exchanges),
        menu_service=menu_service,
    )


def test_kitchen_report_counts_proteins(menu_service: MenuService) -> None:
    report = _service(menu_service).kitchen_report(date(2025, 8, 18))

    assert report["day"] == "2025-08-18"
    assert report["total"] == 2
    assert report["by_protein"] == {"Omelete": 1, "Ovo cozido": 1}


def test_kitchen_report_empty_day(menu_service: MenuService) -> None:
    report = _service(menu_service).kitchen_report(date(2025, 8, 19))

    assert report["total"] == 0
    assert report["by_protein"] == {}
    assert report["exchanges"] == []


def test_export_csv(menu_service: MenuService) -> None:
    content = _service(menu_service).export_csv(date(2025, 8, 19), date(2025, 8, 31))

    rows = list(csv.reader(io.StringIO(content)))
    assert tuple(rows[0]) == CSV_COLUMNS
    assert rows[1:] == [[str(ANA), "2025-08-20", "Ovo frito", "Omelete", ""]]


def test_export_csv_includes_updated_at(menu_service: MenuService) -> None:
    exchanges = InMemoryExchangeRepository()
    repository = InMemoryAdminRepository(exchanges)
    service = AdminService(admin_repository=repository, menu_service=menu_service)
    exchanges.records[(ANA, date(2025, 8, 18))] = ExchangeRecord(
        date(2025, 8, 18), "Frango grelhado", Protein.OMELETE
    )
    stamp = datetime(2025, 8, 14, 12, 0, tzinfo=UTC)
    repository.updated_at = stamp

    content = service.export_csv(date(2025, 8, 1), date(2025, 8, 31))

    assert stamp.isoformat() in content


def test_refresh_menu_drops_cache(menu_service: MenuService) -> None:
    asyncio.run(menu_service.get_month(date(2025, 8, 1)))
    asyncio.run(menu_service.get_month(date(2025, 8, 1), "light"))

    assert _service(menu_service).refresh_menu() == 2
