"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import pytest

from protein_exchange.config import Settings
from protein_exchange.containers import AppContainer
from protein_exchange.domain.activities import Activity
from protein_exchange.domain.exchanges import (
    ExchangeRecord,
    StoredExchange,
    UpsertResult,
)
from protein_exchange.services.activities import ActivityRepository, ActivityService
from protein_exchange.services.admin import AdminRepository, AdminService
from protein_exchange.services.cache import InMemoryCache
from protein_exchange.services.exchanges import ExchangeRepository, ExchangeService
from protein_exchange.services.menu import MenuFeedClient, MenuService

SAO_PAULO = ZoneInfo("America/Sao_Paulo")


def local_time(  # noqa: PLR0913
    year: int, month: int, day: int, hour: int, minute: int = 0, second: int = 0
) -> datetime:
    """Return an aware datetime in the cafeteria's timezone."""
    return datetime(year, month, day, hour, minute, second, tzinfo=SAO_PAULO)


AUGUST_MENU_ROWS: list[dict[str, object]] = [
    {"dia": "Quinta", "data": "14/08/2025", "prato": "PF", "proteina": "Frango assado"},
    {"dia": "Sexta", "data": "15/08/2025", "prato": "PF", "proteina": "Ovo frito"},
    {
        "dia": "Segunda",
        "data": "18/08/2025",
        "prato": "Prato feito",
        "descricao": "Arroz, feijão e salada",
        "proteina": "Frango grelhado",
        "acompanhamentos": ["Arroz", "Feijão"],
        "sobremesa": "Gelatina",
    },
    {
        "dia": "Terça",
        "data": "19/08/2025",
        "prato": "PF",
        "proteina": "Omelete de queijo",
    },
    {"dia": "Quarta", "data": "20/08/2025", "prato": "PF", "proteina": "Ovo frito"},
    {"dia": "Quinta", "data": "21/08/2025", "prato": "PF", "proteina": "Ovo cozido"},
    {"dia": "Sexta", "data": "22/08/2025", "prato": "PF", "proteina": "Carne moída"},
]


@dataclass
class FixedClock:
    """Clock returning a settable instant."""

    now: datetime

    def __call__(self) -> datetime:
        return self.now


@dataclass
class FakeMenuFeedClient(MenuFeedClient):
    """Fake menu feed serving rows per (month, variant)."""

    rows: dict[tuple[date, str], list[dict[str, object]]] = field(default_factory=dict)
    calls: list[tuple[date, str]] = field(default_factory=list)
    error: Exception | None = None

    async def fetch_month(self, month: date, variant: str) -> list[dict[str, object]]:
        self.calls.append((month, variant))
        if self.error is not None:
            raise self.error
        return self.rows.get((month, variant), [])


@dataclass
class InMemoryExchangeRepository(ExchangeRepository):
    """In-memory exchange repository for tests."""

    records: dict[tuple[UUID, date], ExchangeRecord] = field(default_factory=dict)
    fail_days: set[date] = field(default_factory=set)
    upsert_calls: int = 0

    def list_exchanges(
        self, user_id: UUID, start: date, end: date
    ) -> list[ExchangeRecord]:
        return sorted(
            (
                record
                for (owner, day), record in self.records.items()
                if owner == user_id and start <= day <= end
            ),
            key=lambda record: record.day,
        )

    def upsert_exchanges(
        self, user_id: UUID, records: list[ExchangeRecord]
    ) -> UpsertResult:
        self.upsert_calls += 1
        stored = []
        failed = []
        for record in records:
            if record.day in self.fail_days:
                failed.append(record)
                continue
            self.records[(user_id, record.day)] = record
            stored.append(record)
        return UpsertResult(stored=stored, failed=failed)


@dataclass
class InMemoryActivityRepository(ActivityRepository):
    """In-memory activity ledger for tests."""

    activities: list[Activity] = field(default_factory=list)

    def create_activities(self, activities: list[Activity]) -> None:
        self.activities.extend(activities)

    def total_points(self, user_id: UUID) -> int:
        return sum(
            activity.points
            for activity in self.activities
            if activity.user_id == user_id
        )


@dataclass
class InMemoryAdminRepository(AdminRepository):
    """Admin repository reading from the in-memory exchange store."""

    exchanges: InMemoryExchangeRepository
    updated_at: datetime | None = None

    def list_exchanges_between(self, start: date, end: date) -> list[StoredExchange]:
        return [
            StoredExchange(user_id=owner, record=record, updated_at=self.updated_at)
            for (owner, day), record in sorted(
                self.exchanges.records.items(), key=lambda item: item[0][1]
            )
            if start <= day <= end
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
        menu_feed_base_url="https://intranet.example.com",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(local_time(2025, 8, 15, 15, 30))


@pytest.fixture
def feed_client() -> FakeMenuFeedClient:
    return FakeMenuFeedClient(
        rows={
            (date(2025, 8, 1), "padrao"): AUGUST_MENU_ROWS,
            (date(2025, 8, 1), "light"): [
                {"data": "18/08/2025", "proteina": "Peixe grelhado"},
            ],
        }
    )


@pytest.fixture
def exchange_repository() -> InMemoryExchangeRepository:
    return InMemoryExchangeRepository()


@pytest.fixture
def activity_repository() -> InMemoryActivityRepository:
    return InMemoryActivityRepository()


@pytest.fixture
def menu_service(feed_client: FakeMenuFeedClient) -> MenuService:
    return MenuService(feed_client=feed_client, cache=InMemoryCache())


@pytest.fixture
def exchange_service(
    menu_service: MenuService,
    exchange_repository: InMemoryExchangeRepository,
    activity_repository: InMemoryActivityRepository,
    clock: FixedClock,
) -> ExchangeService:
    return ExchangeService(
        menu_service=menu_service,
        repository=exchange_repository,
        activity_service=ActivityService(activity_repository),
        clock=clock,
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def container(
    settings: Settings,
    clock: Callable[[], datetime],
    menu_service: MenuService,
    exchange_service: ExchangeService,
    exchange_repository: InMemoryExchangeRepository,
) -> AppContainer:
    admin_service = AdminService(
        admin_repository=InMemoryAdminRepository(exchange_repository),
        menu_service=menu_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        clock=clock,
        menu_service=menu_service,
        exchange_service=exchange_service,
        activity_service=exchange_service.activity_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )
