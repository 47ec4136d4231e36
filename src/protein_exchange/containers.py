"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from supabase import create_client

from protein_exchange.adapters.menu_feed_client import HttpxMenuFeedClient
from protein_exchange.adapters.supabase_activity_repository import (
    SupabaseActivityRepository,
)
from protein_exchange.adapters.supabase_admin_repository import SupabaseAdminRepository
from protein_exchange.adapters.supabase_exchange_repository import (
    SupabaseExchangeRepository,
)
from protein_exchange.config import Settings, parse_cutoff
from protein_exchange.services.activities import ActivityService
from protein_exchange.services.admin import AdminService
from protein_exchange.services.cache import InMemoryCache
from protein_exchange.services.exchanges import ExchangeService
from protein_exchange.services.menu import MenuService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Callable[[], datetime]
    menu_service: MenuService
    exchange_service: ExchangeService
    activity_service: ActivityService
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def local_clock(timezone_name: str) -> Callable[[], datetime]:
    """Return a clock reading the current time in the cafeteria's timezone."""
    tz = ZoneInfo(timezone_name)

    def now() -> datetime:
        return datetime.now(tz=tz)

    return now


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = local_clock(resolved_settings.timezone)
    feed_client = HttpxMenuFeedClient.create(resolved_settings.menu_feed_base_url)
    menu_service = MenuService(
        feed_client=feed_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.menu_cache_ttl_seconds,
    )
    activity_service = ActivityService(SupabaseActivityRepository(supabase_client))
    exchange_service = ExchangeService(
        menu_service=menu_service,
        repository=SupabaseExchangeRepository(
            supabase_client, max_attempts=resolved_settings.store_max_attempts
        ),
        activity_service=activity_service,
        clock=clock,
        cutoff=parse_cutoff(resolved_settings.exchange_cutoff_hour),
    )
    admin_service = AdminService(
        admin_repository=SupabaseAdminRepository(supabase_client),
        menu_service=menu_service,
    )

    async def close_resources() -> None:
        await feed_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        menu_service=menu_service,
        exchange_service=exchange_service,
        activity_service=activity_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )
