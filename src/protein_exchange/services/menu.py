"""Menu feed ingestion."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from protein_exchange.domain.menu import Menu, MenuDay
from protein_exchange.services.cache import Cache

logger = logging.getLogger(__name__)

MENU_VARIANTS = ("padrao", "light")
EXCHANGE_VARIANT = "padrao"
_DATE_FORMATS = ("%d/%m/%Y", "%Y-%m-%d")


class MenuFeedClient(Protocol):
    """Interface for the published monthly menu feed."""

    async def fetch_month(self, month: date, variant: str) -> list[dict[str, object]]:
        """Return the raw menu rows for a month."""


@dataclass
class MenuService:
    """Service that loads and caches parsed monthly menus."""

    feed_client: MenuFeedClient
    cache: Cache
    ttl_seconds: int = 900

    async def get_month(self, month: date, variant: str = EXCHANGE_VARIANT) -> Menu:
        """Return menu days for the month containing ``month``."""
        if variant not in MENU_VARIANTS:
            raise ValueError(f"Unknown menu variant: {variant}")
        first_day = month.replace(day=1)
        cache_key = f"menu:{variant}:{first_day.isoformat()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            return cached
        rows = await self.feed_client.fetch_month(first_day, variant)
        menu = parse_menu_rows(rows, first_day)
        self.cache.set(cache_key, menu, self.ttl_seconds)
        logger.info(
            "Loaded menu",
            extra={
                "month": first_day.isoformat(),
                "variant": variant,
                "days": len(menu),
            },
        )
        return menu

    def invalidate(self) -> int:
        """Forget all cached menus."""
        return self.cache.clear()


def parse_menu_rows(rows: list[dict[str, object]], month: date | None = None) -> Menu:
    """Parse raw feed rows into menu days keyed by date.

    Rows without a parseable date are skipped. When ``month`` is given, rows
    outside that month are skipped too. The first row for a date wins.
    """
    menu: Menu = {}
    for row in rows:
        if not isinstance(row, dict):
            continue
        day = parse_menu_date(row.get("data"))
        if day is None:
            logger.warning("Skipping menu row with invalid date", extra={"row": row})
            continue
        if month is not None and (day.year, day.month) != (month.year, month.month):
            continue
        if day in menu:
            logger.warning("Duplicate menu date", extra={"day": day.isoformat()})
            continue
        menu[day] = MenuDay(
            day=day,
            default_protein=str(row.get("proteina") or "").strip(),
            dish=_optional_str(row.get("prato")),
            description=_optional_str(row.get("descricao")),
            sides=_parse_sides(day, row.get("acompanhamentos")),
            dessert=_optional_str(row.get("sobremesa")),
        )
    return menu


def parse_menu_date(value: object) -> date | None:
    """Parse a dd/MM/yyyy or ISO date string."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    return None


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_sides(day: date, value: object) -> tuple[str, ...]:
    """Return side dishes from a list of strings or a single string."""
    if value is None:
        return ()
    if isinstance(value, str):
        text = value.strip()
        return (text,) if text else ()
    if isinstance(value, list) and all(isinstance(side, str) for side in value):
        return tuple(side.strip() for side in value if side.strip())
    logger.warning(
        "Ignoring malformed side dishes",
        extra={"day": day.isoformat(), "sides": repr(value)},
    )
    return ()
