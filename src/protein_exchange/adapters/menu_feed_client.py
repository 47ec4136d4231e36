"""HTTP client for the published cafeteria menu."""

import logging
from dataclasses import dataclass
from datetime import date

import httpx

from protein_exchange.services.menu import MenuFeedClient

logger = logging.getLogger(__name__)

MONTH_NAMES_PT = (
    "janeiro",
    "fevereiro",
    "marco",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def menu_feed_path(month: date, variant: str) -> str:
    """Return the feed path for a month, e.g. cardapio/cardapio-agosto-padrao.json."""
    return f"cardapio/cardapio-{MONTH_NAMES_PT[month.month - 1]}-{variant}.json"


@dataclass
class HttpxMenuFeedClient(MenuFeedClient):
    """HTTPX-backed menu feed client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxMenuFeedClient":
        """Create a feed client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def fetch_month(self, month: date, variant: str) -> list[dict[str, object]]:
        """Fetch the raw menu rows for a month."""
        url = f"{self.base_url}/{menu_feed_path(month, variant)}"
        response = await self.http_client.get(url, timeout=15)
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.warning("Menu not published", extra={"url": url})
            return []
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise httpx.DecodingError(
                f"Menu feed returned invalid JSON: {url}", request=response.request
            ) from exc
        if not isinstance(payload, list):
            logger.warning("Unexpected menu payload", extra={"url": url})
            return []
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
