"""Dashboard client module.

Holds the dashboard state (month, search text, page) and keeps the
transactions table, statistics cards and bar chart in sync with it by
re-fetching from the API whenever the state changes.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_MONTH = 3
DEFAULT_PER_PAGE = 10

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass
class DashboardState:
    """User-controlled dashboard parameters."""

    month: int = DEFAULT_MONTH
    search: str = ""
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE


class DashboardClient:
    """Fetches dashboard data for the current state from the API.

    Each of the three fetches is independent: a failed request is logged
    and leaves the previously fetched value in place.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        state: Optional[DashboardState] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.state = state or DashboardState()
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

        self.transactions: list[dict[str, Any]] = []
        self.total: int = 0
        self.statistics: Optional[dict[str, Any]] = None
        self.bar_chart: list[dict[str, Any]] = []

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    @property
    def can_go_previous(self) -> bool:
        return self.state.page > 1

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        response = await self.http_client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def fetch_transactions(self) -> None:
        params = {
            "month": self.state.month,
            "search": self.state.search,
            "page": self.state.page,
            "perPage": self.state.per_page,
        }
        try:
            data = await self._get("/api/transactions", params)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error fetching transactions: %s", exc)
            return
        if not isinstance(data, dict):
            logger.error("Error fetching transactions: unexpected response %r", data)
            return
        self.transactions = data.get("transactions", [])
        self.total = data.get("total", 0)

    async def fetch_statistics(self) -> None:
        try:
            data = await self._get("/api/statistics", {"month": self.state.month})
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error fetching statistics: %s", exc)
            return
        if not isinstance(data, dict):
            logger.error("Error fetching statistics: unexpected response %r", data)
            return
        self.statistics = data

    async def fetch_bar_chart(self) -> None:
        try:
            data = await self._get("/api/barchart", {"month": self.state.month})
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error fetching bar chart data: %s", exc)
            return
        if not isinstance(data, list):
            logger.error("Error fetching bar chart data: unexpected response %r", data)
            return
        self.bar_chart = data

    async def refresh(self) -> None:
        """Re-fetch transactions, statistics and bar chart for the current state."""
        await self.fetch_transactions()
        await self.fetch_statistics()
        await self.fetch_bar_chart()

    async def set_month(self, month: int) -> None:
        if not 1 <= month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {month}")
        self.state.month = month
        await self.refresh()

    async def set_search(self, search: str) -> None:
        self.state.search = search
        await self.refresh()

    async def next_page(self) -> None:
        # No upper bound: a page past the end shows an empty table
        self.state.page += 1
        await self.refresh()

    async def previous_page(self) -> None:
        if not self.can_go_previous:
            return
        self.state.page -= 1
        await self.refresh()
