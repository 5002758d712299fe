import logging
from typing import Any

import httpx


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"
TIMEOUT = 20


logger = logging.getLogger(__name__)


type Meal = dict[str, Any]


class MealDBClient:
    """Thin client over the TheMealDB endpoints.

    Every call swallows upstream trouble (transport errors, bad statuses,
    malformed bodies) and returns an empty result. A `null` envelope is the
    API's way of saying "no matches" and is read as an empty list.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = TIMEOUT,
    ) -> None:
        self.aclient = (
            httpx.AsyncClient(base_url=base_url, timeout=timeout)
            if http_client is None
            else http_client
        )

    async def _get(
        self,
        path: str,
        *,
        key: str = "meals",
        params: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        try:
            resp = await self.aclient.get(path, params=params)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("TheMealDB %s %s failed: %r", path, params or "", e)
            return []

        items = data.get(key) if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict)]

    async def search_by_name(self, query: str) -> list[Meal]:
        return await self._get("search.php", params={"s": query})

    async def lookup(self, id: str) -> Meal | None:
        meals = await self._get("lookup.php", params={"i": id})
        return meals[0] if meals else None

    async def random(self) -> Meal | None:
        meals = await self._get("random.php")
        return meals[0] if meals else None

    async def filter_by_ingredient(self, ingredient: str) -> list[Meal]:
        return await self._get("filter.php", params={"i": ingredient})

    async def filter_by_category(self, category: str) -> list[Meal]:
        return await self._get("filter.php", params={"c": category})

    async def categories(self) -> list[dict[str, Any]]:
        return await self._get("categories.php", key="categories")

    async def aclose(self) -> None:
        await self.aclient.aclose()
