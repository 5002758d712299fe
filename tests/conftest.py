import contextlib
import inspect
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio
from databases import Database

from domain.mealdb import BASE_URL, MealDBClient
from domain.repository import FavoritesRepository


def meal(id: str, name: str = "Teriyaki Chicken Casserole", **extra: Any) -> dict[str, Any]:
    return {
        "idMeal": id,
        "strMeal": name,
        "strCategory": "Chicken",
        "strArea": "Japanese",
        "strInstructions": "Preheat oven.\r\nCook the chicken.",
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{id}.jpg",
        "strIngredient1": "soy sauce",
        "strMeasure1": "3/4 cup",
        **extra,
    }


class Upstream:
    """Records every request and answers from `handler`."""

    def __init__(self, handler: Callable[[httpx.Request], Any]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        resp = self.handler(request)
        if inspect.isawaitable(resp):
            resp = await resp
        if isinstance(resp, httpx.Response):
            return resp
        return httpx.Response(200, json=resp)

    @property
    def paths(self) -> list[str]:
        return [r.url.path.rsplit("/", 1)[-1] for r in self.requests]

    def client(self) -> MealDBClient:
        return MealDBClient(
            http_client=httpx.AsyncClient(
                base_url=BASE_URL,
                transport=httpx.MockTransport(self),
            )
        )


class BrokenDatabase:
    """Stands in for a `databases.Database` whose connection has gone away."""

    async def execute(self, *args: Any, **kwargs: Any) -> Any:
        raise RuntimeError("connection reset")

    async def fetch_one(self, *args: Any, **kwargs: Any) -> Any:
        raise RuntimeError("connection reset")

    async def fetch_all(self, *args: Any, **kwargs: Any) -> Any:
        raise RuntimeError("connection reset")

    @contextlib.asynccontextmanager
    async def transaction(self):
        yield


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'favorites.db'}"


@pytest_asyncio.fixture
async def repo(db_url: str):
    database = Database(db_url)
    await database.connect()
    repository = FavoritesRepository(database)
    await repository.create_table()
    yield repository
    await database.disconnect()
