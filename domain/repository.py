import logging
from typing import Any
from uuid import uuid4

from databases import Database

from domain.models import FavoriteEntry


CREATE_FAVORITES_TABLE = """
CREATE TABLE IF NOT EXISTS favorites (
    id VARCHAR(64) PRIMARY KEY,
    user_id VARCHAR(256) NOT NULL,
    recipe_id VARCHAR(64) NOT NULL,
    title VARCHAR(512) NOT NULL,
    image_url VARCHAR(1024),
    cook_time VARCHAR(64),
    servings VARCHAR(64),
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    UNIQUE (user_id, recipe_id)
)
"""


ADD_FAVORITE = """
INSERT INTO favorites (id, user_id, recipe_id, title, image_url, cook_time, servings)
VALUES (:id, :user_id, :recipe_id, :title, :image_url, :cook_time, :servings)
ON CONFLICT (user_id, recipe_id) DO NOTHING
"""


GET_FAVORITE = (
    "SELECT * FROM favorites WHERE user_id = :user_id AND recipe_id = :recipe_id"
)


LIST_FAVORITES = (
    "SELECT * FROM favorites WHERE user_id = :user_id ORDER BY created_at, id"
)


REMOVE_FAVORITE = (
    "DELETE FROM favorites WHERE user_id = :user_id AND recipe_id = :recipe_id"
)


logger = logging.getLogger(__name__)


class FavoriteNotFound(Exception):
    pass


class FavoritesStorageError(Exception):
    pass


def _entry(row: Any) -> FavoriteEntry:
    return FavoriteEntry(
        id=row["id"],
        user_id=row["user_id"],
        recipe_id=row["recipe_id"],
        title=row["title"],
        image_url=row["image_url"] or "",
        cook_time=row["cook_time"] or "",
        servings=row["servings"] or "",
        created_at=row["created_at"],
    )


class FavoritesRepository:
    """Favorite recipes, one row per (user, recipe).

    Any failure from the database surfaces as `FavoritesStorageError` so
    callers can tell it apart from `FavoriteNotFound`.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_table(self) -> None:
        try:
            await self.db.execute(query=CREATE_FAVORITES_TABLE)
        except Exception as e:
            raise FavoritesStorageError("Could not create favorites table.") from e

    async def add(
        self,
        *,
        user_id: str,
        recipe_id: str,
        title: str,
        image_url: str = "",
        cook_time: str = "",
        servings: str = "",
    ) -> FavoriteEntry:
        """Save a favorite. Saving one that already exists returns the existing row."""
        values = {"user_id": user_id, "recipe_id": recipe_id}
        try:
            async with self.db.transaction():
                await self.db.execute(
                    ADD_FAVORITE,
                    values={
                        **values,
                        "id": uuid4().hex,
                        "title": title,
                        "image_url": image_url,
                        "cook_time": cook_time,
                        "servings": servings,
                    },
                )
                row = await self.db.fetch_one(GET_FAVORITE, values=values)
        except Exception as e:
            raise FavoritesStorageError(f"Could not add favorite {values}.") from e

        if row is None:
            raise FavoritesStorageError(f"Favorite {values} missing after insert.")
        return _entry(row)

    async def list(self, user_id: str) -> list[FavoriteEntry]:
        try:
            rows = await self.db.fetch_all(LIST_FAVORITES, values={"user_id": user_id})
        except Exception as e:
            raise FavoritesStorageError(f"Could not list favorites of {user_id}.") from e
        return [_entry(r) for r in rows]

    async def remove(self, user_id: str, recipe_id: str) -> int:
        values = {"user_id": user_id, "recipe_id": recipe_id}
        try:
            async with self.db.transaction():
                rows = await self.db.fetch_all(GET_FAVORITE, values=values)
                if rows:
                    await self.db.execute(REMOVE_FAVORITE, values=values)
        except Exception as e:
            raise FavoritesStorageError(f"Could not remove favorite {values}.") from e

        if not rows:
            raise FavoriteNotFound(f"{user_id}/{recipe_id}")

        logger.info("Removed favorite %s/%s", user_id, recipe_id)
        return len(rows)
