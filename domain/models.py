from dataclasses import dataclass
from datetime import datetime
from typing import Any
from urllib.parse import parse_qs, urlparse


@dataclass(frozen=True, kw_only=True)
class Recipe:
    """A TheMealDB meal in the shape the rest of the app consumes."""

    id: str
    title: str
    description: str
    image_url: str
    category: str
    area: str | None
    ingredients: tuple[str, ...]
    instructions: tuple[str, ...]
    # TheMealDB has neither, these are placeholders.
    cook_time: str = "30 minutes"
    servings: int = 4
    youtube_url: str | None = None

    @property
    def youtube_embed_url(self) -> str | None:
        if not self.youtube_url:
            return None
        video = parse_qs(urlparse(self.youtube_url).query).get("v")
        if not video:
            return None
        return f"https://www.youtube.com/embed/{video[0]}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "imageUrl": self.image_url,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "category": self.category,
            "area": self.area,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "youtubeUrl": self.youtube_url,
            "youtubeEmbedUrl": self.youtube_embed_url,
        }


@dataclass(frozen=True, kw_only=True)
class Category:
    id: int
    name: str
    image_url: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "imageUrl": self.image_url,
            "description": self.description,
        }


class FavoriteEntry:
    def __init__(
        self,
        *,
        id: str,
        user_id: str,
        recipe_id: str,
        title: str,
        image_url: str,
        cook_time: str,
        servings: str,
        created_at: datetime | str | None = None,
    ) -> None:
        self.id = id
        self.user_id = user_id
        self.recipe_id = recipe_id
        self.title = title
        self.image_url = image_url
        self.cook_time = cook_time
        self.servings = servings
        self.created_at = created_at

    def __repr__(self) -> str:
        return (
            f"<FavoriteEntry(user_id={self.user_id}, recipe_id={self.recipe_id})>"
        )

    def to_dict(self) -> dict[str, Any]:
        created_at = self.created_at
        if isinstance(created_at, datetime):
            created_at = created_at.isoformat()
        return {
            "id": self.id,
            "userId": self.user_id,
            "recipeId": self.recipe_id,
            "title": self.title,
            "imageUrl": self.image_url,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "createdAt": created_at,
        }
