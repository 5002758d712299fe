"""Turn TheMealDB meal records into `Recipe`s.

A meal carries up to 20 numbered `strIngredientN` / `strMeasureN` pairs, any of
which may be missing, `null` or blank. Only those slots are read; every other
key the API sends is ignored.
"""

from collections.abc import Mapping
import re
from typing import Any

from domain.models import Category, Recipe


INGREDIENT_SLOTS = 20
DESCRIPTION_LENGTH = 120
DEFAULT_DESCRIPTION = "Delicious meal from TheMealDB"
DEFAULT_CATEGORY = "Main Course"

LINE_BREAK = re.compile(r"\r?\n")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def ingredients(raw: Mapping[str, Any]) -> tuple[str, ...]:
    lines: list[str] = []
    for i in range(1, INGREDIENT_SLOTS + 1):
        ingredient = _text(raw.get(f"strIngredient{i}")).strip()
        if not ingredient:
            continue
        measure = _text(raw.get(f"strMeasure{i}")).strip()
        lines.append(f"{measure} {ingredient}" if measure else ingredient)
    return tuple(lines)


def instructions(raw: Mapping[str, Any]) -> tuple[str, ...]:
    text = _text(raw.get("strInstructions"))
    return tuple(step for step in LINE_BREAK.split(text) if step.strip())


def description(raw: Mapping[str, Any]) -> str:
    text = _text(raw.get("strInstructions"))
    if not text:
        return DEFAULT_DESCRIPTION
    return text[:DESCRIPTION_LENGTH] + "..."


def normalize(raw: Mapping[str, Any] | None) -> Recipe | None:
    """Normalize one meal, or return None when there is nothing to normalize.

    Missing fields fall back to defaults, a record without an `idMeal` has no
    identity and is treated like a missing record.
    """
    if not isinstance(raw, Mapping):
        return None

    id = raw.get("idMeal")
    if id is None or not str(id).strip():
        return None

    return Recipe(
        id=str(id),
        title=_text(raw.get("strMeal")),
        description=description(raw),
        image_url=_text(raw.get("strMealThumb")),
        category=_text(raw.get("strCategory")) or DEFAULT_CATEGORY,
        area=_text(raw.get("strArea")) or None,
        ingredients=ingredients(raw),
        instructions=instructions(raw),
        youtube_url=_text(raw.get("strYoutube")) or None,
    )


def normalize_category(raw: Mapping[str, Any], position: int) -> Category:
    return Category(
        id=position,
        name=_text(raw.get("strCategory")),
        image_url=_text(raw.get("strCategoryThumb")),
        description=_text(raw.get("strCategoryDescription")),
    )
