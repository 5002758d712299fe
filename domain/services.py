import asyncio
import logging

from domain.mealdb import MealDBClient
from domain.models import Category, Recipe
from domain.normalize import normalize, normalize_category


SEARCH_LIMIT = 12


logger = logging.getLogger(__name__)


async def random_recipes(count: int, *, mealdb: MealDBClient) -> list[Recipe]:
    """`count` independent random lookups, in flight together.

    Lookups that come back empty are left out, so fewer than `count` recipes
    may be returned.
    """
    coros = [mealdb.random() for _ in range(count)]
    meals = await asyncio.gather(*coros, return_exceptions=True)
    recipes: list[Recipe] = []
    for meal in meals:
        if isinstance(meal, BaseException):
            logger.warning("Random meal lookup failed: %r", meal)
            continue
        recipe = normalize(meal)
        if recipe is not None:
            recipes.append(recipe)
    return recipes


async def featured_recipe(*, mealdb: MealDBClient) -> Recipe | None:
    return normalize(await mealdb.random())


async def search_recipes(
    query: str,
    *,
    mealdb: MealDBClient,
    limit: int = SEARCH_LIMIT,
) -> list[Recipe]:
    if not query.strip():
        return await random_recipes(limit, mealdb=mealdb)

    meals = await mealdb.search_by_name(query)
    if not meals:
        logger.debug("No meal named %r, trying it as an ingredient", query)
        meals = await mealdb.filter_by_ingredient(query)

    recipes = (normalize(meal) for meal in meals[:limit])
    return [recipe for recipe in recipes if recipe is not None]


async def recipe_by_id(id: str, *, mealdb: MealDBClient) -> Recipe | None:
    return normalize(await mealdb.lookup(id))


async def list_categories(*, mealdb: MealDBClient) -> list[Category]:
    categories = await mealdb.categories()
    return [normalize_category(c, i) for i, c in enumerate(categories, start=1)]


async def recipes_by_category(category: str, *, mealdb: MealDBClient) -> list[Recipe]:
    meals = await mealdb.filter_by_category(category)
    recipes = (normalize(meal) for meal in meals)
    return [recipe for recipe in recipes if recipe is not None]


async def main() -> None:
    mealdb = MealDBClient()

    while True:
        qu = input("Search: ")
        if qu.lower() in ("q", "quit", "exit"):
            break
        for recipe in await search_recipes(qu, mealdb=mealdb):
            print(f"[bold]{recipe.title}[/bold] ({recipe.id}) {recipe.category}")

    await mealdb.aclose()


if __name__ == "__main__":
    from rich import print

    asyncio.run(main())
