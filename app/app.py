import contextlib
import functools
import logging
from typing import Any, Awaitable, Callable

from databases import Database
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from app import config
from domain.mealdb import MealDBClient
from domain.repository import (
    FavoriteNotFound,
    FavoritesRepository,
    FavoritesStorageError,
)
from domain.services import (
    featured_recipe,
    list_categories,
    random_recipes,
    recipe_by_id,
    recipes_by_category,
    search_recipes,
)


CONFIG = config.Config()


MAX_RANDOM = 25


logging.basicConfig(level=CONFIG.log_level)
logger = logging.getLogger(__name__)


def aJSONResponse(route: Callable[..., Awaitable[Any | tuple[Any, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            content, code = resp, 200
        else:
            content, code = resp
        return JSONResponse(content, status_code=code)

    return wrapper


def storage_errors(route: Callable[..., Awaitable[Any]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await route(*args, **kwargs)
        except FavoritesStorageError:
            logger.exception("Favorites storage failed")
            return {"error": "Something went wrong"}, 500

    return wrapper


@aJSONResponse
@storage_errors
async def list_favorites(request: Request) -> Any:
    repo: FavoritesRepository = request.app.state.repo
    favorites = await repo.list(request.path_params["user_id"])
    return [f.to_dict() for f in favorites]


@aJSONResponse
@storage_errors
async def add_favorite(request: Request) -> Any:
    try:
        body = await request.json()
    except ValueError:
        return {"error": "Body must be JSON"}, 400
    if not isinstance(body, dict):
        return {"error": "Body must be a JSON object"}, 400

    user_id, recipe_id, title = body.get("userId"), body.get("recipeId"), body.get("title")
    if not (user_id and recipe_id and title):
        return {"error": "Missing required fields"}, 400

    repo: FavoritesRepository = request.app.state.repo
    favorite = await repo.add(
        user_id=str(user_id),
        recipe_id=str(recipe_id),
        title=str(title),
        image_url=str(body.get("imageUrl") or body.get("image") or ""),
        cook_time=str(body.get("cookTime") or ""),
        servings=str(body.get("servings") or ""),
    )
    return favorite.to_dict(), 201


@aJSONResponse
@storage_errors
async def remove_favorite(request: Request) -> Any:
    repo: FavoritesRepository = request.app.state.repo
    try:
        await repo.remove(
            request.path_params["user_id"],
            request.path_params["recipe_id"],
        )
    except FavoriteNotFound:
        return {"error": "Favorite not found"}, 404
    return {"success": True}


@aJSONResponse
async def search(request: Request) -> Any:
    recipes = await search_recipes(
        request.query_params.get("q", ""),
        mealdb=request.app.state.mealdb,
        limit=CONFIG.search_limit,
    )
    return [r.to_dict() for r in recipes]


@aJSONResponse
async def random_batch(request: Request) -> Any:
    try:
        count = int(request.query_params.get("count") or CONFIG.random_count)
    except ValueError:
        return {"error": "count must be an integer"}, 400
    count = max(1, min(MAX_RANDOM, count))
    recipes = await random_recipes(count, mealdb=request.app.state.mealdb)
    return [r.to_dict() for r in recipes]


@aJSONResponse
async def featured(request: Request) -> Any:
    recipe = await featured_recipe(mealdb=request.app.state.mealdb)
    if recipe is None:
        return {"error": "No recipe available"}, 404
    return recipe.to_dict()


@aJSONResponse
async def recipe_detail(request: Request) -> Any:
    id = request.path_params["id"]
    recipe = await recipe_by_id(id, mealdb=request.app.state.mealdb)
    if recipe is None:
        return {"error": f"Recipe {id} not found"}, 404
    return recipe.to_dict()


@aJSONResponse
async def categories(request: Request) -> Any:
    return [c.to_dict() for c in await list_categories(mealdb=request.app.state.mealdb)]


@aJSONResponse
async def category_recipes(request: Request) -> Any:
    recipes = await recipes_by_category(
        request.path_params["name"],
        mealdb=request.app.state.mealdb,
    )
    return [r.to_dict() for r in recipes]


def create_app(
    *,
    database: Database | None = None,
    mealdb: MealDBClient | None = None,
) -> Starlette:
    database = Database(CONFIG.db_url) if database is None else database
    mealdb = (
        MealDBClient(CONFIG.mealdb_url, timeout=CONFIG.mealdb_timeout)
        if mealdb is None
        else mealdb
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        await database.connect()
        await app.state.repo.create_table()
        yield
        await mealdb.aclose()
        await database.disconnect()

    app = Starlette(
        debug=True if CONFIG.env == config.Env.local else False,
        routes=[
            Route("/favorites", add_favorite, methods=["POST"]),
            Route("/favorites/{user_id}", list_favorites, methods=["GET"]),
            Route(
                "/favorites/{user_id}/{recipe_id}",
                remove_favorite,
                methods=["DELETE"],
            ),
            Route("/recipes", search),
            Route("/recipes/random", random_batch),
            Route("/recipes/featured", featured),
            Route("/recipes/{id}", recipe_detail),
            Route("/categories", categories),
            Route("/categories/{name}/recipes", category_recipes),
        ],
        lifespan=lifespan,
    )

    app.state.repo = FavoritesRepository(database)
    app.state.mealdb = mealdb
    return app


app = create_app()
