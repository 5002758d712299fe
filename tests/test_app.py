import httpx
import pytest
from databases import Database
from starlette.testclient import TestClient

from app.app import create_app
from conftest import BrokenDatabase, Upstream, meal


FAVORITE = {
    "userId": "user_1",
    "recipeId": 52772,
    "title": "Teriyaki Chicken Casserole",
    "image": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
    "cookTime": "30 minutes",
    "servings": "4",
}


def upstream_handler(request: httpx.Request):
    path = request.url.path
    if path.endswith("search.php"):
        return {"meals": [meal("52772")]}
    if path.endswith("lookup.php"):
        if request.url.params["i"] == "52772":
            return {"meals": [meal("52772")]}
        return {"meals": None}
    if path.endswith("random.php"):
        return {"meals": [meal("52940", "Brown Stew Chicken")]}
    if path.endswith("categories.php"):
        return {"categories": [{"strCategory": "Beef"}]}
    if path.endswith("filter.php"):
        return {"meals": [{"idMeal": "52874", "strMeal": "Beef and Mustard Pie"}]}
    return httpx.Response(404)


@pytest.fixture
def client(db_url: str):
    app = create_app(
        database=Database(db_url),
        mealdb=Upstream(upstream_handler).client(),
    )
    with TestClient(app) as client:
        yield client


def test_favorites_round_trip(client: TestClient) -> None:
    resp = client.post("/favorites", json=FAVORITE)
    assert resp.status_code == 201
    created = resp.json()
    assert created["recipeId"] == "52772"
    assert created["imageUrl"] == FAVORITE["image"]

    resp = client.get("/favorites/user_1")
    assert resp.status_code == 200
    assert [f["recipeId"] for f in resp.json()] == ["52772"]

    resp = client.delete("/favorites/user_1/52772")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    assert client.get("/favorites/user_1").json() == []


def test_add_favorite_twice(client: TestClient) -> None:
    first = client.post("/favorites", json=FAVORITE).json()
    second = client.post("/favorites", json=FAVORITE).json()

    assert first["id"] == second["id"]
    assert len(client.get("/favorites/user_1").json()) == 1


@pytest.mark.parametrize(
    "body",
    (
        {"userId": "user_1", "recipeId": "1"},
        {"recipeId": "1", "title": "Soup"},
        ["user_1", "1", "Soup"],
    ),
)
def test_add_favorite_bad_request(client: TestClient, body) -> None:
    resp = client.post("/favorites", json=body)
    assert resp.status_code == 400


def test_add_favorite_not_json(client: TestClient) -> None:
    resp = client.post("/favorites", content=b"userId=user_1")
    assert resp.status_code == 400


def test_remove_missing_favorite(client: TestClient) -> None:
    resp = client.delete("/favorites/user_1/404")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Favorite not found"}


def test_storage_failure(db_url: str) -> None:
    app = create_app(
        database=Database(db_url),
        mealdb=Upstream(upstream_handler).client(),
    )
    with TestClient(app) as client:
        app.state.repo.db = BrokenDatabase()
        assert client.get("/favorites/user_1").status_code == 500
        assert client.post("/favorites", json=FAVORITE).status_code == 500
        resp = client.delete("/favorites/user_1/52772")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Something went wrong"}


def test_search(client: TestClient) -> None:
    resp = client.get("/recipes", params={"q": "casserole"})
    assert resp.status_code == 200
    assert [r["id"] for r in resp.json()] == ["52772"]


def test_search_without_query(client: TestClient) -> None:
    resp = client.get("/recipes")
    assert resp.status_code == 200
    assert len(resp.json()) == 12


def test_random(client: TestClient) -> None:
    assert len(client.get("/recipes/random", params={"count": 3}).json()) == 3
    assert len(client.get("/recipes/random", params={"count": 500}).json()) == 25
    assert client.get("/recipes/random", params={"count": "many"}).status_code == 400


def test_featured(client: TestClient) -> None:
    resp = client.get("/recipes/featured")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Brown Stew Chicken"


def test_recipe_detail(client: TestClient) -> None:
    resp = client.get("/recipes/52772")
    assert resp.status_code == 200
    recipe = resp.json()
    assert recipe["ingredients"] == ["3/4 cup soy sauce"]
    assert recipe["instructions"] == ["Preheat oven.", "Cook the chicken."]

    assert client.get("/recipes/1").status_code == 404


def test_categories(client: TestClient) -> None:
    assert client.get("/categories").json() == [
        {"id": 1, "name": "Beef", "imageUrl": "", "description": ""}
    ]

    resp = client.get("/categories/Beef/recipes")
    assert [r["title"] for r in resp.json()] == ["Beef and Mustard Pie"]
