from enum import Enum

from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    db_url: str = "sqlite+aiosqlite:///mealbook.db"
    mealdb_url: str = "https://www.themealdb.com/api/json/v1/1/"
    mealdb_timeout: float = 20
    search_limit: int = 12
    random_count: int = 12
    log_level: str = "INFO"
