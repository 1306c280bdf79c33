from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./pasties.db"
    database_echo: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 7878

    # Slugs
    slug_length: int = Field(8, ge=4, le=64)
    slug_max_attempts: int = Field(10, ge=1)
    slug_max_length: int = Field(250, ge=1)
    reserved_slugs: List[str] = ["api", "meta", "assets", "health", "docs", "redoc"]

    # Content
    content_max_length: int = Field(200_000, ge=1)

    # Edit passwords
    empty_password_policy: Literal["allow", "generate"] = "allow"
    argon2_time_cost: int = 2
    argon2_memory_cost: int = 19 * 1024  # KiB
    argon2_parallelism: int = 1

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PASTIES_", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
