from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    APP_NAME: str = "hms"
    ENV: Literal["local", "dev", "prod"] = "local"
    API_PREFIX: str = "/api/v1"

    # Auth: tokens are minted by the external identity provider (HS256 shared secret)
    JWT_ALG: str = "HS256"
    JWT_SECRET: str = "dev-secret-change-me"
    REQUIRED_AUDIENCE: str | None = None

    # Durable key-value storage for the entity collections
    KV_STORAGE_PROVIDER: Literal["memory", "local", "sql", "redis"] = "local"
    KV_KEY_PREFIX: str = "ls_"

    # Local storage (one JSON file per key)
    LOCAL_STORAGE_ROOT: str = "./data"

    # SQL storage (single key/value table)
    SQL_DSN: str = "sqlite:///./hms.db"

    # Redis storage
    REDIS_URL: str | None = None

    # Optional JSON file replacing the built-in seed collections
    SEED_DATA_PATH: str | None = None

    @field_validator("SQL_DSN")
    @classmethod
    def _must_be_sync_driver(cls, v: str):
        if "+asyncpg" in v or "+aiosqlite" in v:
            raise ValueError("SQL_DSN must use a synchronous driver (e.g. sqlite:///./hms.db)")
        return v

settings = Settings()
