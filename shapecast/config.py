from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Validation defaults for newly constructed schemas
    ABORT_EARLY: bool = True
    RECURSIVE: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for machine-readable JSON lines, False for colored console

    model_config = SettingsConfigDict(env_prefix="SHAPECAST_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
