"""Application settings.

Values come from the environment (or a ``.env`` file) through
pydantic-settings. ``DATABASE_URL`` and ``PORT`` keep the names the
deployment already uses.
"""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="Bartender")
    database_url: str = Field(default="sqlite:///./bartender.db")
    db_echo: bool = Field(default=False)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)
    reload: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    seed_standard_recipes: bool = Field(default=True)
    # LC_COLLATE for ingredient suggestions, e.g. "fr_FR.UTF-8"; empty keeps the process default
    collation_locale: str = Field(default="")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
