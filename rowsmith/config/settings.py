"""Runtime configuration for rowsmith factories."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FactorySettings(BaseSettings):
    """Settings read from ``ROWSMITH_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="ROWSMITH_", extra="ignore")

    generate_nullables: bool = Field(
        default=False,
        description="Generate values for nullable columns left unset by the factory.",
    )
    faker_locale: str = Field(default="en_US")
    faker_seed: int | None = Field(
        default=None,
        description="Seed applied to the Faker instance for reproducible data.",
    )
    string_max_length: int = Field(default=32, ge=1)


@lru_cache
def get_settings() -> FactorySettings:
    """Return the cached process settings."""

    return FactorySettings()


__all__ = ["FactorySettings", "get_settings"]
