from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PLUSGRID_",
        case_sensitive=False,
    )

    # Codec
    default_code_length: int = 10

    # Code format; the defaults are the canonical plus code scheme.
    code_alphabet: str = "23456789CFGHJMPQRVWX"
    separator: str = "+"
    separator_position: int = 8
    padding_character: str = "0"

    # CORS (dev defaults for a local map client)
    cors_allow_origin: str = "http://localhost:3000"
    cors_allow_credentials: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
