"""
Application configuration loaded from environment variables.

Uses pydantic-settings for type-safe env var parsing with automatic
.env file loading. The TMDB credential is injected via environment and
handed explicitly to the upstream client — it is never logged.

To extend: add new fields here and document them in .env.example.
See https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ─── Core ──────────────────────────────────────────────────────
    environment: str = "development"
    debug: bool = False

    # ─── TMDB upstream ─────────────────────────────────────────────
    # v4 "API Read Access Token" from https://www.themoviedb.org/settings/api
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_timeout_seconds: float = 10.0

    # ─── Rate limiting ─────────────────────────────────────────────
    # `limits` notation, e.g. "30/minute", "5 per 10 seconds".
    search_rate_limit: str = "30/minute"
    detail_rate_limit: str = "60/minute"
    # memory:// for a single process; redis://host:6379 when running
    # several instances behind a load balancer.
    rate_limit_storage_uri: str = "memory://"
    rate_limit_strategy: str = "fixed-window"

    # ─── Detail composition ────────────────────────────────────────
    # degrade: a failed videos call yields trailers=[]
    # fail:    a failed videos call fails the whole detail request
    trailer_failure_mode: Literal["degrade", "fail"] = "degrade"

    # ─── CORS ──────────────────────────────────────────────────────
    cors_origins_str: str = "http://localhost:5173,http://localhost:3000"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_str.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Don't fail on unknown env vars
    )


# Module-level singleton — import this everywhere instead of instantiating Settings()
settings = Settings()
