"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from diet_optimizer.services.search import SearchConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    telegram_bot_token: str
    supabase_url: str
    supabase_service_key: str
    admin_token: str
    telegram_allowed_user_ids: str | None = None
    telegram_admin_user_ids: str | None = None
    cooldown_minutes: int = 1440
    strict_mode: bool = True
    debug: bool = False
    default_capacity: float = 3000.0
    trial_budget: int = 3000
    min_fill_ratio: float = 0.8
    variety_target: int = 4
    fill_attempts: int = 100
    min_tier_pool: int = 2
    balanced_threshold: float = 15.0
    cache_file_path: str = "diet_optimizer_cache.txt"
    log_file_path: str = "diet_optimizer_log.txt"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def search_config(self) -> SearchConfig:
        """Return the search tunables as an engine configuration value."""
        return SearchConfig(
            trial_budget=self.trial_budget,
            min_fill_ratio=self.min_fill_ratio,
            variety_target=self.variety_target,
            fill_attempts=self.fill_attempts,
            balanced_threshold=self.balanced_threshold,
        )


def parse_user_ids(raw: str | None) -> set[int] | None:
    """Parse a comma-separated list of Telegram user IDs from env.

    Returns None when the list is unset, empty, or ``*``.
    """
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return None
    ids: set[int] = set()
    for chunk in cleaned.split(","):
        value = chunk.strip()
        if not value:
            continue
        if value.isdigit():
            ids.add(int(value))
    return ids or None
