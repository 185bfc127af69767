"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from supabase import create_client

from diet_optimizer.adapters.file_cache_store import FileCacheStore
from diet_optimizer.adapters.supabase_food_catalog import SupabaseFoodCatalog
from diet_optimizer.adapters.supabase_preference_provider import (
    SupabasePreferenceProvider,
)
from diet_optimizer.adapters.telegram_client import (
    HttpxTelegramClient,
    TelegramClient,
)
from diet_optimizer.config import Settings
from diet_optimizer.services.cache import ResultCache
from diet_optimizer.services.candidates import CandidatePoolBuilder
from diet_optimizer.services.diet import DietService, RuntimeOptions
from diet_optimizer.services.search import DietSearchEngine


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    diet_service: DietService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    cache = ResultCache(
        store=FileCacheStore(Path(resolved_settings.cache_file_path)),
        cooldown=timedelta(minutes=resolved_settings.cooldown_minutes),
    )
    cache.restore()
    diet_service = DietService(
        catalog=SupabaseFoodCatalog(supabase_client),
        preferences=SupabasePreferenceProvider(supabase_client),
        cache=cache,
        engine=DietSearchEngine(config=resolved_settings.search_config()),
        pool_builder=CandidatePoolBuilder(
            min_tier_pool=resolved_settings.min_tier_pool
        ),
        options=RuntimeOptions(strict=resolved_settings.strict_mode),
        default_capacity=resolved_settings.default_capacity,
        log_file_path=resolved_settings.log_file_path,
    )
    if resolved_settings.debug:
        diet_service.set_debug(True)
    telegram_client = HttpxTelegramClient.create(resolved_settings.telegram_bot_token)

    async def close_resources() -> None:
        await telegram_client.close()

    return AppContainer(
        settings=resolved_settings,
        telegram_client=telegram_client,
        diet_service=diet_service,
        close_resources=close_resources,
    )
