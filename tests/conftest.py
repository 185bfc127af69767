"""Shared test fixtures."""

import random

import pytest

from diet_optimizer.config import Settings
from diet_optimizer.containers import AppContainer
from diet_optimizer.services.cache import ResultCache
from diet_optimizer.services.diet import DietService, RuntimeOptions
from diet_optimizer.services.search import DietSearchEngine, SearchConfig
from tests.fakes import (
    FakeClock,
    FakeTelegramClient,
    InMemoryCacheStore,
    InMemoryFoodCatalog,
    InMemoryPreferenceProvider,
    make_food,
)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        telegram_bot_token="test-token",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        telegram_admin_user_ids="900",
        cache_file_path=str(tmp_path / "cache.txt"),
        log_file_path=str(tmp_path / "diet.log"),
        environment="test",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog() -> InMemoryFoodCatalog:
    return InMemoryFoodCatalog.of(
        make_food("stew", name="Vegetable Stew", skill="Cooking"),
        make_food(
            "pie",
            name="Fruit Pie",
            skill="Baking",
            carbs=40,
            fat=20,
            protein=10,
            vitamins=30,
        ),
        make_food(
            "steak",
            name="Steak",
            skill="Cooking",
            carbs=0,
            fat=40,
            protein=60,
            vitamins=0,
        ),
    )


@pytest.fixture
def preferences() -> InMemoryPreferenceProvider:
    return InMemoryPreferenceProvider(
        tastes={"42": {"stew": "Good", "pie": "Delicious", "steak": "Ok"}},
        capacities={"42": 3000.0},
    )


@pytest.fixture
def cache_store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def diet_service(
    catalog: InMemoryFoodCatalog,
    preferences: InMemoryPreferenceProvider,
    cache_store: InMemoryCacheStore,
    clock: FakeClock,
) -> DietService:
    return DietService(
        catalog=catalog,
        preferences=preferences,
        cache=ResultCache(store=cache_store, clock=clock),
        engine=DietSearchEngine(
            config=SearchConfig(trial_budget=400), rng=random.Random(7)
        ),
        options=RuntimeOptions(strict=True),
    )


@pytest.fixture
def telegram_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def container(
    settings: Settings,
    telegram_client: FakeTelegramClient,
    diet_service: DietService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        telegram_client=telegram_client,
        diet_service=diet_service,
        close_resources=close_resources,
    )
