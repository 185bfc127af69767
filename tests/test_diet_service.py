"""Tests for the diet recommendation service."""

import logging
import random

import pytest

from diet_optimizer.domain.diet import RecommendationStatus
from diet_optimizer.domain.taste import TasteLabel
from diet_optimizer.services.cache import ResultCache
from diet_optimizer.services.diet import DietService
from diet_optimizer.services.search import DietSearchEngine
from tests.fakes import (
    FakeClock,
    InMemoryCacheStore,
    InMemoryFoodCatalog,
    InMemoryPreferenceProvider,
    make_food,
)


def test_recommend_computes_valid_plan(
    diet_service: DietService, cache_store: InMemoryCacheStore
) -> None:
    result = diet_service.recommend("42")

    assert result.status is RecommendationStatus.COMPUTED
    assert result.plan is not None
    assert 2400 <= result.plan.total_calories <= 3000
    assert set(result.plan.foods) <= {"stew", "pie", "steak"}
    assert result.names.get("pie", "Fruit Pie") == "Fruit Pie"
    assert all(result.names[food_id] for food_id in result.plan.foods)
    assert "42" in cache_store.saved


def test_recommend_serves_cache_within_cooldown(
    diet_service: DietService, clock: FakeClock
) -> None:
    first = diet_service.recommend("42")
    clock.advance(hours=1)
    second = diet_service.recommend("42", meals=3)

    assert second.status is RecommendationStatus.CACHED
    assert second.plan == first.plan
    assert second.meals == 3
    assert second.remaining is not None
    assert second.remaining.total_seconds() == 23 * 3600


def test_recommend_recomputes_after_cooldown(
    diet_service: DietService, clock: FakeClock
) -> None:
    diet_service.recommend("42")
    clock.advance(minutes=1440)

    result = diet_service.recommend("42", meals=2)

    assert result.status is RecommendationStatus.COMPUTED
    assert result.had_previous is True


def test_recommend_without_candidates(
    diet_service: DietService, preferences: InMemoryPreferenceProvider
) -> None:
    preferences.tastes["42"] = {"stew": "Bad", "pie": "Worst", "steak": "Horrible"}

    result = diet_service.recommend("42")

    assert result.status is RecommendationStatus.NO_CANDIDATE
    assert result.plan is None
    assert diet_service.cache.peek("42") is None


def test_relaxed_mode_uses_unknown_foods(diet_service: DietService) -> None:
    diet_service.toggle_strict()

    result = diet_service.recommend("new-user")

    assert diet_service.options.strict is False
    assert result.status is RecommendationStatus.COMPUTED
    assert result.plan is not None
    assert result.plan.average_taste_score == 1.0


def test_strict_mode_without_tastes_has_no_candidate(
    diet_service: DietService, preferences: InMemoryPreferenceProvider
) -> None:
    result = diet_service.recommend("new-user")

    assert result.status is RecommendationStatus.NO_CANDIDATE
    assert preferences.warm_ups == ["new-user"]


def test_cold_start_retries_after_warm_up(
    diet_service: DietService, preferences: InMemoryPreferenceProvider
) -> None:
    preferences.pending_tastes["7"] = {"stew": "Good"}

    result = diet_service.recommend("7")

    assert preferences.warm_ups == ["7"]
    assert result.status is RecommendationStatus.COMPUTED
    assert result.plan is not None
    assert result.plan.foods == {"stew": 3}


def test_provider_failures_degrade_to_no_data(
    diet_service: DietService,
    catalog: InMemoryFoodCatalog,
    preferences: InMemoryPreferenceProvider,
) -> None:
    catalog.fail = True
    preferences.fail = True

    result = diet_service.recommend("42")

    assert result.status is RecommendationStatus.NO_CANDIDATE


def test_adapter_bugs_are_not_swallowed(
    diet_service: DietService, catalog: InMemoryFoodCatalog
) -> None:
    def broken_lookup(food_id: str) -> None:
        raise TypeError(f"bad row for {food_id}")

    catalog.get_food = broken_lookup  # type: ignore[method-assign]

    with pytest.raises(TypeError):
        diet_service.recommend("42")
    assert diet_service.cache.peek("42") is None


def test_capacity_defaults_when_provider_reports_none(
    diet_service: DietService, preferences: InMemoryPreferenceProvider
) -> None:
    del preferences.capacities["42"]
    diet_service.default_capacity = 900

    result = diet_service.recommend("42")

    assert result.plan is not None
    assert 720 <= result.plan.total_calories <= 900


def test_clear_forces_recompute(diet_service: DietService) -> None:
    diet_service.recommend("42")

    assert diet_service.clear("42") is True
    assert diet_service.cache.get("42") is None
    assert diet_service.clear("42") is False


def test_taste_profile_respects_favorite_discovery(
    diet_service: DietService, preferences: InMemoryPreferenceProvider
) -> None:
    preferences.tastes["42"]["stew"] = "Favorite"

    hidden = diet_service.taste_profile("42")
    preferences.favorite_discovered.add("42")
    shown = diet_service.taste_profile("42")

    assert "stew" in hidden.excluded
    assert shown.allowed["stew"] is TasteLabel.FAVORITE


def test_taste_listing_uses_display_names(diet_service: DietService) -> None:
    listing = diet_service.taste_listing("42")

    assert listing.groups[TasteLabel.DELICIOUS] == ["Fruit Pie"]
    assert listing.groups[TasteLabel.GOOD] == ["Vegetable Stew"]
    assert listing.total == 3


def test_set_cooldown_and_debug(diet_service: DietService, tmp_path) -> None:
    diet_service.log_file_path = str(tmp_path / "diet.log")

    diet_service.set_cooldown(5)
    enabled = diet_service.toggle_debug()
    disabled = diet_service.toggle_debug()

    assert diet_service.cache.cooldown.total_seconds() == 300
    assert enabled is True
    assert disabled is False
    assert diet_service.cache.debug is False
    assert logging.getLogger("diet_optimizer").level == logging.INFO


def test_strict_mode_ignores_missing_catalog_entries(clock: FakeClock) -> None:
    service = DietService(
        catalog=InMemoryFoodCatalog.of(make_food("stew")),
        preferences=InMemoryPreferenceProvider(
            tastes={"1": {"stew": "Good", "ghost": "Delicious"}}
        ),
        cache=ResultCache(clock=clock),
        engine=DietSearchEngine(rng=random.Random(3)),
    )

    plan = service.compute_plan("1")

    assert plan is not None
    assert plan.foods == {"stew": 3}
