"""Diet recommendation service tying providers, search and cache together."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import TypeVar

from diet_optimizer.app_logging import set_debug_logging
from diet_optimizer.domain.diet import DietPlan, Recommendation, RecommendationStatus
from diet_optimizer.domain.errors import ProviderUnavailable
from diet_optimizer.domain.foods import FoodDescriptor
from diet_optimizer.domain.taste import TasteListing, TasteProfile
from diet_optimizer.services.cache import ResultCache
from diet_optimizer.services.candidates import CandidatePoolBuilder
from diet_optimizer.services.catalog import FoodCatalogProvider
from diet_optimizer.services.preferences import PreferenceProvider
from diet_optimizer.services.search import DietSearchEngine
from diet_optimizer.services.taste import TasteClassifier

_T = TypeVar("_T")

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeOptions:
    """Process-wide toggles that chat commands can flip."""

    strict: bool = True
    debug: bool = False


@dataclass
class DietService:
    """Recommends a balanced single-meal diet per user."""

    catalog: FoodCatalogProvider
    preferences: PreferenceProvider
    cache: ResultCache
    engine: DietSearchEngine
    classifier: TasteClassifier = field(default_factory=TasteClassifier)
    pool_builder: CandidatePoolBuilder = field(default_factory=CandidatePoolBuilder)
    options: RuntimeOptions = field(default_factory=RuntimeOptions)
    default_capacity: float = 3000.0
    log_file_path: str | None = None

    def recommend(self, user_id: str, meals: int = 0) -> Recommendation:
        """Return the cached plan while fresh, otherwise compute a new one."""
        cached = self.cache.get(user_id)
        if cached is not None:
            return Recommendation(
                status=RecommendationStatus.CACHED,
                plan=cached.plan,
                meals=meals,
                remaining=self.cache.remaining(cached),
                had_previous=True,
                names=self.display_names(cached.plan.foods),
            )

        had_previous = self.cache.peek(user_id) is not None
        plan = self.compute_plan(user_id)
        if plan is None:
            return Recommendation(
                status=RecommendationStatus.NO_CANDIDATE,
                meals=meals,
                had_previous=had_previous,
            )
        self.cache.put(user_id, plan)
        return Recommendation(
            status=RecommendationStatus.COMPUTED,
            plan=plan,
            meals=meals,
            had_previous=had_previous,
            names=self.display_names(plan.foods),
        )

    def compute_plan(self, user_id: str) -> DietPlan | None:
        """Run the full search for a user without touching the cache."""
        options = self.options
        _logger.debug(
            "Starting diet calculation for %s. Strict: %s", user_id, options.strict
        )
        capacity = self._capacity(user_id)
        profile = self.taste_profile(user_id)
        foods = self._catalog_foods(profile, strict=options.strict)
        pools = self.pool_builder.build(
            foods, profile, capacity=capacity, strict=options.strict
        )
        if pools.is_empty:
            _logger.debug("No eligible foods for %s", user_id)
            return None
        return self.engine.search(pools, capacity)

    def taste_profile(self, user_id: str) -> TasteProfile:
        """Classify the user's current taste snapshot."""
        return self.classifier.classify(
            self._taste_map(user_id),
            favorite_discovered=self._call(
                lambda: self.preferences.is_favorite_discovered(user_id),
                default=False,
                action="is_favorite_discovered",
            ),
            worst_discovered=self._call(
                lambda: self.preferences.is_worst_discovered(user_id),
                default=False,
                action="is_worst_discovered",
            ),
        )

    def taste_listing(self, user_id: str) -> TasteListing:
        """Return discovered foods grouped by taste for display."""
        return self.classifier.group(
            self._taste_map(user_id),
            favorite_discovered=self._call(
                lambda: self.preferences.is_favorite_discovered(user_id),
                default=False,
                action="is_favorite_discovered",
            ),
            worst_discovered=self._call(
                lambda: self.preferences.is_worst_discovered(user_id),
                default=False,
                action="is_worst_discovered",
            ),
            name_for=self.display_name,
        )

    def clear(self, user_id: str) -> bool:
        """Forget the user's cached plan."""
        return self.cache.clear(user_id)

    def toggle_strict(self) -> bool:
        """Flip strict discovery mode and return the new value."""
        self.options = replace(self.options, strict=not self.options.strict)
        return self.options.strict

    def toggle_debug(self) -> bool:
        """Flip verbose diagnostics and return the new value."""
        return self.set_debug(not self.options.debug)

    def set_debug(self, enabled: bool) -> bool:
        """Turn verbose diagnostics on or off."""
        self.options = replace(self.options, debug=enabled)
        self.cache.debug = enabled
        set_debug_logging(enabled, self.log_file_path)
        if enabled:
            _logger.debug("Debug mode enabled.")
        return enabled

    def set_cooldown(self, minutes: int) -> None:
        """Change how long a plan is served before recomputing."""
        self.cache.set_cooldown(minutes)

    def display_name(self, food_id: str) -> str:
        """Return a food's display name, falling back to its id."""
        food = self._call(
            lambda: self.catalog.get_food(food_id), default=None, action="get_food"
        )
        return food.name if food is not None else food_id

    def display_names(self, food_ids: Iterable[str]) -> dict[str, str]:
        """Return display names for several food ids."""
        return {food_id: self.display_name(food_id) for food_id in food_ids}

    def _capacity(self, user_id: str) -> float:
        capacity = self._call(
            lambda: self.preferences.get_capacity(user_id),
            default=None,
            action="get_capacity",
        )
        if not capacity or capacity <= 0:
            return self.default_capacity
        return float(capacity)

    def _taste_map(self, user_id: str) -> Mapping[str, str]:
        taste_map = self._call(
            lambda: self.preferences.get_taste_map(user_id),
            default={},
            action="get_taste_map",
        )
        if taste_map:
            return taste_map
        _logger.debug("Taste map empty for %s; warming up provider", user_id)
        self._call(
            lambda: self.preferences.warm_up(user_id), default=None, action="warm_up"
        )
        return self._call(
            lambda: self.preferences.get_taste_map(user_id),
            default={},
            action="get_taste_map",
        )

    def _catalog_foods(
        self, profile: TasteProfile, *, strict: bool
    ) -> list[FoodDescriptor]:
        if not strict:
            return list(
                self._call(self.catalog.list_all_foods, default=[], action="list_foods")
            )
        foods: list[FoodDescriptor] = []
        for food_id in profile.allowed:
            food = self._call(
                lambda food_id=food_id: self.catalog.get_food(food_id),
                default=None,
                action="get_food",
            )
            if food is not None:
                foods.append(food)
        return foods

    def _call(self, func: Callable[[], _T], *, default: _T, action: str) -> _T:
        """Call a provider, degrading to ``default`` when it is unavailable."""
        try:
            result = func()
        except ProviderUnavailable as exc:
            if self.options.debug:
                _logger.warning("Provider %s failed: %s", action, exc)
            return default
        return default if result is None else result
