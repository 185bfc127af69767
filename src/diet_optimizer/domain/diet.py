"""Domain models for diet plans and cached results."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum


@dataclass(frozen=True)
class DietPlan:
    """Food counts for a single meal plus derived aggregates."""

    foods: dict[str, int]
    score: float = math.inf
    total_calories: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    protein: float = 0.0
    vitamins: float = 0.0
    average_tier: float = 0.0
    average_level: float = 0.0
    average_taste_score: float = 0.0

    @property
    def nutrient_total(self) -> float:
        return self.carbs + self.fat + self.protein + self.vitamins

    def macro_percentages(self) -> dict[str, float]:
        """Return each macro axis as a percentage of the four-axis total."""
        total = self.nutrient_total
        if total <= 0:
            return {"carbs": 0.0, "protein": 0.0, "fat": 0.0, "vitamins": 0.0}
        return {
            "carbs": self.carbs / total * 100,
            "protein": self.protein / total * 100,
            "fat": self.fat / total * 100,
            "vitamins": self.vitamins / total * 100,
        }

    def scaled(self, meals: int) -> dict[str, int]:
        """Return food counts multiplied for a number of meals."""
        return {food_id: count * meals for food_id, count in self.foods.items()}


@dataclass(frozen=True)
class CacheEntry:
    """Most recent plan generated for a user."""

    user_id: str
    generated_at: datetime
    plan: DietPlan


class RecommendationStatus(Enum):
    """Outcome of a recommendation request."""

    CACHED = "cached"
    COMPUTED = "computed"
    NO_CANDIDATE = "no_candidate"


@dataclass(frozen=True)
class Recommendation:
    """Result of asking for a diet plan."""

    status: RecommendationStatus
    plan: DietPlan | None = None
    meals: int = 0
    remaining: timedelta | None = None
    had_previous: bool = False
    names: dict[str, str] = field(default_factory=dict)
