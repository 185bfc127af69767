"""Scoring model for candidate diet plans."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from diet_optimizer.domain.diet import DietPlan
from diet_optimizer.domain.foods import FoodCandidate

TARGET_SHARE = 25.0


def balance_score(carbs: float, fat: float, protein: float, vitamins: float) -> float:
    """Return the RMS deviation of each macro share from an even 25% split.

    Zero is a perfect balance. A plan with no nutrients at all scores
    ``math.inf``.
    """
    total = carbs + fat + protein + vitamins
    if total <= 0:
        return math.inf
    shares = (axis / total * 100 for axis in (carbs, fat, protein, vitamins))
    variance = sum((share - TARGET_SHARE) ** 2 for share in shares) / 4
    return math.sqrt(variance)


@dataclass
class ScoringModel:
    """Aggregates a multiset of foods into a scored ``DietPlan``."""

    def analyze(self, items: Sequence[FoodCandidate]) -> DietPlan:
        """Score a plan; each repeated item counts once per instance."""
        if not items:
            return DietPlan(foods={})

        carbs = fat = protein = vitamins = calories = 0.0
        total_tier = total_level = total_taste = 0
        counts: dict[str, int] = {}
        for item in items:
            food = item.food
            carbs += food.carbs
            fat += food.fat
            protein += food.protein
            vitamins += food.vitamins
            calories += food.calories
            total_tier += item.tier
            total_level += item.level
            total_taste += item.taste_score
            counts[food.id] = counts.get(food.id, 0) + 1

        size = len(items)
        return DietPlan(
            foods=counts,
            score=balance_score(carbs, fat, protein, vitamins),
            total_calories=calories,
            carbs=carbs,
            fat=fat,
            protein=protein,
            vitamins=vitamins,
            average_tier=total_tier / size,
            average_level=total_level / size,
            average_taste_score=total_taste / size,
        )
