"""Candidate pool construction for the diet search."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from diet_optimizer.domain.foods import (
    CandidatePools,
    FoodCandidate,
    FoodDescriptor,
    UnlockRequirement,
)
from diet_optimizer.domain.taste import TasteLabel, TasteProfile

_DENYLIST = ("ecoylent", "admin", "dev tool", "creative", "spawn")
_HIDDEN_TAGS = {"dev", "hidden", "admin"}
_INGREDIENT_TAG = "ingredient"

# Most advanced technique first; the first matching band wins.
_TIER_BANDS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (4, ("CuttingEdgeCooking",)),
    (3, ("AdvancedCooking", "AdvancedBaking")),
    (2, ("Cooking", "Baking")),
    (1, ("Campfire",)),
)

_logger = logging.getLogger(__name__)


def skill_tier(skill: str) -> int:
    """Return the tier band for a skill name, or 0 when unrecognized."""
    for tier, markers in _TIER_BANDS:
        if any(marker.lower() in skill.lower() for marker in markers):
            return tier
    return 0


def resolve_rank(food: FoodDescriptor) -> tuple[int, int]:
    """Return (tier, level) from the richest cooking requirement on a food."""
    best: UnlockRequirement | None = None
    best_tier = 0
    for requirement in food.unlock_requirements:
        tier = skill_tier(requirement.skill)
        if tier > best_tier:
            best, best_tier = requirement, tier
    if best is None:
        return max(food.tier, 0), 0
    return best_tier, max(best.level, 0)


def is_hidden_or_denied(food: FoodDescriptor) -> bool:
    """Return True for hidden, dev-only, or spoiler foods."""
    name = food.name.lower()
    if any(entry in name for entry in _DENYLIST):
        return True
    if food.hidden:
        return True
    return any(tag.lower() in _HIDDEN_TAGS for tag in food.tags)


def is_bare_ingredient(food: FoodDescriptor) -> bool:
    """Return True for raw cooking ingredients tagged as such."""
    name = food.name
    looks_raw = name.startswith("Raw ") or " Yeast" in name or "Flour" in name
    if not looks_raw:
        return False
    return any(tag.lower() == _INGREDIENT_TAG for tag in food.tags)


@dataclass
class CandidatePoolBuilder:
    """Filters catalog foods into ranked search pools."""

    min_tier_pool: int = 2
    high_taste_floor: int = 3

    def eligible(
        self,
        foods: Iterable[FoodDescriptor],
        profile: TasteProfile,
        *,
        capacity: float,
        strict: bool,
    ) -> list[FoodCandidate]:
        """Return the foods that may appear in a plan for this user."""
        candidates: list[FoodCandidate] = []
        for food in foods:
            if strict and food.id not in profile.allowed:
                continue
            if not strict and food.id in profile.excluded:
                continue
            if is_hidden_or_denied(food):
                continue
            if food.calories <= 0 or food.calories > capacity:
                continue
            if is_bare_ingredient(food):
                continue
            tier, level = resolve_rank(food)
            label = profile.allowed.get(food.id, TasteLabel.UNKNOWN)
            candidates.append(
                FoodCandidate(food=food, tier=tier, level=level, label=label)
            )
        return candidates

    def pools(self, candidates: list[FoodCandidate]) -> CandidatePools:
        """Derive the tier pool and its taste sub-pools."""
        if not candidates:
            return CandidatePools(
                max_tier=0, tier_pool=[], high_taste_pool=[], med_taste_pool=[]
            )
        max_tier = max(candidate.tier for candidate in candidates)
        tier_pool = [c for c in candidates if c.tier == max_tier]
        if len(tier_pool) < self.min_tier_pool:
            tier_pool = [c for c in candidates if c.tier >= max_tier - 1]
        high_taste = [c for c in tier_pool if c.taste_score >= self.high_taste_floor]
        med_taste = [c for c in tier_pool if c.taste_score >= 1]
        _logger.debug(
            "Candidate pools: eligible=%s max_tier=%s tier=%s high=%s med=%s",
            len(candidates),
            max_tier,
            len(tier_pool),
            len(high_taste),
            len(med_taste),
        )
        return CandidatePools(
            max_tier=max_tier,
            tier_pool=tier_pool,
            high_taste_pool=high_taste,
            med_taste_pool=med_taste,
            eligible_count=len(candidates),
        )

    def build(
        self,
        foods: Iterable[FoodDescriptor],
        profile: TasteProfile,
        *,
        capacity: float,
        strict: bool,
    ) -> CandidatePools:
        """Filter foods and derive search pools in one step."""
        return self.pools(
            self.eligible(foods, profile, capacity=capacity, strict=strict)
        )
