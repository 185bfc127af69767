"""Domain models for catalog foods."""

from dataclasses import dataclass

from diet_optimizer.domain.taste import TasteLabel


@dataclass(frozen=True)
class UnlockRequirement:
    """Skill requirement that gates producing a food."""

    skill: str
    level: int = 0


@dataclass(frozen=True)
class FoodDescriptor:
    """Food item as reported by the catalog provider."""

    id: str
    name: str
    calories: float
    carbs: float
    fat: float
    protein: float
    vitamins: float
    tags: frozenset[str] = frozenset()
    hidden: bool = False
    unlock_requirements: tuple[UnlockRequirement, ...] = ()
    tier: int = 0


@dataclass(frozen=True)
class FoodCandidate:
    """Eligible food with its resolved rank and taste label."""

    food: FoodDescriptor
    tier: int
    level: int
    label: TasteLabel = TasteLabel.UNKNOWN

    @property
    def id(self) -> str:
        return self.food.id

    @property
    def calories(self) -> float:
        return self.food.calories

    @property
    def taste_score(self) -> int:
        return self.label.score


@dataclass(frozen=True)
class CandidatePools:
    """Search pools derived from the eligible candidates."""

    max_tier: int
    tier_pool: list[FoodCandidate]
    high_taste_pool: list[FoodCandidate]
    med_taste_pool: list[FoodCandidate]
    eligible_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.high_taste_pool and not self.med_taste_pool
