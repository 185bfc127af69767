"""Randomized diet search and ranking."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from diet_optimizer.domain.diet import DietPlan
from diet_optimizer.domain.foods import CandidatePools, FoodCandidate
from diet_optimizer.services.scoring import ScoringModel

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchConfig:
    """Tunable constants for the plan search."""

    trial_budget: int = 3000
    min_fill_ratio: float = 0.8
    variety_target: int = 4
    fill_attempts: int = 100
    balanced_threshold: float = 15.0


def rank_plans(
    plans: Sequence[DietPlan], balanced_threshold: float
) -> DietPlan | None:
    """Pick the winning plan.

    Plans are ordered by tier, taste, balance, then calories. If any plan is
    well balanced, taste decides among the balanced ones only.
    """
    if not plans:
        return None
    ordered = sorted(
        plans,
        key=lambda p: (
            -p.average_tier,
            -p.average_taste_score,
            p.score,
            -p.total_calories,
        ),
    )
    balanced = [plan for plan in ordered if plan.score < balanced_threshold]
    if balanced:
        return min(
            balanced,
            key=lambda p: (-p.average_taste_score, p.score, -p.total_calories),
        )
    return ordered[0]


@dataclass
class DietSearchEngine:
    """Bounded randomized search over the candidate pools."""

    config: SearchConfig = field(default_factory=SearchConfig)
    scoring: ScoringModel = field(default_factory=ScoringModel)
    rng: random.Random = field(default_factory=random.Random)

    def generate_plan(
        self, pool: Sequence[FoodCandidate], capacity: float
    ) -> DietPlan | None:
        """Build one random plan from a pool, or None if it ends up too small."""
        if not pool:
            return None
        diet: list[FoodCandidate] = []
        calories = 0.0

        shuffled = list(pool)
        self.rng.shuffle(shuffled)
        for candidate in shuffled[: min(len(pool), self.config.variety_target)]:
            if calories + candidate.calories <= capacity:
                diet.append(candidate)
                calories += candidate.calories

        attempts_left = self.config.fill_attempts
        while calories < capacity and attempts_left > 0:
            candidate = pool[self.rng.randrange(len(pool))]
            if calories + candidate.calories <= capacity:
                diet.append(candidate)
                calories += candidate.calories
            else:
                attempts_left -= 1

        if calories < capacity * self.config.min_fill_ratio:
            return None
        return self.scoring.analyze(diet)

    def run_phase(
        self, pool: Sequence[FoodCandidate], capacity: float, trials: int
    ) -> list[DietPlan]:
        """Run a fixed number of trials against one pool."""
        plans: list[DietPlan] = []
        if not pool:
            return plans
        for _ in range(trials):
            plan = self.generate_plan(pool, capacity)
            if plan is not None:
                plans.append(plan)
        return plans

    def search(self, pools: CandidatePools, capacity: float) -> DietPlan | None:
        """Search both taste pools and return the best plan, if any."""
        trials = self.config.trial_budget // 2
        candidates = self.run_phase(pools.high_taste_pool, capacity, trials)
        candidates += self.run_phase(pools.med_taste_pool, capacity, trials)
        _logger.debug(
            "Diet search: capacity=%s candidates=%s", capacity, len(candidates)
        )
        return rank_plans(candidates, self.config.balanced_threshold)
