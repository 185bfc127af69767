"""Tests for the scoring model."""

import math

import pytest

from diet_optimizer.domain.foods import FoodCandidate
from diet_optimizer.domain.taste import TasteLabel
from diet_optimizer.services.scoring import ScoringModel, balance_score
from tests.fakes import make_food


def _candidate(food_id: str, tier: int, level: int, label: TasteLabel, **macros):
    return FoodCandidate(
        food=make_food(food_id, **macros), tier=tier, level=level, label=label
    )


def test_balance_score_zero_for_even_split() -> None:
    assert balance_score(25, 25, 25, 25) == 0.0


def test_balance_score_is_scale_invariant() -> None:
    base = balance_score(10, 20, 30, 40)

    assert balance_score(100, 200, 300, 400) == pytest.approx(base)
    assert balance_score(0.5, 1, 1.5, 2) == pytest.approx(base)


def test_balance_score_single_axis() -> None:
    # shares 100/0/0/0 -> deviations 75, 25, 25, 25
    expected = math.sqrt((75**2 + 3 * 25**2) / 4)

    assert balance_score(80, 0, 0, 0) == pytest.approx(expected)


def test_balance_score_without_nutrients_is_worst() -> None:
    assert balance_score(0, 0, 0, 0) == math.inf


def test_analyze_weights_by_instance() -> None:
    stew = _candidate("stew", 2, 4, TasteLabel.GOOD, calories=600)
    pie = _candidate(
        "pie",
        3,
        1,
        TasteLabel.FAVORITE,
        calories=900,
        carbs=40,
        fat=10,
        protein=10,
        vitamins=40,
    )

    plan = ScoringModel().analyze([stew, stew, pie])

    assert plan.foods == {"stew": 2, "pie": 1}
    assert plan.total_calories == 2100
    assert plan.carbs == 90
    assert plan.vitamins == 90
    assert plan.fat == 60
    assert plan.average_tier == pytest.approx(7 / 3)
    assert plan.average_level == pytest.approx(3.0)
    assert plan.average_taste_score == pytest.approx((3 + 3 + 5) / 3)
    assert plan.score == pytest.approx(balance_score(90, 60, 60, 90))


def test_analyze_empty_plan() -> None:
    plan = ScoringModel().analyze([])

    assert plan.foods == {}
    assert plan.score == math.inf
