"""Weekly plan scoring: how well 14 meal slots match weekly macro targets.

Computes a composite score in [0, 100] from four macro sub-scores and a
variety sub-score (plus an optional daily-balance component).
No search, no state mutation, no I/O. Pure and deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from src.data_layer.models import NutritionProfile, WeeklyMacroTargets
from src.nutrition.aggregator import NutritionAggregator
from src.planning.plan_models import DAYS_PER_WEEK, MacroScore, MealSlot, PlanScore

# Deviation (fraction of target) at which a macro scores 0.
# 0% -> 100, 10% -> 50, 20%+ -> 0
DEVIATION_CEILING = 0.20

# Mean absolute percentage error of daily calories at which balance scores 0
DAILY_BALANCE_CEILING = 0.5

# Match colour thresholds: green >= 85, yellow >= 65, red below
MATCH_THRESHOLDS = {"green": 85, "yellow": 65}

WEIGHT_SUM_TOLERANCE = 0.001


@dataclass(frozen=True)
class ScoringWeights:
    """Weights for each scoring component. Must sum to 1.0."""
    protein: float = 0.30
    calories: float = 0.25
    carbs: float = 0.20
    fat: float = 0.15
    variety: float = 0.10
    daily_balance: float = 0.0  # Computed for every plan, unweighted by default

    def __post_init__(self):
        """Validate weights sum to 1.0 and are non-negative."""
        weights = [self.protein, self.calories, self.carbs,
                   self.fat, self.variety, self.daily_balance]
        if any(w < 0 for w in weights):
            raise ValueError("All scoring weights must be non-negative")

        total = sum(weights)
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}")


DEFAULT_WEIGHTS = ScoringWeights()


def _clamp_score(x: float) -> float:
    """Clamp to [0, 100]."""
    return max(0.0, min(100.0, x))


# --- Macro match ---


def macro_score(actual: float, target: float) -> MacroScore:
    """Score one nutrient: symmetric deviation, linear down to DEVIATION_CEILING.

    A zero target is a perfect match only when the actual is also zero.
    """
    delta = actual - target
    if target == 0:
        return MacroScore(
            target=target,
            actual=actual,
            delta=delta,
            percentage=100.0 if actual == 0 else 0.0,
        )

    deviation_ratio = abs(delta) / target
    percentage = max(0.0, (1.0 - deviation_ratio / DEVIATION_CEILING) * 100.0)
    return MacroScore(target=target, actual=actual, delta=delta, percentage=percentage)


def sum_macros(slots: List[MealSlot]) -> NutritionProfile:
    """Sum per-serving macros across all slots (the plan's weekly actuals)."""
    return NutritionAggregator.aggregate_slots(slots)


# --- Variety ---


def _is_repeat(previous, current) -> bool:
    same_cuisine = (
        previous.cuisine is not None
        and current.cuisine is not None
        and previous.cuisine == current.cuisine
    )
    same_category = (
        previous.category is not None
        and current.category is not None
        and previous.category == current.category
    )
    return same_cuisine or same_category


def calculate_variety_score(slots: List[MealSlot]) -> float:
    """Penalize consecutive slots sharing cuisine or category. Output [0, 100].

    Pairs are taken in list order, so callers keep slots in day-then-meal
    order. Unknown (None) cuisine or category never counts as a repeat.
    """
    if len(slots) <= 1:
        return 100.0

    duplicate_count = 0
    for previous, current in zip(slots, slots[1:]):
        if _is_repeat(previous.recipe, current.recipe):
            duplicate_count += 1

    return _clamp_score(100.0 - (duplicate_count / (len(slots) - 1)) * 100.0)


# --- Daily balance ---


def calculate_daily_balance_score(
    slots: List[MealSlot],
    daily_calorie_target: float,
    ceiling: float = DAILY_BALANCE_CEILING,
) -> float:
    """Score how close each planned day's calories are to the daily target.

    Mean absolute percentage error over the days that have at least one slot,
    scored linearly: 0 -> 100, >= ceiling -> 0.
    """
    if not slots or daily_calorie_target == 0:
        return 100.0

    day_totals = list(NutritionAggregator.calories_by_day(slots).values())
    if len(day_totals) <= 1:
        return 100.0

    mape = sum(
        abs(total - daily_calorie_target) / daily_calorie_target for total in day_totals
    ) / len(day_totals)
    return _clamp_score((1.0 - mape / ceiling) * 100.0)


# --- Composite ---


def score_plan(
    slots: List[MealSlot],
    weekly_targets: WeeklyMacroTargets,
    weights: Optional[ScoringWeights] = None,
) -> PlanScore:
    """Score a plan against weekly targets.

    Args:
        slots: Meal slots in day-then-meal order
        weekly_targets: Weekly macro totals to hit
        weights: Optional custom weights (DEFAULT_WEIGHTS otherwise)

    Returns:
        PlanScore with the weighted overall score and every component
    """
    weights = weights or DEFAULT_WEIGHTS
    actual = sum_macros(slots)

    protein = macro_score(actual.protein_g, weekly_targets.protein_g)
    calories = macro_score(actual.calories, weekly_targets.calories)
    carbs = macro_score(actual.carbs_g, weekly_targets.carbs_g)
    fat = macro_score(actual.fat_g, weekly_targets.fat_g)
    variety = calculate_variety_score(slots)
    daily_balance = calculate_daily_balance_score(
        slots, weekly_targets.calories / DAYS_PER_WEEK
    )

    overall = (
        protein.percentage * weights.protein +
        calories.percentage * weights.calories +
        carbs.percentage * weights.carbs +
        fat.percentage * weights.fat +
        variety * weights.variety +
        daily_balance * weights.daily_balance
    )

    return PlanScore(
        overall=overall,
        protein=protein,
        carbs=carbs,
        fat=fat,
        calories=calories,
        variety=variety,
        daily_balance=daily_balance,
    )


def match_color(score: float) -> str:
    """Classify a 0-100 score as "green", "yellow" or "red"."""
    if score >= MATCH_THRESHOLDS["green"]:
        return "green"
    if score >= MATCH_THRESHOLDS["yellow"]:
        return "yellow"
    return "red"
