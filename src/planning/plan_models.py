"""Plan structures for the weekly meal plan: slots, scores and results.

No search or scoring logic here, data structures and slot layout only.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from src.data_layer.models import ScoredRecipe


# --- Plan structure ---

DAYS_PER_WEEK = 7
MEALS_PER_DAY = 2  # midi + soir
TOTAL_MEALS = DAYS_PER_WEEK * MEALS_PER_DAY

MEAL_MIDI = "midi"
MEAL_SOIR = "soir"
MEAL_TYPES = (MEAL_MIDI, MEAL_SOIR)


@dataclass(frozen=True)
class MealSlot:
    """One (day, meal type) cell of the weekly plan."""

    day_index: int  # 0 = Monday ... 6 = Sunday
    meal_type: str  # "midi" or "soir"
    recipe: ScoredRecipe


def slot_position(index: int) -> Tuple[int, str]:
    """Map a draw index to (day_index, meal_type).

    Slot 0 -> Monday midi, 1 -> Monday soir, 2 -> Tuesday midi, ...
    """
    return index // MEALS_PER_DAY, MEAL_TYPES[index % MEALS_PER_DAY]


def assign_slots(recipes: List[ScoredRecipe]) -> List[MealSlot]:
    """Lay recipes out in day-then-meal-type order."""
    slots = []
    for i, recipe in enumerate(recipes):
        day_index, meal_type = slot_position(i)
        slots.append(MealSlot(day_index=day_index, meal_type=meal_type, recipe=recipe))
    return slots


# --- Scores ---


@dataclass(frozen=True)
class MacroScore:
    """Evaluation of one nutrient against its weekly target."""

    target: float
    actual: float
    delta: float  # actual - target (positive = over)
    percentage: float  # 0-100, 100 = perfect match


ZERO_MACRO_SCORE = MacroScore(target=0.0, actual=0.0, delta=0.0, percentage=0.0)


@dataclass(frozen=True)
class PlanScore:
    """Overall plan score with per-macro breakdowns."""

    overall: float
    protein: MacroScore
    carbs: MacroScore
    fat: MacroScore
    calories: MacroScore
    variety: float
    daily_balance: float


def zero_plan_score() -> PlanScore:
    """Score representing zero match, used for empty plans."""
    return PlanScore(
        overall=0.0,
        protein=ZERO_MACRO_SCORE,
        carbs=ZERO_MACRO_SCORE,
        fat=ZERO_MACRO_SCORE,
        calories=ZERO_MACRO_SCORE,
        variety=0.0,
        daily_balance=0.0,
    )


@dataclass
class PlanResult:
    """Generated plan: slots, score and diagnostic warnings."""

    slots: List[MealSlot]
    score: PlanScore
    warnings: List[str] = field(default_factory=list)
