"""Daily -> weekly target conversion for the planned meals.

The plan only covers lunch and dinner. Full-day targets are first scaled
down to what those two meals should deliver, then multiplied out to a week.
"""

from src.data_layer.models import MacroTargets, WeeklyMacroTargets
from src.nutrition.recipe_macros import round_half_up
from src.planning.plan_models import DAYS_PER_WEEK

# Share of daily intake covered by lunch (~35%) + dinner (~30%)
MEAL_COVERAGE_RATIO = 0.65


def scale_daily_targets(daily: MacroTargets, ratio: float = MEAL_COVERAGE_RATIO) -> MacroTargets:
    """Scale full-day targets to the planned meals, rounded to integers."""
    return MacroTargets(
        calories=round_half_up(daily.calories * ratio),
        protein_g=round_half_up(daily.protein_g * ratio),
        carbs_g=round_half_up(daily.carbs_g * ratio),
        fat_g=round_half_up(daily.fat_g * ratio),
    )


def daily_to_weekly(daily: MacroTargets) -> WeeklyMacroTargets:
    """Multiply each daily target by the number of days in the week."""
    return WeeklyMacroTargets(
        calories=daily.calories * DAYS_PER_WEEK,
        protein_g=daily.protein_g * DAYS_PER_WEEK,
        carbs_g=daily.carbs_g * DAYS_PER_WEEK,
        fat_g=daily.fat_g * DAYS_PER_WEEK,
    )
