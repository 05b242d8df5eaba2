"""Nutrition aggregator for summing per-serving macros across a plan."""
from typing import Dict, Iterable, List

from src.data_layer.models import NutritionProfile, ScoredRecipe
from src.planning.plan_models import MealSlot


class NutritionAggregator:
    """Aggregator for combining nutrition from multiple recipes."""

    @staticmethod
    def aggregate_recipes(recipes: Iterable[ScoredRecipe]) -> NutritionProfile:
        """Sum one serving of each recipe.

        Args:
            recipes: ScoredRecipe objects

        Returns:
            NutritionProfile with summed nutrition (zeros if empty)
        """
        total_calories = 0.0
        total_protein = 0.0
        total_carbs = 0.0
        total_fat = 0.0

        for recipe in recipes:
            total_calories += recipe.per_serving.calories
            total_protein += recipe.per_serving.protein_g
            total_carbs += recipe.per_serving.carbs_g
            total_fat += recipe.per_serving.fat_g

        return NutritionProfile(
            calories=total_calories,
            protein_g=total_protein,
            carbs_g=total_carbs,
            fat_g=total_fat,
        )

    @staticmethod
    def aggregate_slots(slots: List[MealSlot]) -> NutritionProfile:
        """Sum per-serving macros over meal slots (one serving per slot).

        Args:
            slots: MealSlot objects

        Returns:
            NutritionProfile with the plan's total nutrition
        """
        return NutritionAggregator.aggregate_recipes(slot.recipe for slot in slots)

    @staticmethod
    def calories_by_day(slots: List[MealSlot]) -> Dict[int, float]:
        """Total calories per day_index. Days without slots are absent."""
        totals: Dict[int, float] = {}
        for slot in slots:
            totals[slot.day_index] = totals.get(slot.day_index, 0.0) + slot.recipe.per_serving.calories
        return totals
