"""Recipe macro calculator: per-serving and total macros from ingredients.

Each ingredient line is converted to grams (see unit_conversion), its
per-100g macros are scaled by the gram weight, and the results are summed.
Ingredients that cannot be converted are reported instead of failing the
whole recipe, and the conversion coverage drives the confidence level.
"""

import logging
import math
from typing import List

from src.data_layer.models import (
    CONFIDENCE_HIGH,
    CONFIDENCE_LOW,
    CONFIDENCE_MEDIUM,
    IngredientInput,
    NutritionProfile,
    RecipeMacrosResult,
)
from src.nutrition.unit_conversion import convert_to_grams

logger = logging.getLogger(__name__)

# Conversion coverage thresholds (converted / total)
HIGH_CONFIDENCE_RATIO = 0.9
MEDIUM_CONFIDENCE_RATIO = 0.7


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def confidence_for_ratio(converted_count: int, total_count: int) -> str:
    """Map conversion coverage to a confidence level. Empty recipes are low."""
    if total_count == 0:
        return CONFIDENCE_LOW
    ratio = converted_count / total_count
    if ratio >= HIGH_CONFIDENCE_RATIO:
        return CONFIDENCE_HIGH
    if ratio >= MEDIUM_CONFIDENCE_RATIO:
        return CONFIDENCE_MEDIUM
    return CONFIDENCE_LOW


def _rounded(calories: float, protein: float, carbs: float, fat: float) -> NutritionProfile:
    return NutritionProfile(
        calories=round_half_up(calories),
        protein_g=round_half_up(protein),
        carbs_g=round_half_up(carbs),
        fat_g=round_half_up(fat),
    )


def calculate_recipe_macros(
    ingredients: List[IngredientInput],
    original_portions: float,
) -> RecipeMacrosResult:
    """Calculate total and per-serving macros for a recipe.

    Args:
        ingredients: Ingredient lines with quantity, unit and per-100g macros
        original_portions: Servings the recipe yields (values <= 0 count as 1)

    Returns:
        RecipeMacrosResult with rounded totals, per-serving values, confidence
        and the names of ingredients left out of the totals
    """
    portions = original_portions if original_portions > 0 else 1

    total_calories = 0.0
    total_protein = 0.0
    total_carbs = 0.0
    total_fat = 0.0

    converted_count = 0
    missing_ingredients: List[str] = []

    for ingredient in ingredients:
        if ingredient.quantity is None:
            missing_ingredients.append(ingredient.name)
            continue

        # Calories are required; other macros default to 0
        if ingredient.calories_per_100g is None:
            missing_ingredients.append(ingredient.name)
            continue

        grams = convert_to_grams(ingredient.quantity, ingredient.unit, ingredient.name)
        if grams is None:
            missing_ingredients.append(ingredient.name)
            continue

        factor = grams / 100.0
        total_calories += factor * ingredient.calories_per_100g
        total_protein += factor * (ingredient.protein_per_100g or 0.0)
        total_carbs += factor * (ingredient.carbs_per_100g or 0.0)
        total_fat += factor * (ingredient.fat_per_100g or 0.0)
        converted_count += 1

    if missing_ingredients:
        logger.debug(
            "Skipped %d/%d ingredients: %s",
            len(missing_ingredients), len(ingredients), ", ".join(missing_ingredients),
        )

    return RecipeMacrosResult(
        per_serving=_rounded(
            total_calories / portions,
            total_protein / portions,
            total_carbs / portions,
            total_fat / portions,
        ),
        total_recipe=_rounded(total_calories, total_protein, total_carbs, total_fat),
        confidence=confidence_for_ratio(converted_count, len(ingredients)),
        converted_count=converted_count,
        total_count=len(ingredients),
        missing_ingredients=missing_ingredients,
    )
