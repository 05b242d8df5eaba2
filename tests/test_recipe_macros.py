"""Tests for per-serving recipe macro calculation."""

import pytest

from src.data_layer.models import IngredientInput
from src.nutrition.recipe_macros import (
    calculate_recipe_macros,
    confidence_for_ratio,
    round_half_up,
)


def _ingredient(
    name: str = "Ingredient",
    quantity=1,
    unit="Portion",
    calories=100.0,
    protein=10.0,
    carbs=10.0,
    fat=5.0,
) -> IngredientInput:
    return IngredientInput(
        name=name,
        quantity=quantity,
        unit=unit,
        calories_per_100g=calories,
        protein_per_100g=protein,
        carbs_per_100g=carbs,
        fat_per_100g=fat,
    )


def _with_missing(converted: int, total: int):
    """Ingredient list where `converted` lines convert and the rest lack a quantity."""
    good = [_ingredient(f"ok{i}") for i in range(converted)]
    bad = [_ingredient(f"missing{i}", quantity=None) for i in range(total - converted)]
    return good + bad


class TestCalculateRecipeMacros:
    """Totals and per-serving values."""

    def test_two_ingredients_four_portions(self):
        """Test chicken + rice split over 4 servings."""
        ingredients = [
            _ingredient("Poulet", 0.6, "Kilogramme", 165.0, 31.0, 0.0, 3.6),
            _ingredient("Riz basmati", 0.3, "Kilogramme", 350.0, 7.0, 77.0, 0.6),
        ]

        result = calculate_recipe_macros(ingredients, 4)

        assert result.total_recipe.calories == 2040
        assert result.total_recipe.protein_g == 207
        assert result.total_recipe.carbs_g == 231
        assert result.total_recipe.fat_g == 23
        assert result.per_serving.calories == 510
        assert result.per_serving.protein_g == 52
        assert result.per_serving.carbs_g == 58
        assert result.per_serving.fat_g == 6
        assert result.converted_count == 2
        assert result.total_count == 2
        assert result.missing_ingredients == []
        assert result.confidence == "high"

    def test_single_ingredient_one_portion(self):
        result = calculate_recipe_macros([_ingredient("Oeuf", 2, "Pièce", 145.0, 12.5, 0.7, 9.7)], 1)

        # 2 eggs = 110 g
        assert result.per_serving.calories == 160
        assert result.per_serving.protein_g == 14
        assert result.per_serving.carbs_g == 1
        assert result.per_serving.fat_g == 11
        assert result.per_serving == result.total_recipe

    def test_per_serving_rounded_from_its_own_division(self):
        """Test per-serving is round(total / portions), not round(total) / portions."""
        result = calculate_recipe_macros([_ingredient(calories=10.0)], 4)

        assert result.total_recipe.calories == 10
        assert result.per_serving.calories == 3  # 2.5 rounds half up

    def test_rounds_half_up(self):
        result = calculate_recipe_macros([_ingredient(calories=10.5, protein=0.5)], 1)

        assert result.total_recipe.calories == 11
        assert result.total_recipe.protein_g == 1

    def test_null_macros_count_as_zero_when_calories_known(self):
        """Test oil with unknown protein/carbs is still counted."""
        oil = _ingredient("Huile d'olive", 1, "Cuillère à soupe", 900.0, None, None, 100.0)

        result = calculate_recipe_macros([oil], 1)

        assert result.per_serving.calories == 135
        assert result.per_serving.protein_g == 0
        assert result.per_serving.carbs_g == 0
        assert result.per_serving.fat_g == 15
        assert result.converted_count == 1
        assert result.missing_ingredients == []


class TestMissingIngredients:
    """Ingredients that cannot be used are reported, not fatal."""

    def test_null_calories_skipped(self):
        ingredients = [_ingredient("Poulet"), _ingredient("Epice mystere", calories=None)]

        result = calculate_recipe_macros(ingredients, 1)

        assert result.missing_ingredients == ["Epice mystere"]
        assert result.converted_count == 1
        assert result.per_serving.calories == 100

    def test_unknown_unit_skipped(self):
        ingredients = [_ingredient("Poulet"), _ingredient("Farine", unit="Tasse")]

        result = calculate_recipe_macros(ingredients, 1)

        assert result.missing_ingredients == ["Farine"]
        assert result.per_serving.calories == 100

    def test_null_unit_skipped(self):
        result = calculate_recipe_macros([_ingredient("Sel", unit=None)], 1)

        assert result.missing_ingredients == ["Sel"]
        assert result.converted_count == 0

    def test_null_quantity_skipped(self):
        result = calculate_recipe_macros([_ingredient("Poivre", quantity=None)], 1)

        assert result.missing_ingredients == ["Poivre"]
        assert result.per_serving.calories == 0

    def test_missing_names_keep_input_order(self):
        ingredients = [
            _ingredient("a", quantity=None),
            _ingredient("b"),
            _ingredient("c", unit="Tasse"),
            _ingredient("d", calories=None),
        ]

        result = calculate_recipe_macros(ingredients, 1)

        assert result.missing_ingredients == ["a", "c", "d"]


class TestPortions:
    """Portions are clamped to at least one."""

    @pytest.mark.parametrize("portions", [0, -2])
    def test_non_positive_portions_treated_as_one(self, portions):
        result = calculate_recipe_macros([_ingredient(calories=300.0)], portions)

        assert result.per_serving.calories == 300
        assert result.total_recipe.calories == 300


class TestConfidence:
    """Confidence follows the converted/total ratio."""

    @pytest.mark.parametrize("converted,expected", [
        (10, "high"),
        (9, "high"),
        (8, "medium"),
        (7, "medium"),
        (5, "low"),
        (0, "low"),
    ])
    def test_confidence_for_ten_ingredients(self, converted, expected):
        result = calculate_recipe_macros(_with_missing(converted, 10), 2)

        assert result.confidence == expected
        assert result.converted_count == converted
        assert result.total_count == 10
        assert len(result.missing_ingredients) == 10 - converted

    def test_empty_recipe(self):
        result = calculate_recipe_macros([], 4)

        assert result.confidence == "low"
        assert result.total_count == 0
        assert result.converted_count == 0
        assert result.per_serving.calories == 0
        assert result.total_recipe.fat_g == 0

    def test_confidence_for_ratio_empty(self):
        assert confidence_for_ratio(0, 0) == "low"


class TestRoundHalfUp:
    """Tests for round_half_up helper."""

    @pytest.mark.parametrize("value,expected", [
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (2.49, 2),
        (0.0, 0),
    ])
    def test_values(self, value, expected):
        assert round_half_up(value) == expected
