"""Tests for nutrition aggregator."""
import pytest

from src.nutrition.aggregator import NutritionAggregator
from src.data_layer.models import NutritionProfile, ScoredRecipe
from src.planning.plan_models import assign_slots


def _recipe(recipe_id, calories, protein, carbs, fat):
    return ScoredRecipe(
        id=recipe_id,
        title=recipe_id,
        per_serving=NutritionProfile(calories=calories, protein_g=protein, carbs_g=carbs, fat_g=fat),
    )


class TestNutritionAggregator:
    """Tests for NutritionAggregator."""

    def test_aggregate_recipes(self):
        """Test aggregating one serving from multiple recipes."""
        recipes = [
            _recipe("r1", 500.0, 30.0, 50.0, 20.0),
            _recipe("r2", 600.0, 40.0, 60.0, 25.0),
        ]

        total = NutritionAggregator.aggregate_recipes(recipes)

        assert total.calories == pytest.approx(1100.0)
        assert total.protein_g == pytest.approx(70.0)
        assert total.carbs_g == pytest.approx(110.0)
        assert total.fat_g == pytest.approx(45.0)

    def test_aggregate_empty(self):
        """Test aggregating nothing gives zeros."""
        total = NutritionAggregator.aggregate_recipes([])

        assert total == NutritionProfile(calories=0.0, protein_g=0.0, carbs_g=0.0, fat_g=0.0)

    def test_aggregate_slots(self):
        """Test slot totals count each slot's recipe once."""
        slots = assign_slots([
            _recipe("r1", 500.0, 30.0, 50.0, 20.0),
            _recipe("r2", 600.0, 40.0, 60.0, 25.0),
            _recipe("r3", 400.0, 20.0, 40.0, 10.0),
        ])

        total = NutritionAggregator.aggregate_slots(slots)

        assert total.calories == pytest.approx(1500.0)
        assert total.fat_g == pytest.approx(55.0)

    def test_calories_by_day(self):
        """Test per-day calorie totals follow slot day indices."""
        slots = assign_slots([
            _recipe("r1", 500.0, 0, 0, 0),
            _recipe("r2", 600.0, 0, 0, 0),
            _recipe("r3", 400.0, 0, 0, 0),
        ])

        by_day = NutritionAggregator.calories_by_day(slots)

        assert by_day == {0: pytest.approx(1100.0), 1: pytest.approx(400.0)}
