"""Recipe pool database for loading plannable recipes from JSON."""
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from src.data_layer.exceptions import RecipeDataError
from src.data_layer.models import (
    CONFIDENCE_HIGH,
    CONFIDENCE_LEVELS,
    IngredientInput,
    NutritionProfile,
    ScoredRecipe,
)
from src.nutrition.recipe_macros import calculate_recipe_macros

logger = logging.getLogger(__name__)

# Categories that are not standalone lunch/dinner meals
EXCLUDED_CATEGORIES = frozenset({
    "Snacks",
    "Cocktail",
    "Dessert sans cuisson",
    "Gâteau",
    "Dips",
    "Planches/assemblage",
    "Apéro à partager",
    "Boisson chaude",
    "Boisson mixée",
    "Condiment salé",
    "Condiment sucré",
    "Pâte",
    "Accompagnement légumes",
    "Accompagnement féculents",
    "Cookie",
    "Brownie/Bar",
    "Soupe froide",
    "Crêpes/Pancakes/Gaufres",
    "Tarte/Crumble",
    "Cake salés",
})


def filter_meal_recipes(
    recipes: Iterable[ScoredRecipe],
    excluded: Iterable[str] = EXCLUDED_CATEGORIES,
) -> List[ScoredRecipe]:
    """Keep recipes whose category is a proper meal. Unknown categories are kept."""
    excluded = set(excluded)
    return [r for r in recipes if r.category is None or r.category not in excluded]


class RecipePoolDB:
    """Database for managing plannable recipes loaded from JSON.

    Each entry carries either precomputed `per_serving` macros or an
    `ingredients` list plus `portions`, from which macros are calculated.
    """

    def __init__(self, json_path: str):
        """Initialize recipe pool from JSON file.

        Args:
            json_path: Path to JSON file containing {"recipes": [...]}
        """
        self.json_path = Path(json_path)
        self._recipes: List[ScoredRecipe] = []
        self._load_recipes()

    def _load_recipes(self):
        """Load recipes from JSON file."""
        with open(self.json_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise RecipeDataError(str(self.json_path), 'top level must be an object with a "recipes" list')
        recipes = data.get("recipes", [])
        if not isinstance(recipes, list):
            raise RecipeDataError(str(self.json_path), '"recipes" must be a list')

        for recipe_data in recipes:
            if not isinstance(recipe_data, dict):
                raise RecipeDataError(str(self.json_path), f"recipe entry is not an object: {recipe_data!r}")
            self._recipes.append(self._parse_recipe(recipe_data))

        logger.debug("Loaded %d recipes from %s", len(self._recipes), self.json_path)

    def _parse_recipe(self, recipe_data: dict) -> ScoredRecipe:
        """Parse a single recipe from dictionary data.

        Args:
            recipe_data: Dictionary containing recipe data

        Returns:
            ScoredRecipe object

        Raises:
            RecipeDataError: If id/title or macro data is missing
        """
        if "id" not in recipe_data or "title" not in recipe_data:
            raise RecipeDataError(str(self.json_path), f"recipe without id or title: {recipe_data!r}")

        recipe_id = str(recipe_data["id"])

        if "per_serving" in recipe_data:
            per_serving = self._parse_macros(recipe_id, recipe_data["per_serving"])
            confidence = recipe_data.get("confidence", CONFIDENCE_HIGH)
        elif "ingredients" in recipe_data:
            if not isinstance(recipe_data["ingredients"], list):
                raise RecipeDataError(str(self.json_path), f"recipe {recipe_id} ingredients must be a list")
            ingredients = [self._parse_ingredient(ing) for ing in recipe_data["ingredients"]]
            result = calculate_recipe_macros(ingredients, self._parse_portions(recipe_id, recipe_data))
            per_serving = result.per_serving
            confidence = result.confidence
            if result.missing_ingredients:
                logger.debug(
                    "Recipe %s: %d/%d ingredients converted",
                    recipe_id, result.converted_count, result.total_count,
                )
        else:
            raise RecipeDataError(str(self.json_path), f"recipe {recipe_id} has no per_serving or ingredients")

        if confidence not in CONFIDENCE_LEVELS:
            raise RecipeDataError(str(self.json_path), f"recipe {recipe_id} has unknown confidence {confidence!r}")

        return ScoredRecipe(
            id=recipe_id,
            title=recipe_data["title"],
            per_serving=per_serving,
            confidence=confidence,
            cuisine=recipe_data.get("cuisine"),
            category=recipe_data.get("category"),
        )

    def _parse_macros(self, recipe_id: str, macros: dict) -> NutritionProfile:
        try:
            return NutritionProfile(
                calories=float(macros["calories"]),
                protein_g=float(macros["protein_g"]),
                carbs_g=float(macros["carbs_g"]),
                fat_g=float(macros["fat_g"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise RecipeDataError(
                str(self.json_path), f"recipe {recipe_id} has invalid per_serving: {exc}"
            ) from exc

    def _parse_portions(self, recipe_id: str, recipe_data: dict) -> float:
        value = recipe_data.get("portions", 1)
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise RecipeDataError(
                str(self.json_path), f"recipe {recipe_id} has invalid portions: {value!r}"
            ) from exc

    def _optional_number(self, ing_data: dict, key: str) -> Optional[float]:
        value = ing_data.get(key)
        if value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise RecipeDataError(
                str(self.json_path), f"ingredient {ing_data['name']!r} has invalid {key}: {value!r}"
            ) from exc

    def _parse_ingredient(self, ing_data: dict) -> IngredientInput:
        """Parse a single ingredient line. Absent values stay None."""
        if not isinstance(ing_data, dict) or "name" not in ing_data:
            raise RecipeDataError(str(self.json_path), f"ingredient without name: {ing_data!r}")

        return IngredientInput(
            name=ing_data["name"],
            quantity=self._optional_number(ing_data, "quantity"),
            unit=ing_data.get("unit"),
            calories_per_100g=self._optional_number(ing_data, "calories_per_100g"),
            protein_per_100g=self._optional_number(ing_data, "protein_per_100g"),
            carbs_per_100g=self._optional_number(ing_data, "carbs_per_100g"),
            fat_per_100g=self._optional_number(ing_data, "fat_per_100g"),
        )

    def get_all_recipes(self) -> List[ScoredRecipe]:
        """Get all recipes in the database.

        Returns:
            List of all ScoredRecipe objects
        """
        return self._recipes.copy()

    def get_meal_recipes(self) -> List[ScoredRecipe]:
        """Get recipes suitable as lunch/dinner (EXCLUDED_CATEGORIES removed)."""
        return filter_meal_recipes(self._recipes)

    def get_recipe_by_id(self, recipe_id: str) -> Optional[ScoredRecipe]:
        """Get a recipe by its ID.

        Args:
            recipe_id: Unique recipe identifier

        Returns:
            ScoredRecipe object if found, None otherwise
        """
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None
