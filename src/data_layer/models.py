"""Data models for the meal planner."""
from dataclasses import dataclass, field
from typing import List, Optional


# Confidence levels for macro data quality
CONFIDENCE_HIGH = "high"
CONFIDENCE_MEDIUM = "medium"
CONFIDENCE_LOW = "low"
CONFIDENCE_LEVELS = (CONFIDENCE_HIGH, CONFIDENCE_MEDIUM, CONFIDENCE_LOW)


@dataclass
class NutritionProfile:
    """Represents macronutrient amounts (calories and macros)."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class WeeklyMacroTargets:
    """Weekly macro targets. All values are 7-day totals, not daily."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets as produced by the nutrition formulas."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class ScoredRecipe:
    """A recipe with per-serving macros, ready for planning."""

    id: str  # Unique, stable identifier
    title: str
    per_serving: NutritionProfile  # Macros for one serving
    confidence: str = CONFIDENCE_HIGH  # "high", "medium", "low"
    cuisine: Optional[str] = None  # e.g. "francaise", "italienne"
    category: Optional[str] = None  # e.g. "plat", "soupe", "salade"


@dataclass
class IngredientInput:
    """One ingredient line of a recipe, with per-100g macro data.

    quantity/unit use the French cooking-unit vocabulary
    (e.g. 0.15 "Kilogramme", 2 "Pièce"). Any field may be missing.
    """

    name: str
    quantity: Optional[float] = None
    unit: Optional[str] = None
    calories_per_100g: Optional[float] = None
    protein_per_100g: Optional[float] = None
    carbs_per_100g: Optional[float] = None
    fat_per_100g: Optional[float] = None


@dataclass
class RecipeMacrosResult:
    """Result of a recipe macro calculation."""

    per_serving: NutritionProfile  # Rounded to integers
    total_recipe: NutritionProfile  # Rounded to integers
    confidence: str  # "high", "medium", "low" by conversion coverage
    converted_count: int
    total_count: int
    missing_ingredients: List[str] = field(default_factory=list)
