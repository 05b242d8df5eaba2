"""Formatters for weekly meal plan output (JSON and Markdown)."""

import json
from typing import Any, Dict

from src.data_layer.models import NutritionProfile
from src.planning.plan_models import MacroScore, PlanResult
from src.scoring.plan_scorer import match_color

DAY_NAMES = ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"]

MEAL_NAMES = {
    "midi": "Midi",
    "soir": "Soir",
}

# Display order of macros in score tables
MACRO_LABELS = [
    ("calories", "Calories", "kcal"),
    ("protein", "Protein", "g"),
    ("carbs", "Carbs", "g"),
    ("fat", "Fat", "g"),
]


def format_macro_line(nutrition: NutritionProfile) -> str:
    """Format a nutrition profile on one line (e.g. "650 kcal · P 40g · C 70g · F 20g")."""
    return (
        f"{nutrition.calories:.0f} kcal · P {nutrition.protein_g:.0f}g"
        f" · C {nutrition.carbs_g:.0f}g · F {nutrition.fat_g:.0f}g"
    )


def day_name(day_index: int) -> str:
    """French day name for a day index (0 = Lundi)."""
    if 0 <= day_index < len(DAY_NAMES):
        return DAY_NAMES[day_index]
    return f"Jour {day_index + 1}"


def _format_macro_row(label: str, unit: str, score: MacroScore) -> str:
    sign = "+" if score.delta >= 0 else ""
    return (
        f"| {label} | {score.target:.0f} {unit} | {score.actual:.0f} {unit} "
        f"| {sign}{score.delta:.0f} {unit} | {score.percentage:.0f}% |"
    )


def format_plan_markdown(result: PlanResult) -> str:
    """Format a PlanResult as Markdown.

    Args:
        result: PlanResult from meal plan generation

    Returns:
        Formatted Markdown string
    """
    score = result.score
    lines = []

    # Header
    lines.append("# Weekly Meal Plan\n")
    lines.append(f"**Match:** {score.overall:.0f}/100 ({match_color(score.overall)})\n")

    # Warnings (if any)
    if result.warnings:
        lines.append("## Warnings\n")
        for warning in result.warnings:
            lines.append(f"- {warning}")
        lines.append("")

    # Meals, grouped by day
    current_day = None
    for slot in result.slots:
        if slot.day_index != current_day:
            current_day = slot.day_index
            lines.append(f"## {day_name(current_day)}")
        recipe = slot.recipe
        meal = MEAL_NAMES.get(slot.meal_type, slot.meal_type.capitalize())
        lines.append(f"- **{meal}:** {recipe.title} ({format_macro_line(recipe.per_serving)})")
    if result.slots:
        lines.append("")

    # Weekly totals against targets
    lines.append("## Weekly Targets")
    lines.append("| Macro | Target | Actual | Delta | Score |")
    lines.append("|---|---|---|---|---|")
    for attr, label, unit in MACRO_LABELS:
        lines.append(_format_macro_row(label, unit, getattr(score, attr)))
    lines.append("")

    lines.append(f"**Variety:** {score.variety:.0f}/100")
    lines.append(f"**Daily balance:** {score.daily_balance:.0f}/100")
    lines.append("")

    return "\n".join(lines)


def _macro_score_json(score: MacroScore) -> Dict[str, Any]:
    return {
        "target": round(score.target, 1),
        "actual": round(score.actual, 1),
        "delta": round(score.delta, 1),
        "percentage": round(score.percentage, 1),
    }


def format_plan_json(result: PlanResult) -> Dict[str, Any]:
    """Format a PlanResult as a JSON-ready dictionary.

    Args:
        result: PlanResult from meal plan generation

    Returns:
        Dictionary ready for JSON serialization
    """
    slots_json = []
    for slot in result.slots:
        recipe = slot.recipe
        slots_json.append({
            "day_index": slot.day_index,
            "day": day_name(slot.day_index),
            "meal_type": slot.meal_type,
            "recipe": {
                "id": recipe.id,
                "title": recipe.title,
                "cuisine": recipe.cuisine,
                "category": recipe.category,
                "confidence": recipe.confidence,
                "per_serving": {
                    "calories": round(recipe.per_serving.calories, 1),
                    "protein_g": round(recipe.per_serving.protein_g, 1),
                    "carbs_g": round(recipe.per_serving.carbs_g, 1),
                    "fat_g": round(recipe.per_serving.fat_g, 1),
                },
            },
        })

    score = result.score
    return {
        "slots": slots_json,
        "score": {
            "overall": round(score.overall, 1),
            "match_color": match_color(score.overall),
            "calories": _macro_score_json(score.calories),
            "protein": _macro_score_json(score.protein),
            "carbs": _macro_score_json(score.carbs),
            "fat": _macro_score_json(score.fat),
            "variety": round(score.variety, 1),
            "daily_balance": round(score.daily_balance, 1),
        },
        "warnings": list(result.warnings),
    }


def format_plan_json_string(result: PlanResult, indent: int = 2) -> str:
    """Format a PlanResult as a JSON string.

    Args:
        result: PlanResult from meal plan generation
        indent: JSON indentation (default: 2)

    Returns:
        JSON string
    """
    return json.dumps(format_plan_json(result), indent=indent, ensure_ascii=False)
