"""Scoring module for weekly meal plan evaluation."""

from .plan_scorer import (
    DEFAULT_WEIGHTS,
    ScoringWeights,
    calculate_daily_balance_score,
    calculate_variety_score,
    macro_score,
    match_color,
    score_plan,
    sum_macros,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "ScoringWeights",
    "calculate_daily_balance_score",
    "calculate_variety_score",
    "macro_score",
    "match_color",
    "score_plan",
    "sum_macros",
]
