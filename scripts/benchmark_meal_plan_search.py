#!/usr/bin/env python3
"""Benchmark generate_meal_plan: run time and output summary.

Run from repo root:
  python scripts/benchmark_meal_plan_search.py

Optional: pool size, iterations and seed via env.
"""
from __future__ import annotations

import os
import sys
import time
from random import Random

# Allow importing from src when run from repo root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.data_layer.models import NutritionProfile, ScoredRecipe, WeeklyMacroTargets
from src.planning.meal_planner import generate_meal_plan

CUISINES = ["francaise", "italienne", "asiatique", "mexicaine", "libanaise"]
CATEGORIES = ["plat", "soupe", "salade", "gratin"]


def make_pool(size: int, rng: Random) -> list:
    return [
        ScoredRecipe(
            id=f"r{i}",
            title=f"Recipe {i}",
            per_serving=NutritionProfile(
                calories=rng.uniform(350, 900),
                protein_g=rng.uniform(15, 60),
                carbs_g=rng.uniform(20, 110),
                fat_g=rng.uniform(8, 45),
            ),
            confidence=rng.choice(["high", "high", "medium", "low"]),
            cuisine=CUISINES[i % len(CUISINES)],
            category=CATEGORIES[i % len(CATEGORIES)],
        )
        for i in range(size)
    ]


def main() -> None:
    pool_size = int(os.environ.get("MEALPLAN_POOL_SIZE", "200"))
    iterations = int(os.environ.get("MEALPLAN_ITERATIONS", "50"))
    seed = int(os.environ.get("MEALPLAN_SEED", "42"))

    pool = make_pool(pool_size, Random(seed))
    targets = WeeklyMacroTargets(calories=8400, protein_g=560, carbs_g=910, fat_g=280)

    t0 = time.perf_counter()
    result = generate_meal_plan(
        weekly_targets=targets,
        recipe_pool=pool,
        iterations=iterations,
        random=Random(seed).random,
    )
    t1 = time.perf_counter()

    score = result.score
    print("--- Meal plan search benchmark ---")
    print(f"Pool size: {pool_size}, iterations: {iterations}")
    print(f"Wall time: {t1 - t0:.3f}s")
    print(f"Slots: {len(result.slots)}")
    print(f"Overall: {score.overall:.1f}")
    for name in ("calories", "protein", "carbs", "fat"):
        macro = getattr(score, name)
        print(f"  {name}: actual={macro.actual:.0f} target={macro.target:.0f} score={macro.percentage:.1f}")
    print(f"  variety: {score.variety:.1f}")
    print(f"  daily balance: {score.daily_balance:.1f}")
    for warning in result.warnings:
        print(f"Warning: {warning}")
    print("----------------------------------")


if __name__ == "__main__":
    main()
