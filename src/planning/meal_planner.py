"""Weekly meal plan generation: random restarts plus local hill-climbing.

Algorithm:
1. Validate pool size and collect warnings
2. Pre-filter the pool (drop low-confidence macros when enough remain)
3. Random restart phase: sample N candidate plans, keep the best
4. Local phase: single-swap, first-improvement hill-climbing on the best plan
5. Return slots, score and warnings

Pure: no DB, no I/O. All randomness goes through the injected `random`
callable, so a seeded source makes the result reproducible.
"""

import logging
from random import Random
from typing import Callable, List, Optional

from src.data_layer.models import CONFIDENCE_LOW, ScoredRecipe, WeeklyMacroTargets
from src.planning.plan_models import (
    TOTAL_MEALS,
    MealSlot,
    PlanResult,
    PlanScore,
    assign_slots,
    zero_plan_score,
)
from src.scoring.plan_scorer import ScoringWeights, score_plan

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 50
DEFAULT_MAX_LOCAL_PASSES = 3

# Below this pool size, variety is reported as limited
LIMITED_VARIETY_POOL_SIZE = 30

RandomSource = Callable[[], float]


def sample_unique(pool: List[ScoredRecipe], count: int, random: RandomSource) -> List[ScoredRecipe]:
    """Draw `count` distinct recipes (partial Fisher-Yates on a copy).

    Each draw picks from the remaining candidates, so recipes never repeat.
    """
    remaining = list(pool)
    drawn = []
    for _ in range(min(count, len(remaining))):
        # random() may return exactly 1.0 from custom sources
        idx = min(int(random() * len(remaining)), len(remaining) - 1)
        drawn.append(remaining.pop(idx))
    return drawn


def select_working_pool(recipe_pool: List[ScoredRecipe], warnings: List[str]) -> List[ScoredRecipe]:
    """Drop low-confidence recipes when enough reliable ones remain.

    Appends a warning when low-confidence recipes have to be kept.
    """
    filtered = [r for r in recipe_pool if r.confidence != CONFIDENCE_LOW]

    if len(filtered) < TOTAL_MEALS and len(recipe_pool) >= TOTAL_MEALS:
        warnings.append("Some recipes have unreliable macro data and may be included in the plan")
        logger.warning(
            "Only %d recipes with reliable macros, falling back to full pool of %d",
            len(filtered), len(recipe_pool),
        )
        return list(recipe_pool)
    if len(filtered) >= TOTAL_MEALS:
        return filtered
    return list(recipe_pool)


def _random_restarts(
    pool: List[ScoredRecipe],
    sample_size: int,
    weekly_targets: WeeklyMacroTargets,
    weights: Optional[ScoringWeights],
    iterations: int,
    random: RandomSource,
):
    best_slots: List[MealSlot] = []
    best_score: PlanScore = zero_plan_score()

    for iteration in range(iterations):
        slots = assign_slots(sample_unique(pool, sample_size, random))
        score = score_plan(slots, weekly_targets, weights)

        # Strict improvement only: ties keep the earlier plan
        if not best_slots or score.overall > best_score.overall:
            best_slots = slots
            best_score = score
            logger.debug("Restart %d: new best %.2f", iteration, score.overall)

    return best_slots, best_score


def _local_search(
    best_slots: List[MealSlot],
    best_score: PlanScore,
    pool: List[ScoredRecipe],
    weekly_targets: WeeklyMacroTargets,
    weights: Optional[ScoringWeights],
    max_local_passes: int,
):
    for local_pass in range(max_local_passes):
        improved = False

        for slot_idx in range(len(best_slots)):
            used_ids = {slot.recipe.id for slot in best_slots}
            current = best_slots[slot_idx]

            for candidate in pool:
                if candidate.id in used_ids:
                    continue

                new_slots = list(best_slots)
                new_slots[slot_idx] = MealSlot(
                    day_index=current.day_index,
                    meal_type=current.meal_type,
                    recipe=candidate,
                )
                new_score = score_plan(new_slots, weekly_targets, weights)

                # First improvement wins, then move to the next slot
                if new_score.overall > best_score.overall:
                    best_slots = new_slots
                    best_score = new_score
                    improved = True
                    break

        logger.debug("Local pass %d: best %.2f", local_pass, best_score.overall)
        if not improved:
            break

    return best_slots, best_score


def generate_meal_plan(
    weekly_targets: WeeklyMacroTargets,
    recipe_pool: List[ScoredRecipe],
    iterations: int = DEFAULT_ITERATIONS,
    max_local_passes: int = DEFAULT_MAX_LOCAL_PASSES,
    random: Optional[RandomSource] = None,
    weights: Optional[ScoringWeights] = None,
) -> PlanResult:
    """Generate a weekly plan (7 days x midi/soir) matching weekly targets.

    Args:
        weekly_targets: Weekly macro totals
        recipe_pool: Candidate recipes
        iterations: Number of random restarts
        max_local_passes: Maximum hill-climbing passes
        random: Zero-argument callable returning floats in [0, 1);
            a fresh Random() instance is used when omitted
        weights: Optional custom scoring weights

    Returns:
        PlanResult. Never raises for small or empty pools: the plan shrinks
        and warnings explain why.
    """
    if random is None:
        random = Random().random

    warnings: List[str] = []

    if not recipe_pool:
        warnings.append("Only 0 recipes available, the plan will be empty")
        return PlanResult(slots=[], score=zero_plan_score(), warnings=warnings)

    if len(recipe_pool) < TOTAL_MEALS:
        warnings.append(
            f"Only {len(recipe_pool)} recipes available, "
            f"{TOTAL_MEALS - len(recipe_pool)} meals short, the plan will be incomplete"
        )

    if len(recipe_pool) < LIMITED_VARIETY_POOL_SIZE:
        warnings.append(
            f"Fewer than {LIMITED_VARIETY_POOL_SIZE} recipes available, variety will be limited"
        )

    pool = select_working_pool(recipe_pool, warnings)
    sample_size = min(TOTAL_MEALS, len(pool))

    best_slots, best_score = _random_restarts(
        pool, sample_size, weekly_targets, weights, iterations, random
    )
    best_slots, best_score = _local_search(
        best_slots, best_score, pool, weekly_targets, weights, max_local_passes
    )

    logger.debug(
        "Generated plan with %d slots, overall %.2f", len(best_slots), best_score.overall
    )
    return PlanResult(slots=best_slots, score=best_score, warnings=warnings)
