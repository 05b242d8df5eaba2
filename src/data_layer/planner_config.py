"""Planner configuration loader for loading targets and search settings from YAML."""
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from src.data_layer.exceptions import PlannerConfigError
from src.data_layer.models import MacroTargets, WeeklyMacroTargets
from src.planning.meal_planner import DEFAULT_ITERATIONS, DEFAULT_MAX_LOCAL_PASSES
from src.planning.targets import MEAL_COVERAGE_RATIO, daily_to_weekly, scale_daily_targets
from src.scoring.plan_scorer import ScoringWeights


@dataclass
class PlannerConfig:
    """Daily targets plus scoring and search settings."""

    daily_targets: MacroTargets
    meal_coverage_ratio: float = MEAL_COVERAGE_RATIO
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    iterations: int = DEFAULT_ITERATIONS
    max_local_passes: int = DEFAULT_MAX_LOCAL_PASSES
    seed: Optional[int] = None

    def weekly_targets(self) -> WeeklyMacroTargets:
        """Scale daily targets to the planned meals, then to a week."""
        return daily_to_weekly(scale_daily_targets(self.daily_targets, self.meal_coverage_ratio))


def _number(section: Dict[str, Any], key: str, prefix: str) -> float:
    if key not in section:
        raise PlannerConfigError(f"{prefix}.{key}", "missing")
    try:
        value = float(section[key])
    except (TypeError, ValueError):
        raise PlannerConfigError(f"{prefix}.{key}", f"not a number: {section[key]!r}")
    if value < 0:
        raise PlannerConfigError(f"{prefix}.{key}", "must be non-negative")
    return value


def _integer(section: Dict[str, Any], key: str, default: Optional[int], prefix: str) -> Optional[int]:
    value = section.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise PlannerConfigError(f"{prefix}.{key}", f"not an integer: {value!r}")
    return value


class PlannerConfigLoader:
    """Loader for planner configuration from YAML."""

    def __init__(self, yaml_path: str):
        """Initialize planner config loader from YAML file.

        Args:
            yaml_path: Path to YAML file containing planner configuration
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> PlannerConfig:
        """Load planner configuration from YAML file.

        Returns:
            PlannerConfig object

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            PlannerConfigError: If required fields are missing or invalid
        """
        with open(self.yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return self.from_dict(data)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> PlannerConfig:
        """Build a PlannerConfig from already-parsed YAML data."""
        if not isinstance(data, dict):
            raise PlannerConfigError("<root>", "not a mapping")
        targets = data.get("daily_targets")
        if not isinstance(targets, dict):
            raise PlannerConfigError("daily_targets", "missing or not a mapping")

        daily_targets = MacroTargets(
            calories=_number(targets, "calories", "daily_targets"),
            protein_g=_number(targets, "protein_g", "daily_targets"),
            carbs_g=_number(targets, "carbs_g", "daily_targets"),
            fat_g=_number(targets, "fat_g", "daily_targets"),
        )

        ratio = data.get("meal_coverage_ratio", MEAL_COVERAGE_RATIO)
        if not isinstance(ratio, (int, float)) or not 0 < ratio <= 1:
            raise PlannerConfigError("meal_coverage_ratio", f"must be in (0, 1], got {ratio!r}")

        weights_data = data.get("weights")
        if weights_data is None:
            weights = ScoringWeights()
        elif not isinstance(weights_data, dict):
            raise PlannerConfigError("weights", "not a mapping")
        else:
            try:
                weights = ScoringWeights(**{k: float(v) for k, v in weights_data.items()})
            except (TypeError, ValueError) as exc:
                raise PlannerConfigError("weights", str(exc)) from exc

        search = data.get("search") or {}
        if not isinstance(search, dict):
            raise PlannerConfigError("search", "not a mapping")
        iterations = _integer(search, "iterations", DEFAULT_ITERATIONS, "search")
        max_local_passes = _integer(search, "max_local_passes", DEFAULT_MAX_LOCAL_PASSES, "search")
        if iterations is None or iterations < 1:
            raise PlannerConfigError("search.iterations", "must be at least 1")
        if max_local_passes is None or max_local_passes < 0:
            raise PlannerConfigError("search.max_local_passes", "must be non-negative")
        seed = _integer(search, "seed", None, "search")

        return PlannerConfig(
            daily_targets=daily_targets,
            meal_coverage_ratio=float(ratio),
            weights=weights,
            iterations=iterations,
            max_local_passes=max_local_passes,
            seed=seed,
        )
