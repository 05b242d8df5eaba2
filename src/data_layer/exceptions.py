"""Custom exceptions for the meal planner's data loading layer."""


class MealPlannerError(Exception):
    """Base class for meal planner data errors."""


class RecipeDataError(MealPlannerError):
    """Raised when a recipe pool file contains a malformed entry."""

    def __init__(self, source: str, detail: str):
        """Initialize exception with the data source and problem.

        Args:
            source: Path (or description) of the recipe data
            detail: What is wrong with the entry
        """
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid recipe data in '{source}': {detail}")


class PlannerConfigError(MealPlannerError):
    """Raised when the planner configuration is missing a key or has a bad value."""

    def __init__(self, key: str, detail: str):
        """Initialize exception with the offending configuration key.

        Args:
            key: Dotted configuration key (e.g. "daily_targets.calories")
            detail: What is wrong with the value
        """
        self.key = key
        self.detail = detail
        super().__init__(f"Invalid planner configuration '{key}': {detail}")
