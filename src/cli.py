#!/usr/bin/env python3
"""Command-line interface for the weekly macro meal planner."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from random import Random
from typing import List, Optional

import yaml

from src.data_layer.exceptions import MealPlannerError
from src.data_layer.planner_config import PlannerConfigLoader
from src.data_layer.recipe_db import RecipePoolDB
from src.output.formatters import format_plan_json_string, format_plan_markdown
from src.planning.meal_planner import generate_meal_plan

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

EXIT_MISSING_FILE = 1
EXIT_INVALID_DATA = 2


def configure_logging() -> None:
    """Configure root logging from the LOG_LEVEL environment variable.

    Unknown level names fall back to WARNING.
    """
    level = os.getenv("LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "WARNING"
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a weekly lunch/dinner plan matching macro targets"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/planner.yaml",
        help="Path to planner YAML file (default: config/planner.yaml)"
    )
    parser.add_argument(
        "--recipes",
        type=str,
        default="data/recipes/recipes.json",
        help="Path to recipes JSON file (default: data/recipes/recipes.json)"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json", "both"],
        default="markdown",
        help="Output format: markdown (default), json, or both"
    )
    parser.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save output (default: print to stdout)"
    )
    parser.add_argument(
        "--iterations",
        type=positive_int,
        help="Number of random restarts (overrides config)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible plan (overrides config)"
    )
    parser.add_argument(
        "--include-all-categories",
        action="store_true",
        help="Keep snacks, desserts, drinks and side dishes in the pool"
    )
    return parser


def write_output(result, output: str, output_file: Optional[str]) -> None:
    """Print or save the plan in the requested format(s)."""
    if output in ["markdown", "both"]:
        markdown_output = format_plan_markdown(result)
        if output_file:
            output_path = Path(output_file)
            if output == "both":
                output_path = output_path.with_suffix(".md")
            output_path.write_text(markdown_output, encoding="utf-8")
            print(f"Markdown output saved to {output_path}", file=sys.stderr)
        else:
            print(markdown_output)

    if output in ["json", "both"]:
        json_output = format_plan_json_string(result, indent=2)
        if output_file:
            output_path = Path(output_file)
            if output == "both":
                output_path = output_path.with_suffix(".json")
            output_path.write_text(json_output, encoding="utf-8")
            print(f"JSON output saved to {output_path}", file=sys.stderr)
        else:
            if output == "both":
                print("\n" + "="*80 + "\n", file=sys.stdout)
            print(json_output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging()

    # Validate file paths
    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: Planner config file not found: {config_path}", file=sys.stderr)
        print(f"Hint: Copy config/planner.yaml.example to {config_path} and customize it", file=sys.stderr)
        return EXIT_MISSING_FILE

    recipes_path = Path(args.recipes)
    if not recipes_path.exists():
        print(f"Error: Recipes file not found: {recipes_path}", file=sys.stderr)
        return EXIT_MISSING_FILE

    try:
        print(f"Loading planner config from {config_path}...", file=sys.stderr)
        config = PlannerConfigLoader(str(config_path)).load()

        print(f"Loading recipes from {recipes_path}...", file=sys.stderr)
        recipe_db = RecipePoolDB(str(recipes_path))
        if args.include_all_categories:
            pool = recipe_db.get_all_recipes()
        else:
            pool = recipe_db.get_meal_recipes()
        print(f"Found {len(pool)} plannable recipes", file=sys.stderr)
    except (MealPlannerError, yaml.YAMLError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_DATA

    seed = args.seed if args.seed is not None else config.seed
    iterations = args.iterations if args.iterations is not None else config.iterations

    print("Planning meals...", file=sys.stderr)
    result = generate_meal_plan(
        weekly_targets=config.weekly_targets(),
        recipe_pool=pool,
        iterations=iterations,
        max_local_passes=config.max_local_passes,
        random=Random(seed).random,
        weights=config.weights,
    )

    write_output(result, args.output, args.output_file)

    # Print summary to stderr
    if result.warnings:
        print("\n⚠️  Meal plan generated with warnings:", file=sys.stderr)
        for warning in result.warnings:
            print(f"   - {warning}", file=sys.stderr)
    else:
        print("\n✅ Meal plan generated successfully!", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
