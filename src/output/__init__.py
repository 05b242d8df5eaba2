"""Output formatting for weekly meal plans."""

from src.output.formatters import (
    format_plan_json,
    format_plan_json_string,
    format_plan_markdown,
    format_macro_line,
)

__all__ = [
    "format_plan_json",
    "format_plan_json_string",
    "format_plan_markdown",
    "format_macro_line",
]
