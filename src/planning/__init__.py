"""Planning module for weekly meal plan generation.

Entry point: src.planning.meal_planner.generate_meal_plan
"""
