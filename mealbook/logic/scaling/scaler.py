"""Serving scaler.

scale_ingredients(ingredients, base_servings, target_servings) returns new
Ingredient objects whose quantity is multiplied by target / base. Nothing is
rounded here; format_quantity() is for display only.
"""
from typing import Any, List
from mealbook.domain.Ingredient import Ingredient
from mealbook.utilities.constants import QUANTITY_FORMAT


def clamp_servings(value: Any, fallback: int = 1) -> int:
    """Coerce user input to a serving count >= 1 (invalid or non-positive -> fallback)."""
    try:
        servings = int(value)
    except (TypeError, ValueError):
        try:
            servings = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return fallback
    return servings if servings >= 1 else fallback


def scale_factor(base_servings: int, target_servings: int) -> float:
    return target_servings / base_servings


def scale_ingredients(ingredients: List[Ingredient], base_servings: int, target_servings: Any) -> List[Ingredient]:
    """Scale every quantity from base_servings to target_servings, preserving order.

    Args:
        ingredients: ingredients in the recipe's base-serving frame.
        base_servings: serving count the stored quantities are correct for (>= 1).
        target_servings: requested serving count; clamped to >= 1.

    Returns:
        New list of Ingredient copies; id, name, unit and cooking time unchanged.
    """
    if base_servings < 1:
        raise ValueError(f"base_servings must be >= 1, got {base_servings}")
    target = clamp_servings(target_servings)
    if target == base_servings:
        return [ing.with_quantity(ing.quantity) for ing in ingredients]
    factor = scale_factor(base_servings, target)
    return [ing.with_quantity(ing.quantity * factor) for ing in ingredients]


def format_quantity(quantity: float) -> str:
    return QUANTITY_FORMAT.format(quantity)


__all__ = ["clamp_servings", "scale_factor", "scale_ingredients", "format_quantity"]
