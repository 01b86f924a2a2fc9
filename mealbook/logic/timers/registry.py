"""Cooking timer registry.

Keeps one CookingTimer per (recipe id, ingredient id) for the lifetime of
the process, creating it on first use from the recipe's declared cooking
time and alerts flag.
"""
import logging
from typing import Dict, List, Optional, Tuple

from mealbook.domain.CookingTimer import CookingTimer
from mealbook.domain.Recipe import Recipe

logger = logging.getLogger(__name__)


class TimerRegistry:
    def __init__(self, ticker, notifier=None, bus=None):
        self._ticker = ticker
        self._notifier = notifier
        self._bus = bus
        self._timers: Dict[Tuple[str, str], CookingTimer] = {}

    def get(self, recipe: Recipe, ingredient_id: str) -> Optional[CookingTimer]:
        """Timer for an ingredient, or None when it has no cooking time."""
        key = (recipe.id, ingredient_id)
        timer = self._timers.get(key)
        if timer is not None:
            return timer
        ingredient = recipe.get_ingredient(ingredient_id)
        if ingredient is None or not ingredient.has_timer():
            return None
        timer = CookingTimer(
            ingredient.name, ingredient.cooking_time, alerts_enabled=bool(recipe.alerts_enabled),
            ticker=self._ticker, notifier=self._notifier, bus=self._bus,
            context={"recipe_id": recipe.id, "ingredient_id": ingredient_id},
        )
        self._timers[key] = timer
        return timer

    def for_recipe(self, recipe: Recipe) -> List[CookingTimer]:
        timers = []
        for ing in recipe.ingredients:
            timer = self.get(recipe, ing.id)
            if timer is not None:
                timers.append(timer)
        return timers

    def discard_recipe(self, recipe_id: str):
        """Stop and forget every timer of a recipe (deleted or edited)."""
        for key in [k for k in self._timers if k[0] == recipe_id]:
            self._timers.pop(key).reset()
            logger.debug("Timer %s discarded", key)

    def shutdown(self):
        for timer in self._timers.values():
            timer.reset()
        self._timers.clear()
