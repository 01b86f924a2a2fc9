import logging
from typing import Dict, Optional
from mealbook.domain.Plan import Cell, MealPlan, DAYS, MEAL_TYPES
from mealbook.domain.Recipe import Recipe

logger = logging.getLogger(__name__)


def is_valid_slot(day: str, meal_type: str) -> bool:
    return day in DAYS and meal_type in MEAL_TYPES


class PlanRepository:
    """In-memory weekly meal plan store.

    The plan keeps recipe ids only. A cell whose id no longer resolves to a
    recipe (the recipe was deleted) is shown as an empty slot; it is never
    an error. The ``rotate`` flag records intent only, nothing cycles recipes.
    """

    def __init__(self, plan: Optional[MealPlan] = None):
        self._plan = plan or MealPlan()

    @property
    def plan(self) -> MealPlan:
        return self._plan

    def get_cell(self, day: str, meal_type: str) -> Cell:
        cell = self._plan.cell(day, meal_type)
        return Cell(cell.recipe_id, cell.rotate)

    def set_cell(self, day: str, meal_type: str, recipe_id: Optional[str], rotate: bool = False) -> None:
        """Replace the whole cell (last write wins; rotate is not carried over)."""
        self._plan.replace(day, meal_type, Cell(recipe_id, rotate))
        logger.debug("Plan cell %s/%s -> recipe=%s rotate=%s", day, meal_type, recipe_id, rotate)

    def toggle_rotation(self, day: str, meal_type: str) -> None:
        cell = self._plan.cell(day, meal_type)
        self._plan.replace(day, meal_type, Cell(cell.recipe_id, not cell.rotate))

    def reset_week(self) -> None:
        """Clear every cell back to empty."""
        for day in DAYS:
            for meal_type in MEAL_TYPES:
                self._plan.replace(day, meal_type, Cell())
        logger.info("Meal plan cleared")

    def resolve(self, day: str, meal_type: str, recipes) -> Optional[Recipe]:
        """Recipe shown in a cell, or None for an empty or dangling cell."""
        cell = self._plan.cell(day, meal_type)
        if cell.recipe_id is None:
            return None
        recipe = recipes.get(cell.recipe_id)
        if recipe is None:
            logger.debug("Plan cell %s/%s points at missing recipe %s", day, meal_type, cell.recipe_id)
        return recipe

    def week_view(self, recipes) -> Dict[str, Dict[str, dict]]:
        """Grid for rendering: {day: {meal_type: {recipe_id, recipe_name, rotate}}}.

        recipe_name is None for empty and dangling cells; rotate is only shown
        for cells that resolve to a recipe.
        """
        view: Dict[str, Dict[str, dict]] = {}
        for day in DAYS:
            view[day] = {}
            for meal_type in MEAL_TYPES:
                cell = self._plan.cell(day, meal_type)
                recipe = self.resolve(day, meal_type, recipes)
                view[day][meal_type] = {
                    "recipe_id": cell.recipe_id,
                    "recipe_name": recipe.name if recipe else None,
                    "rotate": cell.rotate if recipe else False,
                }
        return view
