"""Plan domain entity: the weekly grid of (day, meal type) cells."""
from typing import Dict, Optional

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MEAL_TYPES = ["Breakfast", "Lunch", "Dinner", "Snack"]


class Cell:
    def __init__(self, recipe_id: Optional[str] = None, rotate: bool = False):
        self.recipe_id = recipe_id
        self.rotate = rotate

    def is_empty(self) -> bool:
        return self.recipe_id is None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (self.recipe_id, self.rotate) == (other.recipe_id, other.rotate)

    def __repr__(self) -> str:
        return f"Cell(recipe_id={self.recipe_id!r}, rotate={self.rotate})"

    def to_dict(self):
        return {"recipe_id": self.recipe_id, "rotate": self.rotate}


class MealPlan:
    def __init__(self):
        # All 28 cells exist from the start; only their content is ever replaced
        self.meals: Dict[str, Dict[str, Cell]] = {
            day: {meal_type: Cell() for meal_type in MEAL_TYPES} for day in DAYS
        }

    def cell(self, day: str, meal_type: str) -> Cell:
        return self.meals[day][meal_type]

    def replace(self, day: str, meal_type: str, cell: Cell):
        self.meals[day][meal_type] = cell

    def to_dict(self):
        return {
            day: {meal_type: cell.to_dict() for meal_type, cell in meals.items()}
            for day, meals in self.meals.items()
        }
