import itertools
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union
from mealbook.domain.Recipe import Recipe
from mealbook.infra.paths import SAMPLE_RECIPES_FILE

logger = logging.getLogger(__name__)


def reading_from_recipes(path: Union[str, Path] = SAMPLE_RECIPES_FILE) -> List[Recipe]:
    """Read recipes from a JSON file with proper error handling."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            recipes_data = json.load(f)
        return [Recipe.from_dict(entry) for entry in recipes_data]
    except FileNotFoundError:
        logger.warning("Recipes file not found: %s. Returning empty list.", path)
        return []
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in recipes file: %s", e)
        return []


class RecipeRepository:
    """In-memory recipe store. Insertion order is list order.

    The store trusts its callers: validation happens at the form/API layer.
    Ids come from a monotonic counter, so two recipes created in the same
    instant still get distinct ids.
    """

    def __init__(self, recipes: Optional[Iterable[Recipe]] = None):
        self._recipes: List[Recipe] = []
        self._ids = itertools.count(1)
        for recipe in recipes or []:
            self._insert_seed(recipe)

    def _insert_seed(self, recipe: Recipe):
        # Seeds keep their ids; the counter moves past any numeric one
        if recipe.id is None:
            recipe.id = self._next_id()
        elif recipe.id.isdigit():
            highest = int(recipe.id)
            self._ids = itertools.count(max(highest + 1, next(self._ids)))
        self._recipes.append(recipe)

    def _next_id(self) -> str:
        new_id = str(next(self._ids))
        while self.get(new_id) is not None:
            new_id = str(next(self._ids))
        return new_id

    def add(self, recipe: Recipe) -> Recipe:
        recipe.id = self._next_id()
        self._recipes.append(recipe)
        logger.info("Recipe added id=%s name=%s", recipe.id, recipe.name)
        return recipe

    def update(self, recipe_id: str, recipe: Recipe) -> None:
        for idx, existing in enumerate(self._recipes):
            if existing.id == recipe_id:
                recipe.id = recipe_id
                self._recipes[idx] = recipe
                logger.info("Recipe updated id=%s", recipe_id)
                return
        logger.debug("Update ignored, no recipe with id=%s", recipe_id)

    def delete(self, recipe_id: str) -> None:
        before = len(self._recipes)
        self._recipes = [r for r in self._recipes if r.id != recipe_id]
        if len(self._recipes) != before:
            logger.info("Recipe deleted id=%s", recipe_id)

    def get(self, recipe_id: Optional[str]) -> Optional[Recipe]:
        if recipe_id is None:
            return None
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def list(self) -> List[Recipe]:
        return list(self._recipes)

    def search(self, query: str = "") -> List[Recipe]:
        """Recipes whose name or description contains query (case-insensitive)."""
        if not query:
            return self.list()
        return [r for r in self._recipes if r.matches(query)]

    def __len__(self) -> int:
        return len(self._recipes)
