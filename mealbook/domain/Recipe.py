"""Recipe domain entity: name, description, base servings, ingredients, instructions, display flags."""
from typing import List, Optional
from mealbook.domain.Ingredient import Ingredient


class Recipe:
    def __init__(self, name: str = "", description: str = "", base_servings: int = 1,
                 ingredients: Optional[List[Ingredient]] = None, instructions: str = "",
                 external_url: Optional[str] = None, total_cooking_time: Optional[int] = None,
                 show_cooking_time: bool = True, alerts_enabled: bool = False,
                 image_url: Optional[str] = None, id: Optional[str] = None):
        self.id = id
        self.name = name
        self.description = description
        self.base_servings = base_servings
        self.ingredients = ingredients[:] if ingredients else []
        self.instructions = instructions
        self.external_url = external_url
        self.total_cooking_time = total_cooking_time
        self.show_cooking_time = show_cooking_time
        self.alerts_enabled = alerts_enabled
        self.image_url = image_url

    def __str__(self) -> str:
        return f"{self.name} - serves {self.base_servings} - {len(self.ingredients)} ingredients"

    __repr__ = __str__

    def steps(self) -> List[str]:
        """Instruction lines with blank lines dropped, in order."""
        return [line.strip() for line in (self.instructions or "").split("\n") if line.strip()]

    def get_ingredient(self, ingredient_id: str) -> Optional[Ingredient]:
        for ing in self.ingredients:
            if ing.id == ingredient_id:
                return ing
        return None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name or description."""
        q = (query or "").lower()
        return q in self.name.lower() or q in (self.description or "").lower()

    @staticmethod
    def compute_total_cooking_time(ingredients: List[Ingredient]) -> int:
        return sum(ing.cooking_time or 0 for ing in ingredients)

    @staticmethod
    def from_dict(data):
        d = dict(data)
        renames = {
            "baseServings": "base_servings",
            "externalUrl": "external_url",
            "totalCookingTime": "total_cooking_time",
            "showCookingTime": "show_cooking_time",
            "alertsEnabled": "alerts_enabled",
            "imageUrl": "image_url",
        }
        for old, new in renames.items():
            if old in d:
                d.setdefault(new, d.pop(old))
        allowed = {
            "id", "name", "description", "base_servings", "ingredients", "instructions",
            "external_url", "total_cooking_time", "show_cooking_time", "alerts_enabled", "image_url",
        }
        filtered = {k: v for k, v in d.items() if k in allowed}
        filtered['ingredients'] = [Ingredient.from_dict(ing) for ing in d.get('ingredients', [])]
        if filtered.get('id') is not None:
            filtered['id'] = str(filtered['id'])
        return Recipe(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "base_servings": self.base_servings,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "instructions": self.instructions,
            "external_url": self.external_url,
            "total_cooking_time": self.total_cooking_time,
            "show_cooking_time": self.show_cooking_time,
            "alerts_enabled": self.alerts_enabled,
            "image_url": self.image_url,
        }
