"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import List, Optional

from mealbook.domain.Ingredient import Ingredient
from mealbook.domain.Recipe import Recipe
from mealbook.logic.scaling.scaler import clamp_servings
from mealbook.utilities.constants import UNITS, DEFAULT_UNIT, DEFAULT_BASE_SERVINGS

DAY_PATTERN = r'^(Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday)$'
MEAL_TYPE_PATTERN = r'^(Breakfast|Lunch|Dinner|Snack)$'


class IngredientInput(BaseModel):
    """Schema for ingredient input validation."""
    id: Optional[str] = None
    name: str = Field("", validate_default=True)
    quantity: float = Field(0, ge=0, allow_inf_nan=False)
    unit: str = DEFAULT_UNIT
    cooking_time: Optional[int] = Field(None, ge=0)

    @field_validator('id', mode='before')
    @classmethod
    def id_as_string(cls, v):
        return str(v) if v not in (None, "") else None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Ingredient names must not be blank."""
        if not v.strip():
            raise ValueError('Please fill in all ingredient names')
        return v.strip()

    @field_validator('quantity', mode='before')
    @classmethod
    def blank_quantity(cls, v):
        return 0 if v in (None, "") else v

    @field_validator('unit')
    @classmethod
    def validate_unit(cls, v):
        if v not in UNITS:
            raise ValueError(f'Unknown unit: {v}')
        return v

    @field_validator('cooking_time', mode='before')
    @classmethod
    def blank_cooking_time(cls, v):
        return None if v in (None, "") else v


class RecipeInput(BaseModel):
    """Schema for recipe create/edit submissions."""
    name: str = Field("", validate_default=True)
    description: str = ""
    base_servings: int = DEFAULT_BASE_SERVINGS
    ingredients: List[IngredientInput] = Field(default_factory=list, validate_default=True)
    instructions: str = ""
    external_url: Optional[str] = None
    show_cooking_time: bool = True
    alerts_enabled: bool = False
    image_url: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate recipe name."""
        if not v.strip():
            raise ValueError('Please enter a recipe name')
        return v.strip()

    @field_validator('base_servings', mode='before')
    @classmethod
    def clamp_base_servings(cls, v):
        return clamp_servings(v)

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, v):
        """Ensure recipe has at least one ingredient with an id unique within the recipe."""
        if not v:
            raise ValueError('Please add at least one ingredient')
        seen = set()
        for ing in v:
            if ing.id is None or ing.id in seen:
                ing.id = None
            else:
                seen.add(ing.id)
        counter = 1
        for ing in v:
            if ing.id is None:
                while str(counter) in seen:
                    counter += 1
                ing.id = str(counter)
                seen.add(ing.id)
        return v

    @field_validator('external_url', 'image_url', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    def to_recipe(self) -> Recipe:
        """Build the domain object; total cooking time is snapshotted here."""
        ingredients = [
            Ingredient(ing.id, ing.name, ing.quantity, ing.unit, ing.cooking_time)
            for ing in self.ingredients
        ]
        return Recipe(
            name=self.name,
            description=self.description,
            base_servings=self.base_servings,
            ingredients=ingredients,
            instructions=self.instructions,
            external_url=self.external_url,
            total_cooking_time=Recipe.compute_total_cooking_time(ingredients),
            show_cooking_time=self.show_cooking_time,
            alerts_enabled=self.alerts_enabled,
            image_url=self.image_url,
        )


class PlanCellInput(BaseModel):
    """Schema for meal plan cell assignment."""
    day: str = Field(..., pattern=DAY_PATTERN)
    meal_type: str = Field(..., pattern=MEAL_TYPE_PATTERN)
    recipe_id: Optional[str] = None
    rotate: bool = False

    @field_validator('recipe_id', mode='before')
    @classmethod
    def blank_recipe(cls, v):
        return None if v in (None, "") else str(v)


class RotationInput(BaseModel):
    day: str = Field(..., pattern=DAY_PATTERN)
    meal_type: str = Field(..., pattern=MEAL_TYPE_PATTERN)


class PermissionInput(BaseModel):
    state: str = Field(..., pattern=r'^(unset|granted|denied)$')


def first_error_message(exc: ValidationError) -> str:
    """Human-readable message for the first validation error."""
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    err = errors[0]
    msg = err.get('msg', 'Invalid input')
    if msg.startswith('Value error, '):
        return msg[len('Value error, '):]
    loc = ".".join(str(part) for part in err.get('loc', ()))
    return f"{loc}: {msg}" if loc else msg
