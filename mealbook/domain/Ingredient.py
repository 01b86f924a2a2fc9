"""Ingredient domain entity: id, name, quantity, unit, optional cooking time in minutes."""
from typing import Optional
from mealbook.utilities.constants import DEFAULT_UNIT


class Ingredient:
    def __init__(self, id: str = "", name: str = "", quantity: float = 0, unit: str = DEFAULT_UNIT,
                 cooking_time: Optional[int] = None):
        self.id = id
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.cooking_time = cooking_time

    def has_timer(self) -> bool:
        return bool(self.cooking_time and self.cooking_time > 0)

    def with_quantity(self, quantity: float) -> "Ingredient":
        '''Returns a copy of this ingredient carrying a different quantity.'''
        return Ingredient(self.id, self.name, quantity, self.unit, self.cooking_time)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.quantity} {self.unit}"]
        if self.has_timer():
            parts.append(f"{self.cooking_time} min")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        if "cookingTime" in d and "cooking_time" not in d:
            d["cooking_time"] = d["cookingTime"]
        allowed = {"id", "name", "quantity", "unit", "cooking_time"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        filtered["id"] = str(filtered.get("id", ""))
        filtered.setdefault("name", "")
        filtered.setdefault("quantity", 0)
        filtered.setdefault("unit", DEFAULT_UNIT)
        return Ingredient(**filtered)

    def to_dict(self):
        '''Converts the Ingredient object to a dictionary.'''
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "cooking_time": self.cooking_time,
        }
