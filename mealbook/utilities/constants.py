from typing import Final

UNITS: Final[list[str]] = [
    'g', 'kg', 'ml', 'l', 'tsp', 'tbsp', 'cup', 'oz', 'lb',
    'pcs', 'slices', 'pinch', 'dash', 'cloves', 'sticks',
]
DEFAULT_UNIT: Final[str] = 'g'
DEFAULT_BASE_SERVINGS: Final[int] = 4

# Uploaded recipe images
MAX_IMAGE_SIZE: Final[int] = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES: Final[dict[str, str]] = {
    'image/jpeg': 'jpg',
    'image/jpg': 'jpg',
    'image/png': 'png',
    'image/webp': 'webp',
}

QUANTITY_FORMAT: Final[str] = "{:.2f}"

# Planner grid labels and PDF header
PDF_TITLE: Final[str] = "Weekly Meal Plan"
EMPTY_CELL_LABEL: Final[str] = "-"
