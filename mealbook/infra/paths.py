from pathlib import Path

# Centralized paths for bundled files (single source of truth)
PACKAGE_DIR = Path(__file__).parent.parent.resolve()
DATA_DIR = PACKAGE_DIR / 'data'
SAMPLE_RECIPES_FILE = DATA_DIR / 'sample_recipes.json'
STATIC_DIR = PACKAGE_DIR / 'static'
PICTURES_DIR = STATIC_DIR / 'pictures'
TEMPLATES_DIR = PACKAGE_DIR / 'templates'

__all__ = ['PACKAGE_DIR', 'DATA_DIR', 'SAMPLE_RECIPES_FILE', 'STATIC_DIR', 'PICTURES_DIR', 'TEMPLATES_DIR']
