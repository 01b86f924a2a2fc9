"""Configuration management for the mealbook application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Seed the catalog with the sample recipes on startup
SEED_SAMPLE_RECIPES: Final[bool] = os.getenv('SEED_SAMPLE_RECIPES', 'True').lower() == 'true'

# Image storage (empty URL -> files are kept under static/pictures)
IMAGE_STORAGE_URL: Final[str] = os.getenv('IMAGE_STORAGE_URL', '')
IMAGE_STORAGE_TOKEN: Final[str] = os.getenv('IMAGE_STORAGE_TOKEN', '')
IMAGE_STORAGE_BUCKET: Final[str] = os.getenv('IMAGE_STORAGE_BUCKET', 'recipe-images')
IMAGE_UPLOAD_TIMEOUT: Final[float] = float(os.getenv('IMAGE_UPLOAD_TIMEOUT', '10'))

# Cooking timers
TIMER_TICK_SECONDS: Final[float] = float(os.getenv('TIMER_TICK_SECONDS', '1.0'))

# Notifications kept in memory for the polling endpoint
NOTIFICATION_BUFFER_SIZE: Final[int] = int(os.getenv('NOTIFICATION_BUFFER_SIZE', '300'))
