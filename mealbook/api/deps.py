"""FastAPI dependencies for the mealbook app.

Every store and service lives on ``app.state`` (set up by
``create_app``) and reaches handlers through these providers, so each app
instance, and each test, gets its own state.
"""
from fastapi import Request
from fastapi.templating import Jinja2Templates

from mealbook.domain.Plan import DAYS, MEAL_TYPES
from mealbook.events.notifier import Notifier
from mealbook.events.web_observers import WebObserver
from mealbook.infra.paths import TEMPLATES_DIR
from mealbook.infra.Plan_Repository import PlanRepository
from mealbook.infra.Recipe_Repository import RecipeRepository
from mealbook.logic.scaling.scaler import format_quantity
from mealbook.logic.timers.registry import TimerRegistry
from mealbook.utilities.constants import UNITS

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["qty"] = format_quantity
templates.env.globals.update(DAYS=DAYS, MEAL_TYPES=MEAL_TYPES, UNITS=UNITS)


def get_recipes(request: Request) -> RecipeRepository:
    return request.app.state.recipes


def get_plan(request: Request) -> PlanRepository:
    return request.app.state.plan


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_timers(request: Request) -> TimerRegistry:
    return request.app.state.timers


def get_image_storage(request: Request):
    return request.app.state.image_storage


def get_web_observer(request: Request) -> WebObserver:
    return request.app.state.web_observer
