from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError

from mealbook.api.deps import get_recipes, get_timers, get_notifier, get_web_observer
from mealbook.domain.CookingTimer import CookingTimer
from mealbook.events.notifier import Notifier
from mealbook.events.web_observers import WebObserver
from mealbook.infra.Recipe_Repository import RecipeRepository
from mealbook.logic.timers.registry import TimerRegistry
from mealbook.utilities.validators import PermissionInput, first_error_message

router = APIRouter()

# Every route that reaches a timer is async: timers and their tick tasks
# belong to the event loop thread.

TIMER_ACTIONS = ("start", "pause", "toggle", "reset")


def _timer_or_404(recipe_id: str, ingredient_id: str,
                  recipes: RecipeRepository, timers: TimerRegistry) -> CookingTimer:
    recipe = recipes.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    timer = timers.get(recipe, ingredient_id)
    if timer is None:
        raise HTTPException(status_code=404, detail="No cooking time for this ingredient")
    return timer


@router.get("/api/timers/{recipe_id}")
async def api_recipe_timers(recipe_id: str,
                            recipes: RecipeRepository = Depends(get_recipes),
                            timers: TimerRegistry = Depends(get_timers)):
    recipe = recipes.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"timers": [t.to_dict() for t in timers.for_recipe(recipe)]}


@router.get("/api/timers/{recipe_id}/{ingredient_id}")
async def api_timer_status(recipe_id: str, ingredient_id: str,
                           recipes: RecipeRepository = Depends(get_recipes),
                           timers: TimerRegistry = Depends(get_timers)):
    return _timer_or_404(recipe_id, ingredient_id, recipes, timers).to_dict()


@router.post("/api/timers/{recipe_id}/{ingredient_id}/{action}")
async def api_timer_action(recipe_id: str, ingredient_id: str, action: str,
                           recipes: RecipeRepository = Depends(get_recipes),
                           timers: TimerRegistry = Depends(get_timers)):
    if action not in TIMER_ACTIONS:
        raise HTTPException(status_code=400, detail=f"Unknown timer action: {action}")
    timer = _timer_or_404(recipe_id, ingredient_id, recipes, timers)
    getattr(timer, action)()
    return timer.to_dict()


# -------------------- Notifications (polled by frontend) --------------------
@router.get("/api/notifications")
def api_notifications(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
    observer: WebObserver = Depends(get_web_observer),
):
    """
    Return recent notification events (toasts, timer completions).

    Client polling strategy:
        1. First call without 'since' to load current backlog (optional).
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/notifications?since=<next_cursor>
    """
    return observer.get_events(since)


@router.get("/api/notifications/permission")
def api_get_permission(notifier: Notifier = Depends(get_notifier)):
    return {"state": notifier.permission}


@router.post("/api/notifications/permission")
def api_set_permission(payload: dict = Body(...), notifier: Notifier = Depends(get_notifier)):
    try:
        data = PermissionInput(**payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=first_error_message(e))
    notifier.set_permission(data.state)
    return {"state": notifier.permission}
