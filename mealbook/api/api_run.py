from fastapi import (
    FastAPI,
    Request,
    Query,
    APIRouter,
    Depends,
)
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from datetime import datetime
from typing import Optional
import logging

from mealbook.api.deps import templates, get_recipes, get_timers
from mealbook.events.Event_Bus import EventBus
from mealbook.events.notifier import Notifier
from mealbook.events.web_observers import WebObserver
from mealbook.infra.Image_Storage import build_image_storage
from mealbook.infra.paths import STATIC_DIR
from mealbook.infra.Plan_Repository import PlanRepository
from mealbook.infra.Recipe_Repository import RecipeRepository, reading_from_recipes
from mealbook.infra.tickers import AsyncioTicker
from mealbook.logic.scaling.scaler import clamp_servings, scale_ingredients
from mealbook.logic.timers.registry import TimerRegistry
from mealbook.utilities import config

# Routers
from mealbook.api.routes import recipes as recipe_routes
from mealbook.api.routes import planner as planner_routes
from mealbook.api.routes import timers as timer_routes

# Logging
logger = logging.getLogger("mealbook_app")

pages = APIRouter()


def _ts() -> int:
    """Cache-busting timestamp for static assets."""
    return int(datetime.now().timestamp())


def render_not_found(request: Request, message: str = "Page not found", status_code: int = 404):
    return templates.TemplateResponse(
        request, "not_found.html", {"message": message, "time": _ts()}, status_code=status_code
    )


# -------------------- UI PAGES --------------------
@pages.get("/", response_class=HTMLResponse)
def recipe_list(request: Request, q: str = Query(default=""), recipes: RecipeRepository = Depends(get_recipes)):
    found = recipes.search(q.strip())
    return templates.TemplateResponse(
        request,
        "index.html",
        {"recipes": found, "query": q, "time": _ts()},
    )


@pages.get("/recipes/{recipe_id}", response_class=HTMLResponse)
async def recipe_detail(request: Request, recipe_id: str,
                        servings: Optional[str] = Query(default=None),
                        recipes: RecipeRepository = Depends(get_recipes),
                        timers: TimerRegistry = Depends(get_timers)):
    recipe = recipes.get(recipe_id)
    if recipe is None:
        return render_not_found(request, "Recipe not found")

    target = recipe.base_servings if servings is None else clamp_servings(servings)
    scaled = scale_ingredients(recipe.ingredients, recipe.base_servings, target)
    return templates.TemplateResponse(
        request,
        "recipe_detail.html",
        {
            "recipe": recipe,
            "servings": target,
            "ingredients": scaled,
            "steps": recipe.steps(),
            "timers": {t.context["ingredient_id"]: t for t in timers.for_recipe(recipe)},
            "time": _ts(),
        },
    )


def create_app(recipes: Optional[RecipeRepository] = None,
               plan: Optional[PlanRepository] = None,
               image_storage=None,
               ticker=None,
               permission_requester=None,
               seed: Optional[bool] = None) -> FastAPI:
    """Build the application with its own stores and notification plumbing."""
    app = FastAPI(title="Recipe Catalog & Meal Planner")

    if recipes is None:
        seed = config.SEED_SAMPLE_RECIPES if seed is None else seed
        recipes = RecipeRepository(reading_from_recipes() if seed else [])
    bus = EventBus()
    notifier = Notifier(bus, permission_requester=permission_requester)
    web_observer = WebObserver(bus, max_events=config.NOTIFICATION_BUFFER_SIZE)
    web_observer.start()

    app.state.recipes = recipes
    app.state.plan = plan or PlanRepository()
    app.state.bus = bus
    app.state.notifier = notifier
    app.state.web_observer = web_observer
    app.state.timers = TimerRegistry(ticker or AsyncioTicker(config.TIMER_TICK_SECONDS), notifier=notifier, bus=bus)
    app.state.image_storage = image_storage or build_image_storage(
        config.IMAGE_STORAGE_URL, config.IMAGE_STORAGE_BUCKET,
        token=config.IMAGE_STORAGE_TOKEN, timeout=config.IMAGE_UPLOAD_TIMEOUT,
    )

    # Include routers (form routes first so /recipes/new wins over /recipes/{id})
    app.include_router(recipe_routes.router)
    app.include_router(planner_routes.router)
    app.include_router(timer_routes.router)
    app.include_router(pages)

    # Static files
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.exception_handler(StarletteHTTPException)
    async def _http_errors(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405) and not request.url.path.startswith("/api/"):
            message = exc.detail if exc.detail not in ("Not Found", "Method Not Allowed") else "Page not found"
            return render_not_found(request, message, status_code=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.on_event("shutdown")
    def _shutdown():
        app.state.timers.shutdown()
        web_observer.stop()
        logger.info("Timers stopped and web observers detached")

    logger.info("App ready with %d recipes", len(recipes))
    return app


app = create_app()
