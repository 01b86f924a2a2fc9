from datetime import datetime
from typing import List, Optional
import logging

from fastapi import APIRouter, Body, Depends, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import ValidationError

from mealbook.api.deps import templates, get_recipes, get_notifier, get_image_storage, get_timers
from mealbook.domain.Recipe import Recipe
from mealbook.events.notifier import Notifier
from mealbook.infra.Image_Storage import ImageUploadError, ImageValidationError, validate_image
from mealbook.infra.Recipe_Repository import RecipeRepository
from mealbook.logic.scaling.scaler import clamp_servings, scale_ingredients
from mealbook.logic.timers.registry import TimerRegistry
from mealbook.utilities.constants import DEFAULT_BASE_SERVINGS, DEFAULT_UNIT
from mealbook.utilities.validators import RecipeInput, first_error_message

router = APIRouter()
logger = logging.getLogger(__name__)

IMAGE_OWNER = "recipes"


def _blank_form():
    return {
        "name": "",
        "description": "",
        "base_servings": DEFAULT_BASE_SERVINGS,
        "ingredients": [{"id": "1", "name": "", "quantity": 0, "unit": DEFAULT_UNIT, "cooking_time": 0}],
        "instructions": "",
        "external_url": "",
        "show_cooking_time": True,
        "alerts_enabled": False,
        "image_url": "",
    }


def _render_form(request: Request, form: dict, recipe_id: Optional[str] = None,
                 error: Optional[str] = None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "recipe_form.html",
        {
            "form": form,
            "recipe_id": recipe_id,
            "is_editing": recipe_id is not None,
            "error": error,
            "time": int(datetime.now().timestamp()),
        },
        status_code=status_code,
    )


def _collect_ingredients(ids: List[str], names: List[str], quantities: List[str],
                         units: List[str], cooking_times: List[str]) -> List[dict]:
    """Zip the repeated ingredient_* form fields back into rows."""
    rows = []
    for idx, name in enumerate(names):
        rows.append({
            "id": ids[idx] if idx < len(ids) else None,
            "name": name,
            "quantity": quantities[idx] if idx < len(quantities) else 0,
            "unit": units[idx] if idx < len(units) else DEFAULT_UNIT,
            "cooking_time": cooking_times[idx] if idx < len(cooking_times) else None,
        })
    return rows


async def _store_image(image: Optional[UploadFile], storage) -> Optional[str]:
    """Validate and upload a submitted file; None when no file was sent."""
    if image is None or not image.filename:
        return None
    data = await image.read()
    validate_image(image.content_type, len(data))
    return await storage.upload(IMAGE_OWNER, data, image.filename)


# === Form pages ===
@router.get("/recipes/new", response_class=HTMLResponse)
def new_recipe_page(request: Request):
    return _render_form(request, _blank_form())


@router.get("/recipes/{recipe_id}/edit", response_class=HTMLResponse)
def edit_recipe_page(request: Request, recipe_id: str, recipes: RecipeRepository = Depends(get_recipes)):
    recipe = recipes.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    form = recipe.to_dict()
    form["external_url"] = form["external_url"] or ""
    form["image_url"] = form["image_url"] or ""
    return _render_form(request, form, recipe_id=recipe_id)


# === Form submissions (create / update / delete) ===
async def _submit(request: Request, recipe_id: Optional[str], fields: dict, image: Optional[UploadFile],
                  recipes: RecipeRepository, notifier: Notifier, storage, timers: TimerRegistry):
    try:
        data = RecipeInput(**fields)
    except ValidationError as e:
        message = first_error_message(e)
        notifier.error(message)
        return _render_form(request, fields, recipe_id, error=message, status_code=400)

    try:
        uploaded_url = await _store_image(image, storage)
    except ImageValidationError as e:
        notifier.error(str(e))
        return _render_form(request, fields, recipe_id, error=str(e), status_code=400)
    except ImageUploadError as e:
        message = f"Failed to upload image: {e}"
        logger.error(message)
        notifier.error(message)
        return _render_form(request, fields, recipe_id, error=message, status_code=502)

    recipe = data.to_recipe()
    if uploaded_url:
        recipe.image_url = uploaded_url

    if recipe_id is None:
        recipes.add(recipe)
        notifier.success("Recipe created successfully!")
    else:
        timers.discard_recipe(recipe_id)
        recipes.update(recipe_id, recipe)
        notifier.success("Recipe updated successfully!")
    return RedirectResponse(url="/", status_code=303)


def _form_fields(name, description, base_servings, instructions, external_url, show_cooking_time,
                 alerts_enabled, image_url, ingredient_id, ingredient_name, ingredient_quantity,
                 ingredient_unit, ingredient_cooking_time) -> dict:
    return {
        "name": name,
        "description": description,
        "base_servings": base_servings,
        "ingredients": _collect_ingredients(ingredient_id, ingredient_name, ingredient_quantity,
                                            ingredient_unit, ingredient_cooking_time),
        "instructions": instructions,
        "external_url": external_url,
        "show_cooking_time": show_cooking_time,
        "alerts_enabled": alerts_enabled,
        "image_url": image_url,
    }


@router.post("/recipes")
async def create_recipe(
    request: Request,
    name: str = Form(""),
    description: str = Form(""),
    base_servings: str = Form(str(DEFAULT_BASE_SERVINGS)),
    instructions: str = Form(""),
    external_url: str = Form(""),
    show_cooking_time: bool = Form(False),
    alerts_enabled: bool = Form(False),
    image_url: str = Form(""),
    ingredient_id: List[str] = Form([]),
    ingredient_name: List[str] = Form([]),
    ingredient_quantity: List[str] = Form([]),
    ingredient_unit: List[str] = Form([]),
    ingredient_cooking_time: List[str] = Form([]),
    image: Optional[UploadFile] = File(None),
    recipes: RecipeRepository = Depends(get_recipes),
    notifier: Notifier = Depends(get_notifier),
    storage=Depends(get_image_storage),
    timers: TimerRegistry = Depends(get_timers),
):
    fields = _form_fields(name, description, base_servings, instructions, external_url, show_cooking_time,
                          alerts_enabled, image_url, ingredient_id, ingredient_name, ingredient_quantity,
                          ingredient_unit, ingredient_cooking_time)
    return await _submit(request, None, fields, image, recipes, notifier, storage, timers)


@router.post("/recipes/{recipe_id}")
async def update_recipe(
    request: Request,
    recipe_id: str,
    name: str = Form(""),
    description: str = Form(""),
    base_servings: str = Form(str(DEFAULT_BASE_SERVINGS)),
    instructions: str = Form(""),
    external_url: str = Form(""),
    show_cooking_time: bool = Form(False),
    alerts_enabled: bool = Form(False),
    image_url: str = Form(""),
    ingredient_id: List[str] = Form([]),
    ingredient_name: List[str] = Form([]),
    ingredient_quantity: List[str] = Form([]),
    ingredient_unit: List[str] = Form([]),
    ingredient_cooking_time: List[str] = Form([]),
    image: Optional[UploadFile] = File(None),
    recipes: RecipeRepository = Depends(get_recipes),
    notifier: Notifier = Depends(get_notifier),
    storage=Depends(get_image_storage),
    timers: TimerRegistry = Depends(get_timers),
):
    if recipes.get(recipe_id) is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    fields = _form_fields(name, description, base_servings, instructions, external_url, show_cooking_time,
                          alerts_enabled, image_url, ingredient_id, ingredient_name, ingredient_quantity,
                          ingredient_unit, ingredient_cooking_time)
    return await _submit(request, recipe_id, fields, image, recipes, notifier, storage, timers)


@router.post("/recipes/{recipe_id}/delete")
async def delete_recipe(recipe_id: str,
                        recipes: RecipeRepository = Depends(get_recipes),
                        notifier: Notifier = Depends(get_notifier),
                        timers: TimerRegistry = Depends(get_timers)):
    # Plan cells that point at this recipe are left alone and read as empty
    timers.discard_recipe(recipe_id)
    recipes.delete(recipe_id)
    notifier.success("Recipe deleted successfully")
    return RedirectResponse(url="/", status_code=303)


# === JSON API ===
def _recipe_json(recipe: Recipe, servings: Optional[int] = None) -> dict:
    data = recipe.to_dict()
    if servings is not None:
        data["servings"] = servings
        data["ingredients"] = [
            ing.to_dict() for ing in scale_ingredients(recipe.ingredients, recipe.base_servings, servings)
        ]
    return data


@router.get("/api/recipes")
def api_list_recipes(q: str = Query(default=""), recipes: RecipeRepository = Depends(get_recipes)):
    found = recipes.search(q.strip())
    return {"count": len(found), "recipes": [r.to_dict() for r in found]}


@router.get("/api/recipes/{recipe_id}")
def api_get_recipe(recipe_id: str, servings: Optional[str] = Query(default=None),
                   recipes: RecipeRepository = Depends(get_recipes)):
    recipe = recipes.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    target = clamp_servings(servings) if servings is not None else None
    return _recipe_json(recipe, target)


@router.post("/api/recipes", status_code=201)
def api_create_recipe(payload: dict = Body(...),
                      recipes: RecipeRepository = Depends(get_recipes),
                      notifier: Notifier = Depends(get_notifier)):
    try:
        data = RecipeInput(**payload)
    except ValidationError as e:
        message = first_error_message(e)
        notifier.error(message)
        return JSONResponse(status_code=400, content={"error": message})
    recipe = recipes.add(data.to_recipe())
    notifier.success("Recipe created successfully!")
    return recipe.to_dict()


@router.put("/api/recipes/{recipe_id}")
async def api_update_recipe(recipe_id: str, payload: dict = Body(...),
                            recipes: RecipeRepository = Depends(get_recipes),
                            notifier: Notifier = Depends(get_notifier),
                            timers: TimerRegistry = Depends(get_timers)):
    if recipes.get(recipe_id) is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    try:
        data = RecipeInput(**payload)
    except ValidationError as e:
        message = first_error_message(e)
        notifier.error(message)
        return JSONResponse(status_code=400, content={"error": message})
    timers.discard_recipe(recipe_id)
    recipes.update(recipe_id, data.to_recipe())
    notifier.success("Recipe updated successfully!")
    return recipes.get(recipe_id).to_dict()


@router.delete("/api/recipes/{recipe_id}")
async def api_delete_recipe(recipe_id: str,
                            recipes: RecipeRepository = Depends(get_recipes),
                            timers: TimerRegistry = Depends(get_timers)):
    timers.discard_recipe(recipe_id)
    recipes.delete(recipe_id)
    return {"status": "deleted", "id": recipe_id}
