from datetime import datetime
from typing import Optional
import logging

from fastapi import APIRouter, Body, Depends, Form, HTTPException, Query, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError

from mealbook.api.deps import templates, get_plan, get_recipes
from mealbook.infra.pdf_utils import generate_pdf_for_week
from mealbook.infra.Plan_Repository import PlanRepository, is_valid_slot
from mealbook.infra.Recipe_Repository import RecipeRepository
from mealbook.utilities.validators import PlanCellInput, RotationInput, first_error_message

router = APIRouter()
logger = logging.getLogger(__name__)


def _check_slot(day: str, meal_type: str):
    if not is_valid_slot(day, meal_type):
        raise HTTPException(status_code=400, detail="Invalid day or meal")


# -------------------- Planner page --------------------
@router.get("/meal-planner", response_class=HTMLResponse)
def meal_planner_page(request: Request,
                      day: Optional[str] = Query(default=None),
                      meal_type: Optional[str] = Query(default=None),
                      plan: PlanRepository = Depends(get_plan),
                      recipes: RecipeRepository = Depends(get_recipes)):
    selected = None
    if day and meal_type and is_valid_slot(day, meal_type):
        selected = {"day": day, "meal_type": meal_type}
    return templates.TemplateResponse(
        request,
        "meal_planner.html",
        {
            "grid": plan.week_view(recipes),
            "recipes": recipes.list(),
            "selected": selected,
            "time": int(datetime.now().timestamp()),
        },
    )


@router.post("/meal-planner/cell")
def assign_cell(day: str = Form(...),
                meal_type: str = Form(...),
                recipe_id: str = Form(""),
                plan: PlanRepository = Depends(get_plan)):
    _check_slot(day, meal_type)
    plan.set_cell(day, meal_type, recipe_id or None)
    return RedirectResponse(url="/meal-planner", status_code=303)


@router.post("/meal-planner/rotate")
def toggle_rotation(day: str = Form(...),
                    meal_type: str = Form(...),
                    plan: PlanRepository = Depends(get_plan)):
    _check_slot(day, meal_type)
    plan.toggle_rotation(day, meal_type)
    return RedirectResponse(url="/meal-planner", status_code=303)


@router.post("/meal-planner/reset")
def reset_week(plan: PlanRepository = Depends(get_plan)):
    plan.reset_week()
    return RedirectResponse(url="/meal-planner", status_code=303)


@router.get("/meal-planner/export_pdf")
def export_pdf(plan: PlanRepository = Depends(get_plan), recipes: RecipeRepository = Depends(get_recipes)):
    pdf_bytes = generate_pdf_for_week(plan.week_view(recipes))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="meal_plan.pdf"'},
    )


# -------------------- JSON API --------------------
@router.get("/api/meal-plan")
def api_meal_plan(plan: PlanRepository = Depends(get_plan), recipes: RecipeRepository = Depends(get_recipes)):
    return {"cells": plan.plan.to_dict(), "grid": plan.week_view(recipes)}


@router.post("/api/meal-plan/cell")
def api_set_cell(payload: dict = Body(...), plan: PlanRepository = Depends(get_plan)):
    try:
        data = PlanCellInput(**payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=first_error_message(e))
    plan.set_cell(data.day, data.meal_type, data.recipe_id, data.rotate)
    return plan.get_cell(data.day, data.meal_type).to_dict()


@router.post("/api/meal-plan/rotate")
def api_toggle_rotation(payload: dict = Body(...), plan: PlanRepository = Depends(get_plan)):
    try:
        data = RotationInput(**payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=first_error_message(e))
    plan.toggle_rotation(data.day, data.meal_type)
    return plan.get_cell(data.day, data.meal_type).to_dict()
