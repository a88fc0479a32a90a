from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.app.deps import get_recipe_service
from src.app.domain.errors import RecipeNotFoundError, ValidationError
from src.app.schemas.recipes import (
    RecipeResponse,
    RecipeSubmitRequest,
    RecipeSubmitResponse,
    recipe_to_response,
)
from src.app.services.recipe_lifecycle import RecipeLifecycleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("", response_model=list[RecipeResponse])
async def list_recipes(
    category: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    max_total_time: Optional[str] = Query(default=None, alias="maxTotalTime"),
    service: RecipeLifecycleService = Depends(get_recipe_service),
) -> list[RecipeResponse]:
    recipes = service.list_approved(category=category, search=search, max_total_time=max_total_time)
    return [recipe_to_response(recipe) for recipe in recipes]


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: int,
    service: RecipeLifecycleService = Depends(get_recipe_service),
) -> RecipeResponse:
    try:
        recipe = service.get(recipe_id)
    except RecipeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return recipe_to_response(recipe)


@router.post("", response_model=RecipeSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_recipe(
    payload: RecipeSubmitRequest,
    service: RecipeLifecycleService = Depends(get_recipe_service),
) -> RecipeSubmitResponse:
    try:
        recipe = service.submit(payload.to_draft())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return RecipeSubmitResponse(recipeId=recipe.id, status=recipe.status.value)
