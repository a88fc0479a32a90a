# src/app/routers/admin.py
"""
Moderation console routes. Every route requires an admin session.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.app.deps import get_family_service, get_recipe_service, require_admin
from src.app.domain.errors import NotFoundError, ValidationError
from src.app.schemas.family import (
    FamilyItemCreate,
    FamilyItemCreateResponse,
    FamilyItemResponse,
    FamilyItemUpdate,
    FamilyItemUpdateResponse,
    family_item_to_response,
)
from src.app.schemas.recipes import (
    RecipeDeleteResponse,
    RecipeResponse,
    RecipeUpdateRequest,
    RecipeUpdateResponse,
    recipe_to_response,
)
from src.app.services.family_publisher import FamilyPublisherService
from src.app.services.recipe_lifecycle import RecipeLifecycleService

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


# =============================================================================
# Recipes
# =============================================================================

@router.get("/recipes", response_model=list[RecipeResponse])
async def list_all_recipes(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    service: RecipeLifecycleService = Depends(get_recipe_service),
) -> list[RecipeResponse]:
    try:
        recipes = service.list_all(status_filter)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return [recipe_to_response(recipe) for recipe in recipes]


@router.patch("/recipes/{recipe_id}", response_model=RecipeUpdateResponse)
async def update_recipe(
    recipe_id: int,
    payload: RecipeUpdateRequest,
    service: RecipeLifecycleService = Depends(get_recipe_service),
) -> RecipeUpdateResponse:
    try:
        recipe = service.update(recipe_id, payload.to_changes())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return RecipeUpdateResponse(id=recipe.id, recipe=recipe_to_response(recipe))


@router.delete("/recipes/{recipe_id}", response_model=RecipeDeleteResponse)
async def delete_recipe(
    recipe_id: int,
    service: RecipeLifecycleService = Depends(get_recipe_service),
) -> RecipeDeleteResponse:
    try:
        service.remove(recipe_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return RecipeDeleteResponse(id=recipe_id)


# =============================================================================
# Family feed
# =============================================================================

@router.get("/family", response_model=list[FamilyItemResponse])
async def list_all_family_items(
    service: FamilyPublisherService = Depends(get_family_service),
) -> list[FamilyItemResponse]:
    return [family_item_to_response(item) for item in service.list_all()]


@router.post("/family", response_model=FamilyItemCreateResponse, status_code=status.HTTP_201_CREATED)
async def publish_family_item(
    payload: FamilyItemCreate,
    service: FamilyPublisherService = Depends(get_family_service),
) -> FamilyItemCreateResponse:
    try:
        item = service.publish(payload.to_draft())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return FamilyItemCreateResponse(id=item.id)


@router.patch("/family/{item_id}", response_model=FamilyItemUpdateResponse)
async def update_family_item(
    item_id: int,
    payload: FamilyItemUpdate,
    service: FamilyPublisherService = Depends(get_family_service),
) -> FamilyItemUpdateResponse:
    try:
        item = service.update(item_id, payload.to_changes())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return FamilyItemUpdateResponse(item=family_item_to_response(item))
