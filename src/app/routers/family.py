from __future__ import annotations

from fastapi import APIRouter, Depends

from src.app.deps import get_family_service
from src.app.schemas.family import FamilyItemResponse, family_item_to_response
from src.app.services.family_publisher import FamilyPublisherService

router = APIRouter(prefix="/api/family", tags=["family"])


@router.get("", response_model=list[FamilyItemResponse])
async def list_family_items(
    service: FamilyPublisherService = Depends(get_family_service),
) -> list[FamilyItemResponse]:
    return [family_item_to_response(item) for item in service.list_published()]
