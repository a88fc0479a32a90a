from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel

from src.app.domain.models import UNSET, FamilyItem, FamilyItemChanges, FamilyItemDraft


class FamilyItemResponse(BaseModel):
    id: int
    title: str
    summary: str
    content: Optional[str] = None
    mediaType: Literal["article", "video"]
    mediaUrl: Optional[str] = None
    isPublished: bool
    createdAt: Optional[str] = None


class FamilyItemCreate(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    mediaType: Optional[str] = None
    mediaUrl: Optional[str] = None

    def to_draft(self) -> FamilyItemDraft:
        return FamilyItemDraft(
            title=self.title,
            summary=self.summary,
            content=self.content,
            media_type=self.mediaType,
            media_url=self.mediaUrl,
        )


class FamilyItemCreateResponse(BaseModel):
    message: str = "Entry published"
    id: int


class FamilyItemUpdate(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    mediaType: Optional[str] = None
    mediaUrl: Optional[str] = None
    isPublished: Optional[Union[bool, str]] = None

    def to_changes(self) -> FamilyItemChanges:
        present = self.model_fields_set

        def pick(name: str):
            return getattr(self, name) if name in present else UNSET

        return FamilyItemChanges(
            title=pick("title"),
            summary=pick("summary"),
            content=pick("content"),
            media_type=pick("mediaType"),
            media_url=pick("mediaUrl"),
            is_published=pick("isPublished"),
        )


class FamilyItemUpdateResponse(BaseModel):
    message: str = "Entry updated"
    item: FamilyItemResponse


def family_item_to_response(item: FamilyItem) -> FamilyItemResponse:
    return FamilyItemResponse(
        id=item.id,
        title=item.title,
        summary=item.summary,
        content=item.content,
        mediaType=item.media_type.value,
        mediaUrl=item.media_url,
        isPublished=item.is_published,
        createdAt=item.created_at.isoformat() if item.created_at else None,
    )
