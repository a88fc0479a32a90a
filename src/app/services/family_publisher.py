# src/app/services/family_publisher.py
"""
Family feed publishing. Entries are published on creation and can be
edited or hidden later; there is no draft or delete.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from src.app.domain.errors import (
    FamilyItemNotFoundError,
    InvalidMediaTypeError,
    ValidationError,
)
from src.app.domain.models import (
    DEFAULT_MEDIA_TYPE,
    MEDIA_TYPES,
    UNSET,
    FamilyItem,
    FamilyItemChanges,
    FamilyItemDraft,
    MediaType,
)
from src.app.infra.db.base import FamilyItemRepository
from src.app.services.text import clean_str, to_bool

logger = logging.getLogger(__name__)


def _media_type(value: Any) -> MediaType:
    if isinstance(value, MediaType):
        return value
    normalized = (clean_str(value) or "").lower()
    if normalized not in MEDIA_TYPES:
        raise InvalidMediaTypeError(value)
    return MediaType(normalized)


class FamilyPublisherService:
    def __init__(self, repository: FamilyItemRepository):
        self._repo = repository

    def publish(self, draft: FamilyItemDraft) -> FamilyItem:
        """
        Create a family entry. Creation and publishing are the same action.

        Raises:
            ValidationError: If title or summary is missing or the media type is unknown
        """
        title = clean_str(draft.title)
        summary = clean_str(draft.summary)
        if not title or not summary:
            raise ValidationError("Title and summary are required")
        media_type = DEFAULT_MEDIA_TYPE if clean_str(draft.media_type) is None else _media_type(draft.media_type)

        item = self._repo.insert(
            {
                "title": title,
                "summary": summary,
                "content": clean_str(draft.content),
                "media_type": media_type.value,
                "media_url": clean_str(draft.media_url),
                "is_published": True,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        logger.info("Family entry published: id=%s, media_type=%s", item.id, media_type.value)
        return item

    def update(self, item_id: int, changes: FamilyItemChanges) -> FamilyItem:
        values: dict[str, Any] = {}

        if changes.title is not UNSET:
            values["title"] = clean_str(changes.title)
            if not values["title"]:
                raise ValidationError("Title cannot be empty")
        if changes.summary is not UNSET:
            values["summary"] = clean_str(changes.summary)
            if not values["summary"]:
                raise ValidationError("Summary cannot be empty")
        if changes.content is not UNSET:
            values["content"] = clean_str(changes.content)
        if changes.media_type is not UNSET:
            values["media_type"] = _media_type(changes.media_type).value
        if changes.media_url is not UNSET:
            values["media_url"] = clean_str(changes.media_url)
        if changes.is_published is not UNSET:
            values["is_published"] = to_bool(changes.is_published)

        if not values:
            raise ValidationError("No valid fields supplied")

        item = self._repo.update(item_id, values)
        if item is None:
            raise FamilyItemNotFoundError(item_id)
        logger.info("Family entry %s updated: fields=%s", item_id, sorted(values))
        return item

    def list_published(self) -> list[FamilyItem]:
        return self._repo.list_items(published_only=True)

    def list_all(self) -> list[FamilyItem]:
        return self._repo.list_items()
