# src/app/services/recipe_lifecycle.py
"""
Recipe moderation lifecycle.
Validates submissions and admin edits and owns the status transitions.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from src.app.domain.errors import (
    InvalidCategoryError,
    InvalidStatusError,
    RecipeNotFoundError,
    ValidationError,
)
from src.app.domain.models import (
    DEFAULT_CATEGORY,
    RECIPE_CATEGORIES,
    RECIPE_STATUSES,
    UNSET,
    Recipe,
    RecipeCategory,
    RecipeChanges,
    RecipeDraft,
    RecipeStatus,
)
from src.app.infra.db.base import RecipeRepository
from src.app.services import catalog_query
from src.app.services.text import clean_str, parse_lines, to_int

logger = logging.getLogger(__name__)


def _required_text(value: Any, message: str) -> str:
    text = clean_str(value)
    if not text:
        raise ValidationError(message)
    return text


def _lines(value: Any, label: str) -> list[str]:
    lines = parse_lines(value)
    if not lines:
        raise ValidationError(f"{label} must contain at least one entry")
    return lines


def _category(value: Any, default: Optional[RecipeCategory] = None) -> RecipeCategory:
    if isinstance(value, RecipeCategory):
        return value
    text = clean_str(value)
    if text is None and default is not None:
        return default
    normalized = (text or "").lower()
    if normalized not in RECIPE_CATEGORIES:
        raise InvalidCategoryError(value)
    return RecipeCategory(normalized)


def _status(value: Any) -> RecipeStatus:
    if isinstance(value, RecipeStatus):
        return value
    if not isinstance(value, str) or value not in RECIPE_STATUSES:
        raise InvalidStatusError(value)
    return RecipeStatus(value)


def _minutes(value: Any, label: str) -> Optional[int]:
    try:
        minutes = to_int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a positive number")
    if minutes is not None and minutes < 0:
        raise ValidationError(f"{label} must be a positive number")
    return minutes


def _serves(value: Any) -> Optional[int]:
    try:
        serves = to_int(value)
    except (TypeError, ValueError):
        raise ValidationError("Serves must be a positive number")
    if serves is not None and serves < 1:
        raise ValidationError("Serves must be a positive number")
    return serves


def parse_status_filter(value: Optional[str]) -> Optional[RecipeStatus]:
    """Validate an optional status filter; blank means no filter."""
    if value is None or value == "":
        return None
    return _status(value)


class RecipeLifecycleService:
    """
    Service for the recipe moderation workflow.

    Responsibilities:
    - Validate and store public submissions as PENDING
    - Serve the public catalog (APPROVED only)
    - Apply admin edits, including every status transition
    - Hard-delete recipes
    """

    def __init__(self, repository: RecipeRepository):
        self._repo = repository

    def submit(self, draft: RecipeDraft) -> Recipe:
        """
        Validate a public submission and store it for review.

        Args:
            draft: Raw submission fields

        Returns:
            The stored recipe, always in PENDING status

        Raises:
            ValidationError: If any field fails validation
        """
        title = clean_str(draft.title)
        description = clean_str(draft.description)
        if not title or not description:
            raise ValidationError("Title and description are required")

        values: dict[str, Any] = {
            "title": title,
            "description": description,
            "ingredients": _lines(draft.ingredients, "Ingredients"),
            "steps": _lines(draft.steps, "Steps"),
            "image_url": clean_str(draft.image_url),
            "category": _category(draft.category, default=DEFAULT_CATEGORY).value,
            "submitted_by": clean_str(draft.submitted_by),
            "prep_time": _minutes(draft.prep_time, "Prep time"),
            "cook_time": _minutes(draft.cook_time, "Cook time"),
            "serves": _serves(draft.serves),
            "status": RecipeStatus.PENDING.value,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        recipe = self._repo.insert(values)
        logger.info("Recipe submitted for review: id=%s, category=%s", recipe.id, recipe.category.value)
        return recipe

    def get(self, recipe_id: int) -> Recipe:
        """Fetch one publicly visible recipe."""
        recipe = self._repo.get(recipe_id)
        if recipe is None or not recipe.is_public:
            raise RecipeNotFoundError(recipe_id)
        return recipe

    def list_approved(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        max_total_time: Any = None,
    ) -> list[Recipe]:
        query = catalog_query.build_catalog_query(category, search, max_total_time)
        return catalog_query.refine(self._repo.search(query), query)

    def list_all(self, status: Optional[str] = None) -> list[Recipe]:
        """
        List every recipe for moderation.

        Raises:
            InvalidStatusError: If status is not a known recipe status
        """
        return self._repo.list_all(parse_status_filter(status))

    def update(self, recipe_id: int, changes: RecipeChanges) -> Recipe:
        """
        Apply an admin edit. Only supplied fields are validated and written.
        Any status may move to any other status.

        Args:
            recipe_id: Target recipe
            changes: Fields to change; UNSET fields are left alone

        Returns:
            The updated recipe

        Raises:
            ValidationError: If a supplied field is invalid or nothing was supplied
            RecipeNotFoundError: If no recipe has this id
        """
        values = self._build_changes(changes)
        if not values:
            raise ValidationError("No valid fields to update")

        recipe = self._repo.update(recipe_id, values)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)

        if "status" in values:
            logger.info("Recipe %s moved to %s", recipe_id, values["status"])
        else:
            logger.info("Recipe %s updated: fields=%s", recipe_id, sorted(values))
        return recipe

    def remove(self, recipe_id: int) -> None:
        if not self._repo.delete(recipe_id):
            raise RecipeNotFoundError(recipe_id)
        logger.info("Recipe %s deleted", recipe_id)

    def _build_changes(self, changes: RecipeChanges) -> dict[str, Any]:
        values: dict[str, Any] = {}

        if changes.status is not UNSET:
            values["status"] = _status(changes.status).value
        if changes.title is not UNSET:
            values["title"] = _required_text(changes.title, "Title cannot be empty")
        if changes.description is not UNSET:
            values["description"] = _required_text(changes.description, "Description cannot be empty")
        if changes.ingredients is not UNSET:
            values["ingredients"] = _lines(changes.ingredients, "Ingredients")
        if changes.steps is not UNSET:
            values["steps"] = _lines(changes.steps, "Steps")
        if changes.image_url is not UNSET:
            values["image_url"] = clean_str(changes.image_url)
        if changes.category is not UNSET:
            values["category"] = _category(changes.category).value
        if changes.submitted_by is not UNSET:
            values["submitted_by"] = clean_str(changes.submitted_by)
        if changes.prep_time is not UNSET:
            values["prep_time"] = _minutes(changes.prep_time, "Prep time")
        if changes.cook_time is not UNSET:
            values["cook_time"] = _minutes(changes.cook_time, "Cook time")
        if changes.serves is not UNSET:
            values["serves"] = _serves(changes.serves)

        return values
