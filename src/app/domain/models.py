# src/app/domain/models.py
"""
Domain models for the family recipe catalog and family feed.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class RecipeStatus(str, Enum):
    """Moderation state of a recipe. Only APPROVED recipes are public."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RecipeCategory(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    DESSERT = "dessert"
    SALAD = "salad"
    SIDE = "side"
    SNACK = "snack"
    BEVERAGE = "beverage"
    APPETIZER = "appetizer"
    OTHER = "other"


class MediaType(str, Enum):
    ARTICLE = "article"
    VIDEO = "video"


DEFAULT_CATEGORY = RecipeCategory.DINNER
DEFAULT_MEDIA_TYPE = MediaType.ARTICLE

RECIPE_STATUSES = frozenset(s.value for s in RecipeStatus)
RECIPE_CATEGORIES = frozenset(c.value for c in RecipeCategory)
MEDIA_TYPES = frozenset(m.value for m in MediaType)


class _Unset:
    """Marker for a field the caller did not supply."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class Recipe:
    """A recipe row as stored in the catalog."""
    id: int
    title: str
    description: str
    ingredients: list[str]
    steps: list[str]
    status: RecipeStatus
    category: RecipeCategory = DEFAULT_CATEGORY
    image_url: Optional[str] = None
    submitted_by: Optional[str] = None
    prep_time: Optional[int] = None   # minutes
    cook_time: Optional[int] = None   # minutes
    serves: Optional[int] = None
    likes: int = 0
    created_at: Optional[datetime] = None

    @property
    def is_public(self) -> bool:
        return self.status == RecipeStatus.APPROVED

    @property
    def total_time(self) -> Optional[int]:
        """Prep plus cook time, or None when neither is known."""
        if self.prep_time is None and self.cook_time is None:
            return None
        return (self.prep_time or 0) + (self.cook_time or 0)


@dataclass
class RecipeDraft:
    """
    Raw public submission. Values are unvalidated; ingredients and steps
    may be a newline-delimited text block or a list of lines.
    """
    title: Any = None
    description: Any = None
    ingredients: Any = None
    steps: Any = None
    image_url: Any = None
    category: Any = None
    submitted_by: Any = None
    prep_time: Any = None
    cook_time: Any = None
    serves: Any = None


@dataclass
class RecipeChanges:
    """
    Partial admin update. Every field defaults to UNSET, so "not supplied"
    and "explicitly cleared" (None) stay distinguishable.
    """
    title: Any = UNSET
    description: Any = UNSET
    ingredients: Any = UNSET
    steps: Any = UNSET
    image_url: Any = UNSET
    category: Any = UNSET
    submitted_by: Any = UNSET
    prep_time: Any = UNSET
    cook_time: Any = UNSET
    serves: Any = UNSET
    status: Any = UNSET


@dataclass
class FamilyItem:
    """A story or media entry in the family feed."""
    id: int
    title: str
    summary: str
    media_type: MediaType = DEFAULT_MEDIA_TYPE
    content: Optional[str] = None
    media_url: Optional[str] = None
    is_published: bool = True
    created_at: Optional[datetime] = None


@dataclass
class FamilyItemDraft:
    title: Any = None
    summary: Any = None
    content: Any = None
    media_type: Any = None
    media_url: Any = None


@dataclass
class FamilyItemChanges:
    title: Any = UNSET
    summary: Any = UNSET
    content: Any = UNSET
    media_type: Any = UNSET
    media_url: Any = UNSET
    is_published: Any = UNSET


@dataclass(frozen=True)
class CatalogQuery:
    """
    Read query over the public catalog. Status is always APPROVED; the
    remaining filters are optional and already normalized.
    """
    status: RecipeStatus = RecipeStatus.APPROVED
    category: Optional[RecipeCategory] = None
    search: Optional[str] = None
    max_total_time: Optional[int] = None
    search_columns: tuple[str, ...] = field(
        default=("title", "description", "ingredients")
    )
    order_by: str = "created_at"
    descending: bool = True
