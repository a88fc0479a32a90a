from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from src.app.domain.errors import StorageError
from src.app.domain.models import (
    DEFAULT_CATEGORY,
    DEFAULT_MEDIA_TYPE,
    MEDIA_TYPES,
    RECIPE_CATEGORIES,
    CatalogQuery,
    FamilyItem,
    MediaType,
    Recipe,
    RecipeCategory,
    RecipeStatus,
)
from src.app.infra.db.base import FamilyItemRepository, RecipeRepository
from src.app.services.text import parse_lines

logger = logging.getLogger(__name__)

RECIPE_COLUMNS = (
    "id,title,description,ingredients,steps,image_url,category,submitted_by,"
    "prep_time,cook_time,serves,likes,status,created_at"
)
FAMILY_COLUMNS = "id,title,summary,content,media_type,media_url,is_published,created_at"

_STORE_ERRORS = (APIError, httpx.HTTPError, ConnectionError, TimeoutError)

T = TypeVar("T")


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None

    try:
        normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None


def _safe_int(value: object) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _safe_str(value: object) -> str | None:
    return str(value) if value else None


def serialize_lines(lines: list[str]) -> str:
    return json.dumps(lines, ensure_ascii=False)


def deserialize_lines(value: object) -> list[str]:
    """Decode a stored ingredients/steps column back into its list of lines."""
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value]
    text = str(value)
    try:
        decoded = json.loads(text)
    except ValueError:
        # legacy rows stored the raw text block
        return parse_lines(text)
    if isinstance(decoded, list):
        return [str(item) for item in decoded if item is not None]
    if decoded is None:
        return []
    if isinstance(decoded, str):
        return parse_lines(decoded)
    # other scalars ("2", "true") keep their stored text
    return parse_lines(text)


def _stored_flag(value: object) -> bool:
    """Read is_published from rows written as booleans, 0/1 or 't'/'f' text."""
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "t")
    return bool(value)


def _row_to_recipe(row: dict[str, Any]) -> Recipe:
    category = str(row.get("category") or DEFAULT_CATEGORY.value)
    return Recipe(
        id=int(row["id"]),
        title=str(row["title"]),
        description=str(row.get("description") or ""),
        ingredients=deserialize_lines(row.get("ingredients")),
        steps=deserialize_lines(row.get("steps")),
        status=RecipeStatus(str(row["status"])),
        category=RecipeCategory(category) if category in RECIPE_CATEGORIES else DEFAULT_CATEGORY,
        image_url=_safe_str(row.get("image_url")),
        submitted_by=_safe_str(row.get("submitted_by")),
        prep_time=_safe_int(row.get("prep_time")),
        cook_time=_safe_int(row.get("cook_time")),
        serves=_safe_int(row.get("serves")),
        likes=_safe_int(row.get("likes")) or 0,
        created_at=_parse_datetime(row.get("created_at")),
    )


def _row_to_family_item(row: dict[str, Any]) -> FamilyItem:
    media_type = str(row.get("media_type") or DEFAULT_MEDIA_TYPE.value)
    return FamilyItem(
        id=int(row["id"]),
        title=str(row["title"]),
        summary=str(row.get("summary") or ""),
        content=_safe_str(row.get("content")),
        media_type=MediaType(media_type) if media_type in MEDIA_TYPES else DEFAULT_MEDIA_TYPE,
        media_url=_safe_str(row.get("media_url")),
        is_published=_stored_flag(row.get("is_published")),
        created_at=_parse_datetime(row.get("created_at")),
    )


def _recipe_columns(values: dict[str, Any]) -> dict[str, Any]:
    columns = dict(values)
    for key in ("ingredients", "steps"):
        if isinstance(columns.get(key), list):
            columns[key] = serialize_lines(columns[key])
    return columns


def _or_filter(columns: tuple[str, ...], term: str) -> str:
    # PostgREST treats "*" as the LIKE wildcard inside logical filters
    return ",".join(f"{column}.ilike.*{term}*" for column in columns)


class _SupabaseTable:
    TABLE_NAME = ""

    def __init__(self, client: Client):
        self._client = client

    def _table(self):
        return self._client.table(self.TABLE_NAME)

    def _execute(self, operation: str, run: Callable[[], T]) -> T:
        try:
            return run()
        except _STORE_ERRORS as error:
            logger.error("%s.%s failed: %s", self.TABLE_NAME, operation, error)
            raise StorageError(operation, str(error)) from error


class SupabaseRecipeRepository(_SupabaseTable, RecipeRepository):
    TABLE_NAME = "recipes"

    def __init__(self, client: Client):
        super().__init__(client)
        logger.debug("SupabaseRecipeRepository initialized")

    def insert(self, values: dict[str, Any]) -> Recipe:
        result = self._execute("insert", lambda: self._table().insert(_recipe_columns(values)).execute())
        if not result.data:
            raise StorageError("insert", "no row returned")
        return _row_to_recipe(result.data[0])

    def get(self, recipe_id: int) -> Optional[Recipe]:
        result = self._execute(
            "get",
            lambda: self._table().select(RECIPE_COLUMNS).eq("id", recipe_id).limit(1).execute(),
        )
        rows = result.data or []
        return _row_to_recipe(rows[0]) if rows else None

    def search(self, query: CatalogQuery) -> list[Recipe]:
        def run():
            builder = self._table().select(RECIPE_COLUMNS).eq("status", query.status.value)
            if query.category is not None:
                builder = builder.eq("category", query.category.value)
            if query.search:
                builder = builder.or_(_or_filter(query.search_columns, query.search))
            return builder.order(query.order_by, desc=query.descending).execute()

        result = self._execute("search", run)
        return [_row_to_recipe(row) for row in result.data or []]

    def list_all(self, status: Optional[RecipeStatus] = None) -> list[Recipe]:
        def run():
            builder = self._table().select(RECIPE_COLUMNS)
            if status is not None:
                builder = builder.eq("status", status.value)
            return builder.order("created_at", desc=True).execute()

        result = self._execute("list_all", run)
        return [_row_to_recipe(row) for row in result.data or []]

    def update(self, recipe_id: int, values: dict[str, Any]) -> Optional[Recipe]:
        result = self._execute(
            "update", lambda: self._table().update(_recipe_columns(values)).eq("id", recipe_id).execute()
        )
        rows = result.data or []
        return _row_to_recipe(rows[0]) if rows else None

    def delete(self, recipe_id: int) -> bool:
        result = self._execute(
            "delete", lambda: self._table().delete().eq("id", recipe_id).execute()
        )
        return bool(result.data)


class SupabaseFamilyItemRepository(_SupabaseTable, FamilyItemRepository):
    TABLE_NAME = "family_items"

    def __init__(self, client: Client):
        super().__init__(client)
        logger.debug("SupabaseFamilyItemRepository initialized")

    def insert(self, values: dict[str, Any]) -> FamilyItem:
        result = self._execute("insert", lambda: self._table().insert(values).execute())
        if not result.data:
            raise StorageError("insert", "no row returned")
        return _row_to_family_item(result.data[0])

    def list_items(self, published_only: bool = False) -> list[FamilyItem]:
        def run():
            builder = self._table().select(FAMILY_COLUMNS)
            if published_only:
                builder = builder.eq("is_published", True)
            return builder.order("created_at", desc=True).execute()

        result = self._execute("list_items", run)
        return [_row_to_family_item(row) for row in result.data or []]

    def update(self, item_id: int, values: dict[str, Any]) -> Optional[FamilyItem]:
        result = self._execute(
            "update", lambda: self._table().update(values).eq("id", item_id).execute()
        )
        rows = result.data or []
        return _row_to_family_item(rows[0]) if rows else None
