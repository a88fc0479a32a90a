# src/app/services/catalog_query.py
"""
Query construction for the public recipe catalog.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Optional

from src.app.domain.models import (
    RECIPE_CATEGORIES,
    CatalogQuery,
    Recipe,
    RecipeCategory,
)

# Characters with meaning in the PostgREST logical filter grammar
_FILTER_SYNTAX = re.compile(r"[,()*%\\\"]")


def _normalize_category(category: Optional[str]) -> Optional[RecipeCategory]:
    if not category:
        return None
    value = category.strip().lower()
    if value not in RECIPE_CATEGORIES:
        return None
    return RecipeCategory(value)


def _normalize_search(search: Optional[str]) -> Optional[str]:
    if not search:
        return None
    term = " ".join(_FILTER_SYNTAX.sub(" ", search).split())
    return term or None


def _normalize_max_total_time(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        minutes = int(str(value).strip())
    except ValueError:
        return None
    return minutes if minutes >= 0 else None


def build_catalog_query(
    category: Optional[str] = None,
    search: Optional[str] = None,
    max_total_time: Any = None,
) -> CatalogQuery:
    """
    Build the read query for the public listing.

    Unrecognized categories and malformed time limits are dropped rather than
    rejected, so the listing never fails on bad filter input.

    Args:
        category: Exact category to match, if recognized
        search: Case-insensitive substring over title, description and
            ingredients text
        max_total_time: Upper bound in minutes on prep plus cook time

    Returns:
        CatalogQuery restricted to approved recipes, newest first
    """
    return CatalogQuery(
        category=_normalize_category(category),
        search=_normalize_search(search),
        max_total_time=_normalize_max_total_time(max_total_time),
    )


def refine(recipes: Iterable[Recipe], query: CatalogQuery) -> list[Recipe]:
    """
    Apply the filters the store cannot express. Recipes with no timing
    data are kept under a time limit.
    """
    limit = query.max_total_time
    if limit is None:
        return list(recipes)
    return [r for r in recipes if r.total_time is None or r.total_time <= limit]
