# src/app/infra/db/base.py
"""
Abstract base classes for the content store.
Services depend on these interfaces so the backing store can be swapped.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.app.domain.models import CatalogQuery, FamilyItem, Recipe, RecipeStatus


class RecipeRepository(ABC):
    """
    Abstract interface for the recipes table.

    Implementations:
    - SupabaseRecipeRepository: Postgres via Supabase
    """

    @abstractmethod
    def insert(self, values: dict[str, Any]) -> Recipe:
        """
        Insert a validated recipe row.

        Args:
            values: Column values, already validated. List columns are
                serialized by the repository

        Returns:
            The created Recipe, with its store-assigned id
        """
        pass

    @abstractmethod
    def get(self, recipe_id: int) -> Optional[Recipe]:
        pass

    @abstractmethod
    def search(self, query: CatalogQuery) -> list[Recipe]:
        """
        Run a public catalog query.

        Args:
            query: Normalized filters built by build_catalog_query

        Returns:
            Matching recipes, newest first
        """
        pass

    @abstractmethod
    def list_all(self, status: Optional[RecipeStatus] = None) -> list[Recipe]:
        """
        List every recipe regardless of status, newest first.

        Args:
            status: If provided, only recipes in this state
        """
        pass

    @abstractmethod
    def update(self, recipe_id: int, values: dict[str, Any]) -> Optional[Recipe]:
        """
        Apply column changes to one recipe.

        Returns:
            The updated Recipe, or None if no row matched
        """
        pass

    @abstractmethod
    def delete(self, recipe_id: int) -> bool:
        """
        Hard-delete a recipe.

        Returns:
            True if a row was removed
        """
        pass


class FamilyItemRepository(ABC):
    """
    Abstract interface for the family_items table.
    """

    @abstractmethod
    def insert(self, values: dict[str, Any]) -> FamilyItem:
        pass

    @abstractmethod
    def list_items(self, published_only: bool = False) -> list[FamilyItem]:
        """
        List family items, newest first.

        Args:
            published_only: Restrict to is_published = true
        """
        pass

    @abstractmethod
    def update(self, item_id: int, values: dict[str, Any]) -> Optional[FamilyItem]:
        """
        Apply column changes to one family item.

        Returns:
            The updated item, or None if no row matched
        """
        pass
