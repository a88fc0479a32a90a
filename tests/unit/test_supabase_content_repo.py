from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import httpx
import pytest

from src.app.domain.errors import StorageError
from src.app.domain.models import MediaType, RecipeCategory, RecipeStatus
from src.app.infra.db.supabase_content_repo import (
    SupabaseFamilyItemRepository,
    SupabaseRecipeRepository,
    deserialize_lines,
    serialize_lines,
)
from src.app.services.catalog_query import build_catalog_query


def _recipe_row(**overrides) -> dict:
    row = {
        "id": 3,
        "title": "Apple Pie",
        "description": "Grandma's",
        "ingredients": '["apples", "flour"]',
        "steps": '["mix", "bake"]',
        "image_url": None,
        "category": "dessert",
        "submitted_by": "May",
        "prep_time": 15,
        "cook_time": None,
        "serves": 8,
        "likes": 2,
        "status": "approved",
        "created_at": "2024-01-15T12:00:00Z",
    }
    row.update(overrides)
    return row


def _client_returning(rows: list[dict]) -> tuple[MagicMock, MagicMock]:
    """Client whose query builder chain always ends in `rows`."""
    builder = MagicMock()
    for method in ("select", "eq", "or_", "order", "limit", "insert", "update", "delete"):
        getattr(builder, method).return_value = builder
    builder.execute.return_value = MagicMock(data=rows)
    client = MagicMock()
    client.table.return_value = builder
    return client, builder


class TestLineSerialization:
    def test_round_trip(self) -> None:
        assert deserialize_lines(serialize_lines(["flour", "crème fraîche"])) == ["flour", "crème fraîche"]

    def test_keeps_non_ascii_readable(self) -> None:
        assert "crème" in serialize_lines(["crème"])

    def test_legacy_text_block(self) -> None:
        assert deserialize_lines("flour\n\nsugar") == ["flour", "sugar"]

    def test_native_list_column(self) -> None:
        assert deserialize_lines(["a", "b"]) == ["a", "b"]

    def test_null(self) -> None:
        assert deserialize_lines(None) == []

    def test_json_null_column(self) -> None:
        assert deserialize_lines("null") == []

    def test_json_scalar_keeps_stored_text(self) -> None:
        assert deserialize_lines("true") == ["true"]
        assert deserialize_lines("2") == ["2"]

    def test_null_entries_dropped(self) -> None:
        assert deserialize_lines('["flour", null]') == ["flour"]


class TestSupabaseRecipeRepository:
    def test_row_mapping(self) -> None:
        client, _ = _client_returning([_recipe_row()])

        recipe = SupabaseRecipeRepository(client).get(3)

        assert recipe is not None
        assert recipe.ingredients == ["apples", "flour"]
        assert recipe.category == RecipeCategory.DESSERT
        assert recipe.status == RecipeStatus.APPROVED
        assert recipe.cook_time is None
        assert recipe.likes == 2
        assert recipe.created_at == datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

    def test_get_missing(self) -> None:
        client, _ = _client_returning([])
        assert SupabaseRecipeRepository(client).get(3) is None

    def test_insert_serializes_lists(self) -> None:
        client, builder = _client_returning([_recipe_row(status="pending")])

        SupabaseRecipeRepository(client).insert(
            {"title": "Apple Pie", "ingredients": ["apples", "flour"], "steps": ["mix"]}
        )

        client.table.assert_called_with("recipes")
        sent = builder.insert.call_args.args[0]
        assert json.loads(sent["ingredients"]) == ["apples", "flour"]
        assert json.loads(sent["steps"]) == ["mix"]

    def test_search_applies_filters(self) -> None:
        client, builder = _client_returning([_recipe_row()])
        query = build_catalog_query(category="dessert", search="apple")

        recipes = SupabaseRecipeRepository(client).search(query)

        assert len(recipes) == 1
        builder.eq.assert_any_call("status", "approved")
        builder.eq.assert_any_call("category", "dessert")
        builder.or_.assert_called_once_with(
            "title.ilike.*apple*,description.ilike.*apple*,ingredients.ilike.*apple*"
        )
        builder.order.assert_called_once_with("created_at", desc=True)

    def test_search_without_filters(self) -> None:
        client, builder = _client_returning([])

        SupabaseRecipeRepository(client).search(build_catalog_query(category="nope"))

        builder.eq.assert_called_once_with("status", "approved")
        builder.or_.assert_not_called()

    def test_update_missing_row(self) -> None:
        client, _ = _client_returning([])
        assert SupabaseRecipeRepository(client).update(9, {"status": "approved"}) is None

    def test_delete(self) -> None:
        client, builder = _client_returning([_recipe_row()])

        assert SupabaseRecipeRepository(client).delete(3) is True
        builder.eq.assert_called_with("id", 3)

    def test_delete_missing_row(self) -> None:
        client, _ = _client_returning([])
        assert SupabaseRecipeRepository(client).delete(3) is False

    def test_transport_errors_become_storage_errors(self) -> None:
        client, builder = _client_returning([])
        builder.execute.side_effect = httpx.ConnectError("refused")

        with pytest.raises(StorageError) as excinfo:
            SupabaseRecipeRepository(client).list_all()

        assert excinfo.value.operation == "list_all"


class TestSupabaseFamilyItemRepository:
    def test_published_only(self) -> None:
        row = {
            "id": 1,
            "title": "Reunion",
            "summary": "Lake",
            "content": None,
            "media_type": "video",
            "media_url": "https://v/1",
            "is_published": True,
            "created_at": "2024-01-15T12:00:00+00:00",
        }
        client, builder = _client_returning([row])

        items = SupabaseFamilyItemRepository(client).list_items(published_only=True)

        client.table.assert_called_with("family_items")
        builder.eq.assert_called_once_with("is_published", True)
        assert items[0].media_type == MediaType.VIDEO
        assert items[0].is_published is True

    def test_legacy_integer_flag(self) -> None:
        row = {"id": 2, "title": "t", "summary": "s", "media_type": "article", "is_published": 0}
        client, _ = _client_returning([row])

        item = SupabaseFamilyItemRepository(client).update(2, {"is_published": False})

        assert item is not None
        assert item.is_published is False

    @pytest.mark.parametrize("stored, expected", [(1, True), ("t", True), ("1", True), ("f", False), (None, False)])
    def test_stored_flag_variants(self, stored, expected) -> None:
        row = {"id": 2, "title": "t", "summary": "s", "media_type": "article", "is_published": stored}
        client, _ = _client_returning([row])

        items = SupabaseFamilyItemRepository(client).list_items()

        assert items[0].is_published is expected
