from __future__ import annotations

import itertools
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

# Settings are read at import time; seed what they require before any
# module that imports src.app.config is loaded.
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ["APP_ENV"] = "test"

from src.app.domain.models import CatalogQuery, FamilyItem, Recipe, RecipeStatus
from src.app.infra.db.base import FamilyItemRepository, RecipeRepository
from src.app.infra.db.supabase_content_repo import (
    _row_to_family_item,
    _row_to_recipe,
    serialize_lines,
)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "s3cret"

_BASE_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


class RecipeRepositoryStub(RecipeRepository):
    """Keeps rows the way the recipes table does: list columns serialized."""

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self.search_calls: list[CatalogQuery] = []

    def insert(self, values: dict[str, Any]) -> Recipe:
        row = dict(values)
        row["id"] = next(self._ids)
        # monotonically increasing so ordering is deterministic
        row["created_at"] = (_BASE_TIME + timedelta(minutes=row["id"])).isoformat()
        row.setdefault("likes", 0)
        for key in ("ingredients", "steps"):
            row[key] = serialize_lines(row[key])
        self.rows[row["id"]] = row
        return _row_to_recipe(row)

    def get(self, recipe_id: int) -> Optional[Recipe]:
        row = self.rows.get(recipe_id)
        return _row_to_recipe(row) if row else None

    def _newest_first(self, rows: list[dict[str, Any]]) -> list[Recipe]:
        rows = sorted(rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)
        return [_row_to_recipe(row) for row in rows]

    def search(self, query: CatalogQuery) -> list[Recipe]:
        self.search_calls.append(query)
        rows = [r for r in self.rows.values() if r["status"] == query.status.value]
        if query.category is not None:
            rows = [r for r in rows if r["category"] == query.category.value]
        if query.search:
            term = query.search.lower()
            rows = [
                r for r in rows
                if any(term in str(r.get(col) or "").lower() for col in query.search_columns)
            ]
        return self._newest_first(rows)

    def list_all(self, status: Optional[RecipeStatus] = None) -> list[Recipe]:
        rows = list(self.rows.values())
        if status is not None:
            rows = [r for r in rows if r["status"] == status.value]
        return self._newest_first(rows)

    def update(self, recipe_id: int, values: dict[str, Any]) -> Optional[Recipe]:
        row = self.rows.get(recipe_id)
        if row is None:
            return None
        changes = dict(values)
        for key in ("ingredients", "steps"):
            if key in changes:
                changes[key] = serialize_lines(changes[key])
        row.update(changes)
        return _row_to_recipe(row)

    def delete(self, recipe_id: int) -> bool:
        return self.rows.pop(recipe_id, None) is not None


class FamilyItemRepositoryStub(FamilyItemRepository):
    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def insert(self, values: dict[str, Any]) -> FamilyItem:
        row = dict(values)
        row["id"] = next(self._ids)
        row["created_at"] = (_BASE_TIME + timedelta(minutes=row["id"])).isoformat()
        self.rows[row["id"]] = row
        return _row_to_family_item(row)

    def list_items(self, published_only: bool = False) -> list[FamilyItem]:
        rows = list(self.rows.values())
        if published_only:
            rows = [r for r in rows if r["is_published"]]
        rows.sort(key=lambda r: (r["created_at"], r["id"]), reverse=True)
        return [_row_to_family_item(row) for row in rows]

    def update(self, item_id: int, values: dict[str, Any]) -> Optional[FamilyItem]:
        row = self.rows.get(item_id)
        if row is None:
            return None
        row.update(values)
        return _row_to_family_item(row)


@pytest.fixture
def recipe_repo() -> RecipeRepositoryStub:
    return RecipeRepositoryStub()


@pytest.fixture
def family_repo() -> FamilyItemRepositoryStub:
    return FamilyItemRepositoryStub()


@pytest.fixture
def app(recipe_repo: RecipeRepositoryStub, family_repo: FamilyItemRepositoryStub):
    from src.app import deps
    from src.app.main import app as fastapi_app
    from src.app.services.admin_auth import AdminAuthenticator, SessionRegistry

    registry = SessionRegistry()
    fastapi_app.state.sessions = registry
    fastapi_app.dependency_overrides[deps.get_recipe_repository] = lambda: recipe_repo
    fastapi_app.dependency_overrides[deps.get_family_repository] = lambda: family_repo
    fastapi_app.dependency_overrides[deps.get_authenticator] = lambda: AdminAuthenticator(
        registry, ADMIN_USERNAME, ADMIN_PASSWORD
    )
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    response = client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client

