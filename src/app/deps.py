# src/app/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client, create_client

from src.app.config import settings
from src.app.domain.errors import ConfigurationError, UnauthorizedError
from src.app.infra.db.base import FamilyItemRepository, RecipeRepository
from src.app.infra.db.supabase_content_repo import (
    SupabaseFamilyItemRepository,
    SupabaseRecipeRepository,
)
from src.app.services.admin_auth import AdminAuthenticator, SessionRegistry
from src.app.services.family_publisher import FamilyPublisherService
from src.app.services.recipe_lifecycle import RecipeLifecycleService

ADMIN_COOKIE = "adminToken"

_client: Client | None = None


def get_supabase() -> Client:
    global _client
    if _client is None:
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


def get_recipe_repository(supa: Client = Depends(get_supabase)) -> RecipeRepository:
    return SupabaseRecipeRepository(supa)


def get_family_repository(supa: Client = Depends(get_supabase)) -> FamilyItemRepository:
    return SupabaseFamilyItemRepository(supa)


def get_recipe_service(
    repo: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeLifecycleService:
    return RecipeLifecycleService(repo)


def get_family_service(
    repo: FamilyItemRepository = Depends(get_family_repository),
) -> FamilyPublisherService:
    return FamilyPublisherService(repo)


def get_session_registry(request: Request) -> SessionRegistry:
    # created once in main.py at startup
    return request.app.state.sessions


def get_authenticator(
    registry: SessionRegistry = Depends(get_session_registry),
) -> AdminAuthenticator:
    return AdminAuthenticator(registry, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)


auth_scheme = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
) -> Optional[str]:
    """
    Token from the adminToken cookie, else from Authorization: Bearer.
    """
    cookie_token = request.cookies.get(ADMIN_COOKIE)
    if cookie_token:
        return cookie_token
    if cred is not None and cred.scheme.lower() == "bearer":
        return cred.credentials.strip() or None
    return None


async def require_admin(
    token: Optional[str] = Depends(get_session_token),
    auth: AdminAuthenticator = Depends(get_authenticator),
) -> str:
    try:
        return auth.require(token)
    except ConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
    except UnauthorizedError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
