from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from src.app.config import settings
from src.app.deps import ADMIN_COOKIE, get_authenticator, get_session_token, require_admin
from src.app.domain.errors import ConfigurationError, UnauthorizedError, ValidationError
from src.app.schemas.admin import AuthStatus, LoginRequest, LoginResponse, MessageResponse
from src.app.services.admin_auth import AdminAuthenticator

router = APIRouter(prefix="/api/admin", tags=["auth"])


def _cookie_options() -> dict:
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "lax",
        "path": "/",
    }


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    auth: AdminAuthenticator = Depends(get_authenticator),
) -> LoginResponse:
    try:
        token = auth.login(payload.username, payload.password)
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=str(exc))

    response.set_cookie(
        ADMIN_COOKIE,
        token,
        max_age=settings.ADMIN_COOKIE_MAX_AGE_SECONDS,
        **_cookie_options(),
    )
    return LoginResponse(token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: str = Depends(require_admin),
    auth: AdminAuthenticator = Depends(get_authenticator),
) -> MessageResponse:
    auth.logout(token)
    response.delete_cookie(ADMIN_COOKIE, **_cookie_options())
    return MessageResponse(message="Logged out")


@router.get("/check-auth", response_model=AuthStatus)
async def check_auth(
    token: Optional[str] = Depends(get_session_token),
    auth: AdminAuthenticator = Depends(get_authenticator),
) -> AuthStatus:
    return AuthStatus(authenticated=auth.check(token))
