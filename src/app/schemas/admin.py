from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    token: str
    message: str = "Signed in successfully"


class AuthStatus(BaseModel):
    authenticated: bool


class MessageResponse(BaseModel):
    message: str
