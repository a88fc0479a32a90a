# src/app/main.py
from __future__ import annotations
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.config import settings
from src.app.domain.errors import StorageError
from src.app.routers.admin import router as admin_router
from src.app.routers.auth import router as auth_router
from src.app.routers.family import router as family_router
from src.app.routers.recipes import router as recipes_router
from src.app.services.admin_auth import SessionRegistry

# plain stdout logging, fine for dev and containers
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Wait Family API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# one registry per process, shared by every request
app.state.sessions = SessionRegistry(ttl=settings.session_ttl)

app.include_router(recipes_router)
app.include_router(family_router)
app.include_router(auth_router)
app.include_router(admin_router)


_LOC_SOURCES = ("body", "query", "path", "header", "cookie")


def _error_body(text: str) -> dict[str, str]:
    # detail for FastAPI clients, message for the site's fetch helper
    return {"detail": text, "message": text}


def _invalid_field(errors: list[dict]) -> str:
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid request body"
    loc = list(first.get("loc", ()))
    if loc and loc[0] in _LOC_SOURCES:
        loc = loc[1:]
    # union branches and list indexes trail the field name
    name = next((part for part in loc if isinstance(part, str)), None)
    return f"Invalid {name}" if name else "Invalid request body"


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body(_invalid_field(exc.errors())))


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


@app.get("/health")
def health():
    return {"status": "ok"}
