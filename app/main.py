# =============================================================================================
# APP/MAIN.PY - FASTAPI APPLICATION
# =============================================================================================
# This is the entry point for the Chirpy API. It provides:
# - Registration and authentication (access JWT + opaque refresh token)
# - Chirps: short text posts, created by authenticated users
# - A development-only reset endpoint
#
# ARCHITECTURE:
# - SQLite (SQLAlchemy): users, refresh tokens, chirps
# - FastAPI: REST API server
# - JWT: stateless access tokens; refresh tokens are stored and revocable
#
# FLOW:
# 1. User registers (POST /api/users) and logs in (POST /api/login) → token pair
# 2. User posts chirps with the access token
# 3. Access token expires (1 hour) → user refreshes with the refresh token
# 4. User logs out → refresh token revoked in database
#
# RUN:
#   uvicorn app.main:app --reload
# =============================================================================================

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from app.core.config import get_settings
from app.core.db import init_db
from app.core.errors import ChirpyError, UnauthorizedError
from app.core.logging import configure_logging
from app.routers import admin, auth, chirps, users

configure_logging(get_settings().LOG_LEVEL)


# -------------------------
# Database initialization on startup
# -------------------------
@asynccontextmanager
async def lifespan(_: FastAPI):
    """Create tables if they don't exist yet (users, refresh_tokens, chirps)."""
    init_db()
    logger.info("Database ready")
    yield


# -------------------------
# Create FastAPI application
# -------------------------
app = FastAPI(
    title="Chirpy",
    description="Short text posts with JWT access tokens and revocable refresh tokens",
    version="1.0.0",
    lifespan=lifespan,
)


# -------------------------
# Domain errors → JSON responses
# -------------------------
@app.exception_handler(ChirpyError)
async def chirpy_error_handler(request: Request, exc: ChirpyError) -> JSONResponse:
    """
    Convert a ChirpyError into {"detail": "..."} with its status code.

    Every UnauthorizedError (bad signature, expired, malformed, wrong issuer, missing
    header, unknown/revoked refresh token) gets the same generic message so a client
    can't tell which check failed.
    """
    if isinstance(exc, UnauthorizedError):
        logger.debug("{} {} → 401 ({})", request.method, request.url.path, exc.__class__.__name__)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": UnauthorizedError.message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    if exc.status_code >= 500:
        logger.opt(exception=exc).error("{} {} failed", request.method, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


# -------------------------
# Include routers
# -------------------------
# - POST /api/users
# - POST /api/login, /api/refresh, /api/revoke
# - POST/GET /api/chirps, GET/DELETE /api/chirps/{chirp_id}
# - POST /admin/reset
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(chirps.router)
app.include_router(admin.router)


# =============================================================================================
# PUBLIC ROUTES (no authentication required)
# =============================================================================================

@app.get("/api/healthz", response_class=PlainTextResponse, tags=["Health"])
def healthz():
    return "OK"
