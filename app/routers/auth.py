# =============================================================================================
# APP/ROUTERS/AUTH.PY - AUTHENTICATION ENDPOINTS
# =============================================================================================
# This module provides the session endpoints:
# - POST /api/login:   Authenticate and get access + refresh tokens
# - POST /api/refresh: Exchange refresh token (Authorization header) for a new access token
# - POST /api/revoke:  Revoke refresh token (Authorization header)
#
# AUTHENTICATION FLOW:
# 1. User registers: POST /api/users → returns user data
# 2. User logs in: POST /api/login → returns user data + token + refresh_token
# 3. User accesses protected routes: Authorization: Bearer <token>
# 4. Access token expires (1 hour): POST /api/refresh with Bearer <refresh_token>
# 5. User logs out: POST /api/revoke with Bearer <refresh_token>
#
# The flows themselves live in app/services/auth.py.
# =============================================================================================

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.db import get_db
from app.core.deps import get_bearer_token
from app.schemas.auth import LoginOut, TokenOut
from app.schemas.user import UserIn, UserOut
from app.services import auth as auth_service
from app.stores.refresh_tokens import RefreshTokenStore
from app.stores.users import UserStore

# -------------------------
# Router configuration
# -------------------------
router = APIRouter(
    prefix="/api",
    tags=["Authentication"],
)


# =============================================================================================
# ENDPOINT 1: Login (authenticate and get tokens)
# =============================================================================================

@router.post("/login", response_model=LoginOut)
def login(
    data: UserIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Authenticate user and return profile + access token + refresh token.

    REQUEST:
        POST /api/login
        {
            "email": "alice@example.com",
            "password": "SecurePassword123!"
        }

    RESPONSE (200 OK):
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "created_at": "2024-01-15T10:30:00Z",
            "updated_at": "2024-01-15T10:30:00Z",
            "email": "alice@example.com",
            "token": "eyJhbGci...",
            "refresh_token": "56aa826d22baab4b..."
        }

    ERRORS:
        401 Unauthorized: Invalid email or password (same message for both)
    """
    result = auth_service.login(
        UserStore(db),
        RefreshTokenStore(db),
        data.email,
        data.password,
        settings,
    )

    profile = UserOut.model_validate(result.user)
    return LoginOut(
        **profile.model_dump(),
        token=result.access_token,
        refresh_token=result.refresh_token,
    )


# =============================================================================================
# ENDPOINT 2: Refresh (exchange refresh token for a new access token)
# =============================================================================================

@router.post("/refresh", response_model=TokenOut)
def refresh(
    refresh_token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Issue a new access token for the owner of an active refresh token.

    REQUEST:
        POST /api/refresh
        Authorization: Bearer 56aa826d22baab4b...

    RESPONSE (200 OK):
        {"token": "eyJhbGci..."}

    ERRORS:
        401 Unauthorized: Missing header, or token unknown, expired or revoked
    """
    token = auth_service.refresh(RefreshTokenStore(db), refresh_token, settings)
    return TokenOut(token=token)


# =============================================================================================
# ENDPOINT 3: Revoke (logout)
# =============================================================================================

@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
def revoke(
    refresh_token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
):
    """
    Revoke a refresh token.

    Access tokens issued from it stay valid until they expire (at most 1 hour).

    RESPONSE (204 No Content):
        (empty body)

    ERRORS:
        401 Unauthorized: Missing header, unknown token, or token already revoked
    """
    auth_service.revoke(RefreshTokenStore(db), refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
