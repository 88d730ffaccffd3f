# =============================================================================================
# APP/SCHEMAS/AUTH.PY - PYDANTIC SCHEMAS FOR AUTHENTICATION RESPONSES
# =============================================================================================
# SCHEMA:
# - LoginOut: Response from POST /api/login (user profile + both tokens)
# - TokenOut: Response from POST /api/refresh (new access token only)
#
# Refresh and revoke take no body: the refresh token travels in the Authorization header.
#
# TOKEN LIFECYCLE:
# 1. Login: Server returns LoginOut (access + refresh tokens)
# 2. API calls: Client sends access token in Authorization header
# 3. Access expires: Client sends refresh token to /api/refresh → TokenOut
# 4. Logout: Client sends refresh token to /api/revoke, server revokes it (204)
# =============================================================================================

from pydantic import BaseModel, Field

from app.schemas.user import UserOut


class LoginOut(UserOut):
    """
    RESPONSE EXAMPLE:
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "created_at": "2024-01-15T10:30:00Z",
            "updated_at": "2024-01-15T10:30:00Z",
            "email": "alice@example.com",
            "token": "eyJhbGci...",
            "refresh_token": "56aa826d22baab4b5ec2cea41a59ecbba03e542aedbb31d9b80326ac8ffcfa2a"
        }
    """

    # Short-lived JWT (1 hour), sent as Authorization: Bearer <token>
    token: str = Field(
        ...,
        description="Access token for API authentication (1 hour)",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJpc3MiOiJjaGlycHkifQ..."],
    )

    # Opaque, 64 hex characters, valid 60 days unless revoked
    refresh_token: str = Field(
        ...,
        description="Opaque refresh token for obtaining new access tokens (60 days)",
        examples=["56aa826d22baab4b5ec2cea41a59ecbba03e542aedbb31d9b80326ac8ffcfa2a"],
    )


class TokenOut(BaseModel):
    token: str = Field(..., description="New access token (1 hour)")
