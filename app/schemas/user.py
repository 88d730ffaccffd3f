# =============================================================================================
# APP/SCHEMAS/USER.PY - PYDANTIC SCHEMAS FOR USER API REQUESTS/RESPONSES
# =============================================================================================
# SCHEMA TYPES:
# - UserIn: Input for POST /api/users and POST /api/login (email + password)
# - UserOut: Public user data (never includes the password hash)
#
# FLOW:
# 1. Client sends JSON → Pydantic validates against UserIn
# 2. Route calls the store / auth flow with validated data
# 3. Route returns UserOut (Pydantic serializes the SQLAlchemy object to JSON)
# =============================================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, ConfigDict


# =============================================================================================
# INPUT SCHEMAS (Request bodies)
# =============================================================================================

class UserIn(BaseModel):
    """
    Schema for registration and login requests.

    USAGE:
        POST /api/users
        POST /api/login
        {
            "email": "alice@example.com",
            "password": "SecurePassword123!"
        }
    """

    email: EmailStr = Field(
        ...,
        description="User's email address (used for login)",
        examples=["alice@example.com"],
    )

    # Any non-empty password is accepted; strength rules are not enforced
    password: str = Field(
        ...,
        min_length=1,
        description="User's password (hashed before storage)",
        examples=["SecurePassword123!"],
    )


# =============================================================================================
# OUTPUT SCHEMAS (Response bodies)
# =============================================================================================

class UserOut(BaseModel):
    """
    Schema for user data in API responses.

    RESPONSE EXAMPLE:
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "created_at": "2024-01-15T10:30:00Z",
            "updated_at": "2024-01-15T10:30:00Z",
            "email": "alice@example.com"
        }
    """

    id: UUID = Field(..., description="User's unique identifier (UUID)")
    created_at: datetime = Field(..., description="When this account was created (UTC)")
    updated_at: datetime = Field(..., description="When this account was last changed (UTC)")
    email: EmailStr = Field(..., description="User's email address")

    # Read from SQLAlchemy objects (user.email) instead of dict keys
    model_config = ConfigDict(from_attributes=True)
