# =============================================================================================
# APP/ROUTERS/USERS.PY - REGISTRATION ENDPOINT
# =============================================================================================

from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.security import hash_password
from app.schemas.user import UserIn, UserOut
from app.stores.users import UserStore

router = APIRouter(prefix="/api", tags=["Users"])


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserIn,
    db: Session = Depends(get_db),
):
    """
    Create a new user account.

    REQUEST:
        POST /api/users
        {
            "email": "alice@example.com",
            "password": "SecurePassword123!"
        }

    RESPONSE (201 Created):
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "created_at": "2024-01-15T10:30:00Z",
            "updated_at": "2024-01-15T10:30:00Z",
            "email": "alice@example.com"
        }

    ERRORS:
        409 Conflict: Email already registered
        422 Unprocessable Entity: Invalid email format or empty password
    """
    user = UserStore(db).create(data.email, hash_password(data.password))
    logger.info("Registered user {}", user.id)
    return user
