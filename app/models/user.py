# =============================================================================================
# APP/MODELS/USER.PY - USER DATABASE MODEL
# =============================================================================================
# Owned by the user store (app/stores/users.py). The auth core only reads users (login);
# they are created on registration and deleted by the admin reset.
# =============================================================================================

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from app.core.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -------------------------
# User model - Maps to "users" table
# -------------------------
class User(Base):
    """
    Registered account.

    DATABASE TABLE (SQLite):
        CREATE TABLE users (
            id VARCHAR(36) PRIMARY KEY,
            email VARCHAR(255) NOT NULL UNIQUE,
            hashed_password VARCHAR(255) NOT NULL,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        );
    """

    __tablename__ = "users"

    # UUID stored as string (SQLite has no native UUID type)
    id: str = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        nullable=False,
    )

    email: str = Column(
        String(255),
        nullable=False,
        unique=True,
        index=True,  # Login looks users up by email
    )

    # Argon2 hash, never the plaintext password
    hashed_password: str = Column(String(255), nullable=False)

    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: datetime = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    # -------------------------
    # Relationships
    # -------------------------
    # passive_deletes=True leaves the cascade to the database (ON DELETE CASCADE)
    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        lazy="select",
        passive_deletes=True,
    )
    chirps = relationship(
        "Chirp",
        back_populates="author",
        lazy="select",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
