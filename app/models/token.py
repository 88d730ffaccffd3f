# =============================================================================================
# APP/MODELS/TOKEN.PY - REFRESH TOKEN DATABASE MODEL
# =============================================================================================
# This module defines the RefreshToken table backing the refresh token store.
#
# STATE:
# - active:  revoked_at IS NULL and now < expires_at
# - expired: now >= expires_at
# - revoked: revoked_at IS NOT NULL
#
# LIFECYCLE:
# 1. Login creates a record (expires_at = created_at + 60 days)
# 2. /api/refresh reads it (the token is not rotated)
# 3. /api/revoke sets revoked_at (and updated_at); the row is kept
# 4. Rows disappear only when their user is deleted (ON DELETE CASCADE)
# =============================================================================================

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.core.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# -------------------------
# RefreshToken model - Maps to "refresh_tokens" table
# -------------------------
class RefreshToken(Base):
    """
    Long-lived, revocable, opaque refresh token.

    DATABASE TABLE (SQLite):
        CREATE TABLE refresh_tokens (
            token VARCHAR(64) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL,
            expires_at TIMESTAMP NOT NULL,
            revoked_at TIMESTAMP NULL
        );

    COLUMNS EXPLAINED:
    - token: 64 hex chars from generate_opaque_token(); the primary key, so a duplicate
      insert is a constraint violation (ConflictError in the store)
    - user_id: Foreign key to users table (who owns this token)
    - expires_at: When this token becomes unusable
    - revoked_at: NULL while usable; set once on revoke
    """

    __tablename__ = "refresh_tokens"

    token: str = Column(String(64), primary_key=True, nullable=False)

    user_id: str = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    expires_at: datetime = Column(DateTime(timezone=True), nullable=False)
    revoked_at: datetime | None = Column(DateTime(timezone=True), nullable=True)

    user = relationship(
        "User",
        back_populates="refresh_tokens",
        lazy="select",
    )

    __table_args__ = (
        Index("ix_refresh_tokens_user_expires", "user_id", "expires_at"),
    )

    def __repr__(self) -> str:
        return f"<RefreshToken(user_id={self.user_id}, revoked_at={self.revoked_at})>"
