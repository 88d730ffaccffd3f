# =============================================================================================
# APP/MODELS/CHIRP.PY - CHIRP DATABASE MODEL
# =============================================================================================

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.core.db import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Chirp(Base):
    """A short post. `body` is stored already passed through the profanity filter."""

    __tablename__ = "chirps"

    id: str = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        nullable=False,
    )

    # Byte limit is enforced in the route, not by the column
    body: str = Column(String(1024), nullable=False)

    user_id: str = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    updated_at: datetime = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    author = relationship("User", back_populates="chirps", lazy="select")

    def __repr__(self) -> str:
        return f"<Chirp(id={self.id}, user_id={self.user_id})>"
