# =============================================================================================
# APP/STORES/REFRESH_TOKENS.PY - REFRESH TOKEN STORE
# =============================================================================================
# The contract the auth flows (app/services/auth.py) rely on for long-lived tokens:
#
#   store(token, user_id, created_at, expires_at)   insert an active record
#                                                   → ConflictError if token exists
#   lookup_active_user(token) → UUID                only if unrevoked AND unexpired
#                                                   → InactiveTokenError otherwise
#   revoke(token)                                   set revoked_at = now
#                                                   → NotFoundError if unknown or
#                                                     already revoked
#
# lookup_active_user does not say which condition failed (unknown, expired
# or revoked): the caller gets the same InactiveTokenError for all three.
#
# Every operation touches exactly one row and commits on its own.
# =============================================================================================

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.core.errors import InactiveTokenError, NotFoundError
from app.models.token import RefreshToken
from app.stores.common import translate_errors, utcnow


class RefreshTokenStore:
    """Database access for refresh tokens, bound to one request's session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def store(
        self,
        token: str,
        user_id: UUID,
        created_at: datetime,
        expires_at: datetime,
    ) -> RefreshToken:
        """
        Insert a new active refresh token.

        Raises:
            ConflictError: A record with this token string already exists
        """
        record = RefreshToken(
            token=token,
            user_id=str(user_id),
            created_at=created_at,
            updated_at=created_at,
            expires_at=expires_at,
            revoked_at=None,
        )
        with translate_errors(self.session, "Refresh token already exists"):
            self.session.add(record)
            self.session.commit()
        return record

    def lookup_active_user(self, token: str, now: datetime | None = None) -> UUID:
        """
        Return the owner of `token` if it is neither revoked nor expired.

        Raises:
            InactiveTokenError: Unknown, expired or revoked token
        """
        now = now or utcnow()
        with translate_errors(self.session):
            user_id = self.session.execute(
                select(RefreshToken.user_id).where(
                    RefreshToken.token == token,
                    RefreshToken.revoked_at.is_(None),
                    RefreshToken.expires_at > now,
                )
            ).scalar_one_or_none()
        if user_id is None:
            raise InactiveTokenError()
        return UUID(user_id)

    def revoke(self, token: str) -> None:
        """
        Mark `token` revoked. Expired tokens can still be revoked.

        Raises:
            NotFoundError: No such token, or it is already revoked
        """
        now = utcnow()
        with translate_errors(self.session):
            # Single conditional UPDATE: two concurrent revokes cannot both succeed
            result = self.session.execute(
                update(RefreshToken)
                .where(RefreshToken.token == token, RefreshToken.revoked_at.is_(None))
                .values(revoked_at=now, updated_at=now)
            )
            self.session.commit()
        if result.rowcount == 0:
            raise NotFoundError("Refresh token not found")
