# =============================================================================================
# APP/SERVICES/AUTH.PY - AUTHENTICATION FLOWS
# =============================================================================================
# Composes the credential primitives, the access token codec and the stores into the
# three session flows. Routers (app/routers/auth.py) stay thin: they extract input, call
# one function from here, and shape the JSON.
#
# FLOWS:
# - login:   email + password → access token (1h) + new refresh token (60d) + user
# - refresh: refresh token → new access token (the refresh token is NOT rotated)
# - revoke:  refresh token → revoked; access tokens already issued simply expire
#
# ERRORS:
# - login never says whether the email or the password was wrong (InvalidCredentialsError)
# - refresh/revoke collapse every store failure about the token into UnauthorizedError
# - nothing is retried; store/hash/random failures propagate as they are
# =============================================================================================

from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

from loguru import logger

from app.core.config import Settings
from app.core.errors import (
    ConflictError,
    InactiveTokenError,
    InvalidCredentialsError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)
from app.core.security import check_password_hash, generate_opaque_token
from app.core.tokens import issue_access_token
from app.models.user import User
from app.stores.common import utcnow
from app.stores.refresh_tokens import RefreshTokenStore
from app.stores.users import UserStore


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


def _access_token_for(user_id: UUID, settings: Settings) -> str:
    return issue_access_token(
        user_id,
        settings.JWT_SECRET,
        timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS),
    )


def login(
    users: UserStore,
    refresh_tokens: RefreshTokenStore,
    email: str,
    password: str,
    settings: Settings,
) -> LoginResult:
    """
    Authenticate by email/password and open a session.

    FLOW:
    1. Find user by email (unknown email → InvalidCredentialsError)
    2. Verify password hash (mismatch → InvalidCredentialsError)
    3. Issue access token (ACCESS_TOKEN_EXPIRE_SECONDS, 1 hour)
    4. Generate opaque refresh token and store it (REFRESH_TOKEN_EXPIRE_DAYS, 60 days)
    5. Return both tokens plus the user

    Raises:
        InvalidCredentialsError: Unknown email or wrong password (indistinguishable)
        HashError: Stored hash is malformed
        RandomSourceError: Refresh token could not be generated
        ServerError: Generated refresh token collided with an existing one
        StoreUnavailableError: Database failure
    """
    try:
        user = users.find_by_email(email)
    except NotFoundError:
        logger.debug("Login rejected: unknown email")
        raise InvalidCredentialsError() from None

    if not check_password_hash(password, user.hashed_password):
        logger.debug("Login rejected: wrong password for user {}", user.id)
        raise InvalidCredentialsError()

    user_id = UUID(user.id)
    access_token = _access_token_for(user_id, settings)

    refresh_token = generate_opaque_token()
    created_at = utcnow()
    try:
        refresh_tokens.store(
            refresh_token,
            user_id,
            created_at,
            created_at + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )
    except ConflictError as exc:
        logger.error("Refresh token collision for user {}", user_id)
        raise ServerError("Couldn't create refresh token") from exc

    logger.info("User {} logged in", user_id)
    return LoginResult(user=user, access_token=access_token, refresh_token=refresh_token)


def refresh(refresh_tokens: RefreshTokenStore, token: str, settings: Settings) -> str:
    """
    Exchange an active refresh token for a new access token.

    Raises:
        UnauthorizedError: Token unknown, expired or revoked
        StoreUnavailableError: Database failure
    """
    try:
        user_id = refresh_tokens.lookup_active_user(token)
    except InactiveTokenError:
        logger.info("Refresh rejected: inactive refresh token")
        raise UnauthorizedError() from None

    logger.info("Issued new access token for user {}", user_id)
    return _access_token_for(user_id, settings)


def revoke(refresh_tokens: RefreshTokenStore, token: str) -> None:
    """
    Revoke a refresh token. Revoking the same token twice fails the second time.

    Raises:
        UnauthorizedError: Token unknown or already revoked
        StoreUnavailableError: Database failure
    """
    try:
        refresh_tokens.revoke(token)
    except NotFoundError:
        logger.info("Revoke rejected: unknown or already revoked refresh token")
        raise UnauthorizedError() from None
    logger.info("Refresh token revoked")
