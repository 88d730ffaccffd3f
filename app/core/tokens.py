# =============================================================================================
# APP/CORE/TOKENS.PY - ACCESS TOKEN CODEC (JWT, HS256)
# =============================================================================================
# Access tokens are short-lived, self-contained, signed claim sets. They are never stored.
#
# JWT STRUCTURE:
#     eyJhbGci...  .  eyJpc3Mi...  .  SflKxwRJ...
#     └─ Header      └─ Payload      └─ Signature
#     (algorithm)    (claims)        (HMAC-SHA256 over header.payload)
#
# CLAIMS:
# - iss (issuer): always TOKEN_ISSUER ("chirpy")
# - sub (subject): the user's UUID as a string
# - iat (issued at): when the token was created (UTC)
# - exp (expires): iat + expires_in
#
# The secret is an explicit argument of every call. Callers read it from Settings
# (app/core/config.py) and pass it in, so tests can use a different secret per case.
#
# Callers only ever see issue_access_token/verify_access_token and the TokenError family
# from app/core/errors.py, so the signing library (PyJWT) stays an implementation detail.
# =============================================================================================

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt  # PyJWT library for creating and decoding JSON Web Tokens
from jwt.exceptions import InvalidSubjectError

from app.core.errors import (
    InvalidSignatureError,
    IssuerMismatchError,
    MalformedSubjectError,
    MalformedTokenError,
    TokenExpiredError,
)

TOKEN_ISSUER = "chirpy"
SIGNING_ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["iss", "sub", "iat", "exp"]


def issue_access_token(
    user_id: UUID,
    secret: str,
    expires_in: timedelta,
    now: datetime | None = None,
) -> str:
    """
    Create a signed access token identifying `user_id`.

    USAGE:
        token = issue_access_token(user.id, settings.JWT_SECRET, timedelta(hours=1))
        # Client sends with requests: Authorization: Bearer <token>

    Args:
        user_id: The user the token speaks for
        secret: HMAC signing key
        expires_in: Token lifetime
        now: Issue time; defaults to the current UTC time

    Returns:
        Signed JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "iss": TOKEN_ISSUER,
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=SIGNING_ALGORITHM)


def verify_access_token(token: str, secret: str) -> UUID:
    """
    Verify an access token and return the user id it was issued for.

    CHECKS (in this order):
    1. Structure and signature (nothing in the payload is trusted before this passes)
    2. Required claims present, exp in the future, iat not in the future
    3. iss equals TOKEN_ISSUER
    4. sub parses as a UUID

    Only HS256 is accepted (`algorithms=[...]`), so an "alg: none" header is rejected.

    Raises:
        InvalidSignatureError: Signature does not match `secret`
        TokenExpiredError: exp has passed
        IssuerMismatchError: iss is not TOKEN_ISSUER
        MalformedTokenError: Token or claims cannot be parsed
        MalformedSubjectError: sub is not a valid user id
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[SIGNING_ALGORITHM],
            issuer=TOKEN_ISSUER,
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.InvalidSignatureError as exc:
        raise InvalidSignatureError() from exc
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError() from exc
    except jwt.InvalidIssuerError as exc:
        raise IssuerMismatchError() from exc
    except InvalidSubjectError as exc:
        raise MalformedSubjectError() from exc
    except jwt.InvalidTokenError as exc:
        # DecodeError, MissingRequiredClaimError, ImmatureSignatureError, ...
        raise MalformedTokenError() from exc

    try:
        return UUID(claims["sub"])
    except (TypeError, ValueError, AttributeError) as exc:
        raise MalformedSubjectError() from exc
