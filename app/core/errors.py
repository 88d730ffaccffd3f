# =============================================================================================
# APP/CORE/ERRORS.PY - DOMAIN EXCEPTIONS
# =============================================================================================
# Every failure the auth core can produce is one of these classes. Each carries the HTTP
# status it maps to at the API boundary; app/main.py turns them into JSON responses.
#
# HIERARCHY:
#   ChirpyError
#   ├── InvalidCredentialsError (401)     login: unknown email OR wrong password
#   ├── UnauthorizedError (401)           anything wrong with a presented credential
#   │   ├── TokenError                    access token codec failures
#   │   │   ├── InvalidSignatureError
#   │   │   ├── TokenExpiredError
#   │   │   ├── MalformedTokenError
#   │   │   ├── IssuerMismatchError
#   │   │   └── MalformedSubjectError
#   │   └── BearerError                   Authorization header failures
#   │       ├── MissingHeaderError
#   │       └── MalformedSchemeError
#   ├── ValidationError (400)
#   ├── ForbiddenError (403)
#   ├── NotFoundError (404)
#   │   └── InactiveTokenError            refresh token not found / expired / revoked
#   ├── ConflictError (409)
#   ├── ServerError (500)
#   │   ├── HashError
#   │   └── RandomSourceError
#   └── StoreUnavailableError (503)
#
# All UnauthorizedError subclasses collapse to one generic 401 message for the client.
# =============================================================================================

from __future__ import annotations


class ChirpyError(Exception):
    """Base class for errors mapped to HTTP responses."""

    status_code: int = 500
    message: str = "Something went wrong"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message is not None:
            self.message = message


class InvalidCredentialsError(ChirpyError):
    """Email/password pair did not match a user (401)."""

    status_code = 401
    message = "Invalid email or password"


class UnauthorizedError(ChirpyError):
    """A presented token or header could not be accepted (401)."""

    status_code = 401
    message = "Could not validate credentials"


class TokenError(UnauthorizedError):
    message = "Invalid access token"


class InvalidSignatureError(TokenError):
    message = "Access token signature does not match"


class TokenExpiredError(TokenError):
    message = "Access token has expired"


class MalformedTokenError(TokenError):
    message = "Access token claims could not be parsed"


class IssuerMismatchError(TokenError):
    message = "Access token was issued by someone else"


class MalformedSubjectError(TokenError):
    message = "Access token subject is not a user id"


class BearerError(UnauthorizedError):
    message = "Invalid Authorization header"


class MissingHeaderError(BearerError):
    message = "Authorization header is missing"


class MalformedSchemeError(BearerError):
    message = "Authorization header is not 'Bearer <token>'"


class ValidationError(ChirpyError):
    """Request content failed a business rule (400)."""

    status_code = 400
    message = "Invalid request"


class ForbiddenError(ChirpyError):
    """Authenticated, but not allowed to do this (403)."""

    status_code = 403
    message = "Forbidden"


class NotFoundError(ChirpyError):
    """Requested record does not exist (404)."""

    status_code = 404
    message = "Not found"


class InactiveTokenError(NotFoundError):
    """Refresh token is unknown, expired or revoked. Callers cannot tell which."""

    message = "Refresh token is not active"


class ConflictError(ChirpyError):
    """Unique constraint violated (409)."""

    status_code = 409
    message = "Conflict"


class ServerError(ChirpyError):
    status_code = 500


class HashError(ServerError):
    message = "Password hashing failed"


class RandomSourceError(ServerError):
    message = "Secure random source unavailable"


class StoreUnavailableError(ChirpyError):
    """The database failed or timed out (503)."""

    status_code = 503
    message = "Storage temporarily unavailable"


__all__ = [
    "ChirpyError",
    "InvalidCredentialsError",
    "UnauthorizedError",
    "TokenError",
    "InvalidSignatureError",
    "TokenExpiredError",
    "MalformedTokenError",
    "IssuerMismatchError",
    "MalformedSubjectError",
    "BearerError",
    "MissingHeaderError",
    "MalformedSchemeError",
    "ValidationError",
    "ForbiddenError",
    "NotFoundError",
    "InactiveTokenError",
    "ConflictError",
    "ServerError",
    "HashError",
    "RandomSourceError",
    "StoreUnavailableError",
]
