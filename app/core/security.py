# =============================================================================================
# APP/CORE/SECURITY.PY - CREDENTIAL PRIMITIVES
# =============================================================================================
# This module provides the low-level cryptographic building blocks for authentication:
# 1. Password hashing with argon2 (one-way, salted, memory-hard)
# 2. Password verification against a stored hash
# 3. Opaque refresh token generation (32 random bytes, hex-encoded)
#
# Access token signing/verification lives in app/core/tokens.py.
#
# SECURITY PRINCIPLES:
# - Never store plaintext passwords (store the argon2 hash)
# - Refresh tokens are random, not derived from anything guessable
# - A broken random source is an error, never a silent fallback
# =============================================================================================

import secrets  # Cryptographically secure random bytes (os.urandom underneath)

from passlib.context import CryptContext  # Password hashing wrapper (argon2 backend)

from app.core.errors import HashError, RandomSourceError

# Length of an opaque refresh token in random bytes (hex output is twice as long)
REFRESH_TOKEN_BYTES = 32

# -------------------------
# PASSWORD HASHING SETUP (ARGON2)
# -------------------------
# CryptContext is a high-level password hashing wrapper from passlib.
# It handles salting, cost parameters, and algorithm selection automatically.
#
# Example hash (argon2 format):
#   $argon2id$v=19$m=65536,t=3,p=4$c2FsdHNhbHQ$aGFzaGhhc2hoYXNo...
#   │         │    │               │           └─ Hash
#   │         │    │               └─ Salt (random per call)
#   │         │    └─ Memory cost / time cost / parallelism
#   │         └─ Argon2 version
#   └─ Variant (argon2id)
#
# The stored hash is self-describing, so swapping or adding a scheme here keeps old
# hashes verifiable (deprecated="auto").
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)


# =============================================================================================
# PASSWORD HASHING FUNCTIONS
# =============================================================================================

def hash_password(password: str) -> str:
    """
    Hash a plaintext password using argon2.

    Same password → different hash each time (random salt embedded in the output).

    USAGE:
        hashed = hash_password("MySecurePassword123!")
        # Store `hashed` in database (NOT the plaintext password)

    Args:
        password: The plaintext password to hash (e.g., from registration form)

    Returns:
        Argon2 hash string (e.g., "$argon2id$v=19$...")

    Raises:
        HashError: The hashing backend failed (missing backend, resource exhaustion)
    """
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError, RuntimeError) as exc:
        raise HashError() from exc


def check_password_hash(password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored argon2 hash.

    FLOW:
    1. Read algorithm, parameters and salt from the stored hash
    2. Hash the plaintext password with the same salt/parameters
    3. Compare the two digests in constant time
    4. Return True if they match, False otherwise

    USAGE:
        if check_password_hash(data.password, user.hashed_password):
            # Password correct → issue tokens

    Args:
        password: The password to check (e.g., from login form)
        hashed_password: The stored hash from database

    Returns:
        True if password matches, False otherwise (a mismatch is not an error)

    Raises:
        HashError: The stored hash is malformed or uses an unknown scheme
    """
    try:
        return pwd_context.verify(password, hashed_password)
    except (ValueError, TypeError) as exc:
        raise HashError("Stored password hash is malformed") from exc


# =============================================================================================
# OPAQUE TOKEN GENERATION
# =============================================================================================

def generate_opaque_token() -> str:
    """
    Generate a refresh token: 32 secure random bytes, hex-encoded (64 characters).

    The token carries no information. It is only meaningful as a key into the
    refresh_tokens table.

    Raises:
        RandomSourceError: The OS random source is unavailable
    """
    try:
        raw = secrets.token_bytes(REFRESH_TOKEN_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceError() from exc
    return raw.hex()
