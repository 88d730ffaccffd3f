# =============================================================================================
# TESTS/TEST_AUTH.PY - AUTHENTICATION ENDPOINT TESTS
# =============================================================================================
# This module tests the full authentication flow against an in-memory SQLite database
# (fixtures in tests/conftest.py).
#
# TEST STRATEGY:
# - Test entire flow: register → login → refresh → revoke
# - Test error cases: duplicate email, wrong password, missing header, revoked tokens
#
# RUNNING TESTS:
#   pytest tests/test_auth.py -v
#   pytest -v  # Run all tests
# =============================================================================================

import re
from datetime import datetime, timedelta, timezone
from uuid import UUID

from app.core.tokens import verify_access_token
from app.models.token import RefreshToken
from helpers import TEST_SECRET, bearer, login, register

GENERIC_401 = "Could not validate credentials"


# =============================================================================================
# HEALTH
# =============================================================================================

def test_healthz(client):
    response = client.get("/api/healthz")

    assert response.status_code == 200
    assert response.text == "OK"


# =============================================================================================
# REGISTRATION TESTS
# =============================================================================================

def test_register_success(client):
    """Test successful user registration."""
    response = client.post(
        "/api/users",
        json={"email": "walt@breakingbad.com", "password": "123456"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "walt@breakingbad.com"
    assert UUID(data["id"])
    assert "created_at" in data
    assert "updated_at" in data
    assert "password" not in data  # Password should never be returned
    assert "hashed_password" not in data


def test_register_duplicate_email(client):
    """Test that registering with an existing email fails."""
    register(client)

    response = client.post(
        "/api/users",
        json={"email": "walt@breakingbad.com", "password": "different"},
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


def test_register_invalid_email(client):
    response = client.post("/api/users", json={"email": "not-an-email", "password": "123456"})

    assert response.status_code == 422


def test_register_empty_password(client):
    response = client.post("/api/users", json={"email": "walt@breakingbad.com", "password": ""})

    assert response.status_code == 422


# =============================================================================================
# LOGIN TESTS
# =============================================================================================

def test_login_success(client):
    """Login returns the profile plus an access token and a refresh token."""
    user = register(client)

    response = client.post(
        "/api/login",
        json={"email": "walt@breakingbad.com", "password": "123456"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == user["id"]
    assert data["email"] == "walt@breakingbad.com"
    assert verify_access_token(data["token"], TEST_SECRET) == UUID(user["id"])
    assert re.fullmatch(r"[0-9a-f]{64}", data["refresh_token"])
    assert data["refresh_token"] != data["token"]


def test_login_stores_refresh_token_for_sixty_days(client, db_session):
    user = register(client)
    before = datetime.now(timezone.utc).replace(tzinfo=None)

    tokens = login(client)

    record = db_session.get(RefreshToken, tokens["refresh_token"])
    assert record is not None
    assert record.user_id == user["id"]
    assert record.revoked_at is None
    # SQLite hands back naive UTC datetimes
    expires_at = record.expires_at.replace(tzinfo=None)
    assert before + timedelta(days=59, hours=23) < expires_at <= before + timedelta(days=60, minutes=1)


def test_each_login_gets_a_new_refresh_token(client):
    register(client)

    first = login(client)
    second = login(client)

    assert first["refresh_token"] != second["refresh_token"]


def test_login_wrong_password(client):
    """Test login with incorrect password."""
    register(client)

    response = client.post(
        "/api/login",
        json={"email": "walt@breakingbad.com", "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_nonexistent_user(client):
    """Unknown email gets exactly the same answer as a wrong password."""
    response = client.post(
        "/api/login",
        json={"email": "nobody@example.com", "password": "password"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


# =============================================================================================
# REFRESH TESTS
# =============================================================================================

def test_refresh_success(client):
    """Test getting a new access token with the refresh token."""
    user = register(client)
    tokens = login(client)

    response = client.post("/api/refresh", headers=bearer(tokens["refresh_token"]))

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"token"}
    assert verify_access_token(data["token"], TEST_SECRET) == UUID(user["id"])


def test_refresh_does_not_rotate(client):
    register(client)
    tokens = login(client)

    first = client.post("/api/refresh", headers=bearer(tokens["refresh_token"]))
    second = client.post("/api/refresh", headers=bearer(tokens["refresh_token"]))

    assert first.status_code == 200
    assert second.status_code == 200


def test_refresh_missing_header(client):
    response = client.post("/api/refresh")

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_refresh_wrong_scheme(client):
    register(client)
    tokens = login(client)

    response = client.post(
        "/api/refresh",
        headers={"Authorization": f"Token {tokens['refresh_token']}"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401


def test_refresh_unknown_token(client):
    response = client.post("/api/refresh", headers=bearer("0" * 64))

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401


def test_refresh_with_access_token_fails(client):
    """The access JWT is not a refresh token."""
    register(client)
    tokens = login(client)

    response = client.post("/api/refresh", headers=bearer(tokens["token"]))

    assert response.status_code == 401


def test_refresh_expired_token(client, db_session):
    register(client)
    tokens = login(client)

    record = db_session.get(RefreshToken, tokens["refresh_token"])
    record.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
    db_session.commit()

    response = client.post("/api/refresh", headers=bearer(tokens["refresh_token"]))

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401


# =============================================================================================
# REVOKE TESTS
# =============================================================================================

def test_revoke_success(client):
    """After revoke, the refresh token can no longer be used."""
    register(client)
    tokens = login(client)

    response = client.post("/api/revoke", headers=bearer(tokens["refresh_token"]))

    assert response.status_code == 204
    assert response.content == b""

    response = client.post("/api/refresh", headers=bearer(tokens["refresh_token"]))
    assert response.status_code == 401


def test_revoke_twice_fails(client):
    register(client)
    tokens = login(client)

    client.post("/api/revoke", headers=bearer(tokens["refresh_token"]))
    response = client.post("/api/revoke", headers=bearer(tokens["refresh_token"]))

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401


def test_revoke_only_affects_that_token(client):
    register(client)
    first = login(client)
    second = login(client)

    client.post("/api/revoke", headers=bearer(first["refresh_token"]))
    response = client.post("/api/refresh", headers=bearer(second["refresh_token"]))

    assert response.status_code == 200


def test_revoke_missing_header(client):
    response = client.post("/api/revoke")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_access_token_survives_revoke(client):
    """Revoking the refresh token does not invalidate access tokens already issued."""
    register(client)
    tokens = login(client)

    client.post("/api/revoke", headers=bearer(tokens["refresh_token"]))
    response = client.post(
        "/api/chirps",
        json={"body": "Still here"},
        headers=bearer(tokens["token"]),
    )

    assert response.status_code == 201
