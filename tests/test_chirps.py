# =============================================================================================
# TESTS/TEST_CHIRPS.PY - CHIRP ENDPOINT TESTS
# =============================================================================================
# Protected routes: POST /api/chirps, DELETE /api/chirps/{chirp_id}
# Public routes:    GET /api/chirps, GET /api/chirps/{chirp_id}
# =============================================================================================

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from app.core.config import Settings, get_settings
from app.core.tokens import issue_access_token
from app.main import app
from app.models.chirp import Chirp
from helpers import TEST_SECRET, bearer, login, register

GENERIC_401 = "Could not validate credentials"


def _post(client, body, token):
    return client.post("/api/chirps", json={"body": body}, headers=bearer(token))


# =============================================================================================
# CREATE
# =============================================================================================

def test_create_chirp(client):
    user = register(client)
    tokens = login(client)

    response = _post(client, "I'm the one who knocks!", tokens["token"])

    assert response.status_code == 201
    data = response.json()
    assert data["body"] == "I'm the one who knocks!"
    assert data["user_id"] == user["id"]
    assert "id" in data
    assert "created_at" in data
    assert "updated_at" in data


def test_create_chirp_cleans_profanity(client):
    register(client)
    tokens = login(client)

    response = _post(client, "What a Kerfuffle that was, fornax!", tokens["token"])

    assert response.status_code == 201
    assert response.json()["body"] == "What a **** that was, fornax!"


def test_create_chirp_too_long(client, db_session):
    """Over the limit with a valid token → 400 and nothing stored."""
    register(client)
    tokens = login(client)

    response = _post(client, "a" * 141, tokens["token"])

    assert response.status_code == 400
    assert response.json()["detail"] == "Chirp is too long"
    assert db_session.query(Chirp).count() == 0


def test_create_chirp_limit_counts_bytes(client):
    register(client)
    tokens = login(client)

    assert _post(client, "a" * 140, tokens["token"]).status_code == 201
    # 47 three-byte characters = 141 bytes
    assert _post(client, "€" * 47, tokens["token"]).status_code == 400


def test_create_chirp_without_token(client):
    response = client.post("/api/chirps", json={"body": "hello"})

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_auth_is_checked_before_length(client):
    """A too-long chirp without valid credentials is a 401, not a 400."""
    response = client.post("/api/chirps", json={"body": "a" * 500})
    assert response.status_code == 401

    response = _post(client, "a" * 500, "invalid.token.string")
    assert response.status_code == 401


def test_auth_is_checked_before_body_validation(client):
    response = client.post("/api/chirps", json={})

    assert response.status_code == 401


def test_unparseable_json_is_rejected_before_the_guard(client):
    """The body is read before dependencies run, so broken JSON is a 422 even without a token."""
    response = client.post(
        "/api/chirps",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422


def test_create_chirp_garbage_token(client):
    response = _post(client, "hello", "garbage")

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_create_chirp_after_user_is_deleted(client, db_session):
    """An access token that outlives its user (e.g. after a reset) is a 401."""
    register(client)
    tokens = login(client)
    app.dependency_overrides[get_settings] = lambda: Settings(JWT_SECRET=TEST_SECRET, PLATFORM="dev")
    assert client.post("/admin/reset").status_code == 200

    response = _post(client, "hello", tokens["token"])

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401
    assert db_session.query(Chirp).count() == 0


def test_create_chirp_expired_token(client):
    user = register(client)
    issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
    token = issue_access_token(UUID(user["id"]), TEST_SECRET, timedelta(hours=1), now=issued_at)

    response = _post(client, "hello", token)

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401


def test_create_chirp_token_signed_with_other_secret(client):
    user = register(client)
    token = issue_access_token(UUID(user["id"]), "some-other-secret-some-other-secret-0000", timedelta(hours=1))

    response = _post(client, "hello", token)

    assert response.status_code == 401
    assert response.json()["detail"] == GENERIC_401


def test_create_chirp_with_refresh_token_fails(client):
    register(client)
    tokens = login(client)

    response = _post(client, "hello", tokens["refresh_token"])

    assert response.status_code == 401


# =============================================================================================
# READ
# =============================================================================================

def test_list_chirps_oldest_first(client):
    register(client)
    tokens = login(client)
    for body in ("first", "second", "third"):
        _post(client, body, tokens["token"])

    response = client.get("/api/chirps")

    assert response.status_code == 200
    assert [chirp["body"] for chirp in response.json()] == ["first", "second", "third"]


def test_list_chirps_empty(client):
    response = client.get("/api/chirps")

    assert response.status_code == 200
    assert response.json() == []


def test_get_chirp(client):
    register(client)
    tokens = login(client)
    chirp = _post(client, "hello", tokens["token"]).json()

    response = client.get(f"/api/chirps/{chirp['id']}")

    assert response.status_code == 200
    assert response.json() == chirp


def test_get_chirp_not_found(client):
    response = client.get(f"/api/chirps/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["detail"] == "Chirp not found"


def test_get_chirp_invalid_id(client):
    response = client.get("/api/chirps/not-a-uuid")

    assert response.status_code == 422


# =============================================================================================
# DELETE
# =============================================================================================

def test_delete_own_chirp(client):
    register(client)
    tokens = login(client)
    chirp = _post(client, "hello", tokens["token"]).json()

    response = client.delete(f"/api/chirps/{chirp['id']}", headers=bearer(tokens["token"]))

    assert response.status_code == 204
    assert client.get(f"/api/chirps/{chirp['id']}").status_code == 404


def test_delete_someone_elses_chirp(client):
    register(client)
    walt = login(client)
    chirp = _post(client, "hello", walt["token"]).json()

    register(client, email="jesse@breakingbad.com", password="654321")
    jesse = login(client, email="jesse@breakingbad.com", password="654321")

    response = client.delete(f"/api/chirps/{chirp['id']}", headers=bearer(jesse["token"]))

    assert response.status_code == 403
    assert client.get(f"/api/chirps/{chirp['id']}").status_code == 200


def test_delete_chirp_not_found(client):
    register(client)
    tokens = login(client)

    response = client.delete(f"/api/chirps/{uuid4()}", headers=bearer(tokens["token"]))

    assert response.status_code == 404


def test_delete_chirp_without_token(client):
    register(client)
    tokens = login(client)
    chirp = _post(client, "hello", tokens["token"]).json()

    response = client.delete(f"/api/chirps/{chirp['id']}")

    assert response.status_code == 401
