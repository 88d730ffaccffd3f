# Request helpers shared by the endpoint tests

TEST_SECRET = "test-secret-used-only-by-the-test-suite-0123456789"


def register(client, email="walt@breakingbad.com", password="123456"):
    response = client.post("/api/users", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def login(client, email="walt@breakingbad.com", password="123456"):
    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
