from fastapi.testclient import TestClient

from conftest import login
from travelsage.main import create_app
from travelsage.repositories.seed import DEMO_PASSWORD

COOKIE = "travelsage_session"


def test_register_sets_session_cookie(client):
    response = client.post("/api/auth/register", json={
        "username": "alice",
        "password": "wonderland1",
        "email": "alice@travelmail.com",
        "firstName": "Alice",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "alice"
    assert body["firstName"] == "Alice"
    assert body["isAdmin"] is False
    assert "passwordHash" not in body and "password" not in body
    assert COOKIE in response.cookies

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["id"] == body["id"]


def test_register_duplicate_username(client):
    response = client.post("/api/auth/register", json={"username": "johndoe", "password": "long-enough-1"})
    assert response.status_code == 409
    assert response.json()["error"] == "Conflict"


def test_register_validation_errors(client):
    response = client.post("/api/auth/register", json={"username": "bob"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "ValidationError"
    assert "password" in [error["field"] for error in body["details"]["errors"]]

    short = client.post("/api/auth/register", json={"username": "bob", "password": "short"})
    assert short.status_code == 400
    assert short.json()["details"]["errors"][0]["field"] == "password"


def test_login_with_bad_credentials(client):
    response = client.post("/api/auth/login", json={"username": "johndoe", "password": "nope-nope"})
    assert response.status_code == 401
    assert response.json() == {
        "error": "AuthenticationError",
        "message": "Invalid credentials",
        "details": {},
    }


def test_me_requires_a_session(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "AuthenticationError"


def test_bearer_header_is_accepted(app):
    browser = TestClient(app)
    response = browser.post("/api/auth/login", json={"username": "janedoe", "password": DEMO_PASSWORD})
    session_id = response.cookies[COOKIE]

    api_client = TestClient(app)
    me = api_client.get("/api/auth/me", headers={"Authorization": f"Bearer {session_id}"})
    assert me.status_code == 200
    assert me.json()["username"] == "janedoe"


def test_logout_ends_the_session(auth_client):
    assert auth_client.get("/api/auth/me").status_code == 200

    response = auth_client.post("/api/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}
    assert auth_client.get("/api/auth/me").status_code == 401

    # Logging out again is harmless
    assert auth_client.post("/api/auth/logout").status_code == 200


def test_update_profile(auth_client):
    response = auth_client.patch("/api/auth/me", json={"firstName": "Johnny"})
    assert response.status_code == 200
    assert response.json()["firstName"] == "Johnny"
    assert response.json()["lastName"] == "Doe"

    invalid = auth_client.patch("/api/auth/me", json={"email": "not-an-email"})
    assert invalid.status_code == 400
    assert invalid.json()["details"]["errors"][0]["field"] == "email"


def test_change_password(app, auth_client):
    wrong = auth_client.post("/api/auth/password", json={
        "currentPassword": "guess-guess", "newPassword": "another-password",
    })
    assert wrong.status_code == 401

    response = auth_client.post("/api/auth/password", json={
        "currentPassword": DEMO_PASSWORD, "newPassword": "another-password",
    })
    assert response.status_code == 200
    assert response.json() == {"message": "Password updated successfully"}
    login(TestClient(app), "johndoe", "another-password")


def test_admin_user_list(auth_client, admin_client):
    assert auth_client.get("/api/admin/users").status_code == 403

    response = admin_client.get("/api/admin/users")
    assert response.status_code == 200
    usernames = {user["username"] for user in response.json()}
    assert {"johndoe", "janedoe", "admin"} <= usernames
    assert all("passwordHash" not in user for user in response.json())


def test_login_is_rate_limited(build_container):
    client = TestClient(create_app(build_container(LOGIN_ATTEMPTS_PER_MINUTE=2)))
    for _ in range(2):
        client.post("/api/auth/login", json={"username": "johndoe", "password": "wrong-wrong"})

    response = client.post("/api/auth/login", json={"username": "johndoe", "password": DEMO_PASSWORD})
    assert response.status_code == 429
    assert response.json()["error"] == "RateLimitExceeded"
    assert response.json()["details"] == {"limit": 2, "windowSeconds": 60}
