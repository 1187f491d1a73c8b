import base64
import json
import time

from ari.models.user import User
from ari.repositories.user_repository import UserRepository


def _tamper_subject(token: str, subject: str) -> str:
    header, _, signature = token.split(".")
    claims = {"sub": subject, "exp": int(time.time()) + 3600}
    payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return f"{header}.{payload}.{signature}"


def test_register_login_and_authenticated_request(client):
    response = client.post(
        "/auth/register",
        json={"email": "alice@example.com", "password": "s3cret!", "name": "Alice"},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "alice@example.com"
    assert created["name"] == "Alice"
    assert created["is_active"] is True
    assert "password" not in created
    assert "hashed_password" not in created

    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "s3cret!"}
    )
    assert response.status_code == 200
    token = response.json()["accessToken"]

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    tampered = _tamper_subject(token, str(created["id"] + 1))
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {tampered}"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_login_unknown_email_and_wrong_password(client, register):
    register("alice@example.com", "s3cret!", "Alice")

    response = client.post(
        "/auth/login", json={"email": "ghost@example.com", "password": "s3cret!"}
    )
    assert response.status_code == 404
    assert "accessToken" not in response.json()

    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "wrong-pass"}
    )
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid credentials"}


def test_register_duplicate_email_conflicts(client, register, session_factory):
    register("alice@example.com")

    response = client.post(
        "/auth/register",
        json={"email": "alice@example.com", "password": "another!", "name": "Alice 2"},
    )
    assert response.status_code == 409

    session = session_factory()
    try:
        assert session.query(User).filter(User.email == "alice@example.com").count() == 1
    finally:
        session.close()


def test_register_race_is_caught_by_unique_constraint(client, register, monkeypatch):
    register("alice@example.com")
    # Both requests passed the existence check before either inserted
    monkeypatch.setattr(UserRepository, "find_by_email", lambda self, email: None)

    response = client.post(
        "/auth/register",
        json={"email": "alice@example.com", "password": "another!", "name": "Alice 2"},
    )
    assert response.status_code == 409
    assert "UNIQUE constraint failed" in response.json()["detail"]
    assert "\n" not in response.json()["detail"]


def test_register_validation_errors(client):
    response = client.post(
        "/auth/register", json={"email": "nope", "password": "123"}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == [
        {"field": "email", "message": "Email is not a valid address."},
        {"field": "password", "message": "Password must be at least 6 characters long."},
        {"field": "name", "message": "Name must not be empty."},
    ]


def test_login_requires_both_fields(client):
    response = client.post("/auth/login", json={"email": "alice@example.com"})
    assert response.status_code == 400
    assert response.json()["detail"] == [
        {"field": "password", "message": "Password must not be empty."}
    ]


def test_oauth2_token_endpoint(client, register):
    register("alice@example.com", "s3cret!", "Alice")

    response = client.post(
        "/auth/token", data={"username": "alice@example.com", "password": "s3cret!"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"

    response = client.get(
        "/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"}
    )
    assert response.status_code == 200


def test_register_rejects_password_with_nul_character(client):
    response = client.post(
        "/auth/register",
        json={"email": "alice@example.com", "password": "abc\u0000def", "name": "Alice"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == [
        {"field": "password", "message": "Password must not contain NUL characters."}
    ]


def test_login_with_nul_character_in_password_is_unauthorized(client, register):
    register("alice@example.com", "s3cret!", "Alice")
    response = client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "s3c\u0000ret!"}
    )
    assert response.status_code == 401
