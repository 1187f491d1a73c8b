import os

# Settings are read at import time, so the environment is set up first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from ari.core.database import Base, build_engine, get_db
from ari.core.security import PasswordHasher, TokenService
from ari.main import app


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenService(secret_key="test-secret-key", algorithm="HS256", expire_minutes=5)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    def _register(email="alice@example.com", password="s3cret!", name="Alice"):
        response = client.post(
            "/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def auth_headers(client, register):
    register("owner@example.com", "owner-pass", "Owner")
    response = client.post(
        "/auth/login",
        json={"email": "owner@example.com", "password": "owner-pass"},
    )
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
