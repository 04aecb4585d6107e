import os

os.environ.setdefault("EDUTRACKERS_DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from edutrackers.db import Base, enable_sqlite_foreign_keys, get_db
from edutrackers.main import app
from edutrackers.provisioning import sign_up

# Use in-memory SQLite for testing to ensure isolation
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def session():
    """
    Create a fresh database session for each test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(session):
    """
    Create a TestClient that uses the override_get_db dependency.
    """
    def override_get_db():
        try:
            yield session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_profile(session):
    """Sign up directly through the provisioning service and return the profile."""

    def _make(email: str, role: str = "student", **metadata):
        return sign_up(session, email, "password123", {"role": role, **metadata})

    return _make


@pytest.fixture
def login(client):
    """Sign up over HTTP and return ``(profile_id, auth_headers)``."""

    def _login(email: str, role: str = "student", **extra):
        resp = client.post(
            "/api/auth/signup",
            json={"email": email, "password": "password123", "role": role,
                  "full_name": email.split("@")[0], **extra},
        )
        assert resp.status_code == 201, resp.text
        profile_id = resp.json()["id"]
        token_resp = client.post(
            "/api/auth/login", data={"username": email, "password": "password123"}
        )
        assert token_resp.status_code == 200, token_resp.text
        token = token_resp.json()["access_token"]
        return profile_id, {"Authorization": f"Bearer {token}"}

    return _login
