from fastapi.testclient import TestClient


def test_signup_student(client: TestClient):
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "student1@example.com",
            "password": "password123",
            "full_name": "Test Student",
            "role": "student",
            "roll_number": "CS-01",
            "course": "Computer Science",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "student1@example.com"
    assert data["role"] == "student"
    assert data["roll_number"] == "CS-01"
    assert "id" in data


def test_signup_teacher(client: TestClient):
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "teacher1@example.com",
            "password": "password123",
            "full_name": "Test Teacher",
            "role": "teacher",
            "department": "Physics",
        },
    )
    assert response.status_code == 201
    assert response.json()["department"] == "Physics"


def test_signup_unknown_role_rejected(client: TestClient):
    response = client.post(
        "/api/auth/signup",
        json={"email": "x@example.com", "password": "password123", "role": "admin"},
    )
    assert response.status_code == 422


def test_signup_duplicate_email(client: TestClient):
    payload = {"email": "dup@example.com", "password": "password123"}
    assert client.post("/api/auth/signup", json=payload).status_code == 201
    response = client.post("/api/auth/signup", json=payload)
    assert response.status_code == 409
    assert response.json()["constraint"] == "identities_email_key"


def test_login_and_me(client: TestClient, login):
    profile_id, headers = login("me@example.com", "teacher")
    response = client.get("/api/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["id"] == profile_id
    assert response.json()["role"] == "teacher"


def test_login_invalid_password(client: TestClient):
    client.post("/api/auth/signup", json={"email": "u2@example.com", "password": "password123"})
    response = client.post(
        "/api/auth/login",
        data={"username": "u2@example.com", "password": "wrongpassword"},
    )
    assert response.status_code == 401


def test_protected_endpoint_requires_token(client: TestClient):
    assert client.get("/api/assignments/").status_code == 401
    bad = {"Authorization": "Bearer not-a-token"}
    assert client.get("/api/assignments/", headers=bad).status_code == 401


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok"}
