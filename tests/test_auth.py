"""Tests for registration, login and token validation."""

from fastapi.testclient import TestClient

from conftest import DEFAULT_PASSWORD

REGISTRATION = {
    "email": "student@example.com",
    "password": "hunter22",
    "name": "Sam Student",
    "country": "EG",
    "phone_number": "0100000000",
    "guardian_phone": "0111111111",
    "current_location": "Cairo",
}


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_returns_token_and_student(self, client: TestClient) -> None:
        response = client.post("/api/auth/register", json=REGISTRATION)
        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "student@example.com"
        assert body["user"]["role"] == "student"
        assert "password_hash" not in body["user"]

    def test_duplicate_email(self, client: TestClient) -> None:
        client.post("/api/auth/register", json=REGISTRATION)
        response = client.post("/api/auth/register", json=REGISTRATION)
        assert response.status_code == 409
        assert response.json() == {"error": "Email already exists"}

    def test_short_password_and_blank_fields(self, client: TestClient) -> None:
        payload = dict(REGISTRATION, password="123", name="   ")
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert "password" in body["details"]
        assert "name" in body["details"]


class TestLogin:
    """Tests for POST /api/auth/login and GET /api/validate-token."""

    def test_login_and_validate(self, client: TestClient, make_user) -> None:
        make_user(email="login@example.com")
        response = client.post(
            "/api/auth/login",
            json={"email": "login@example.com", "password": DEFAULT_PASSWORD},
        )
        assert response.status_code == 200
        token = response.json()["token"]

        response = client.get(
            "/api/validate-token", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 200
        assert response.json()["valid"] is True
        assert response.json()["user"]["email"] == "login@example.com"

    def test_wrong_password(self, client: TestClient, make_user) -> None:
        make_user(email="login@example.com")
        response = client.post(
            "/api/auth/login",
            json={"email": "login@example.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_validate_without_token(self, client: TestClient) -> None:
        assert client.get("/api/validate-token").status_code == 401
