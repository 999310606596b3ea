"""Tests for the redemption and enrollment endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient

from core.dependencies import get_redemption_service
from core.exceptions import StoreError
from app import app


class TestRedeemCode:
    """Tests for POST /api/redeem-code."""

    def test_redeem_scenario(
        self, client: TestClient, make_user, make_class, make_code, auth_headers
    ) -> None:
        """First redemption succeeds, the second user is told the code is used."""
        first = make_user(user_id=7)
        second = make_user(user_id=9)
        make_code(make_class(class_id=42, price=Decimal("25")), "ABC12345")

        response = client.post(
            "/api/redeem-code", json={"code": "ABC12345"}, headers=auth_headers(first)
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["classId"] == 42

        response = client.post(
            "/api/redeem-code", json={"code": "ABC12345"}, headers=auth_headers(second)
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid or already used code"}

    def test_already_has_access(
        self, client: TestClient, make_user, make_class, make_code, auth_headers
    ) -> None:
        user = make_user()
        class_model = make_class(price=Decimal("25"))
        make_code(class_model, "FIRST001")
        make_code(class_model, "SECOND02")
        headers = auth_headers(user)

        client.post("/api/redeem-code", json={"code": "FIRST001"}, headers=headers)
        response = client.post("/api/redeem-code", json={"code": "SECOND02"}, headers=headers)

        assert response.status_code == 400
        assert response.json() == {"error": "You already have access to this class"}

    def test_store_error_is_500(self, client: TestClient, make_user, auth_headers) -> None:
        """Database failures are reported with a 500 and the error message."""

        class BrokenRedemption:
            def redeem(self, user_id, code):
                raise StoreError("Database error during redemption")

        app.dependency_overrides[get_redemption_service] = lambda: BrokenRedemption()
        response = client.post(
            "/api/redeem-code", json={"code": "ABC12345"}, headers=auth_headers(make_user())
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Database error during redemption"}

    def test_requires_token(self, client: TestClient) -> None:
        response = client.post("/api/redeem-code", json={"code": "ABC12345"})
        assert response.status_code == 401

    def test_rejects_bad_token(self, client: TestClient) -> None:
        response = client.post(
            "/api/redeem-code",
            json={"code": "ABC12345"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 403

    def test_missing_code_is_validation_error(
        self, client: TestClient, make_user, auth_headers
    ) -> None:
        response = client.post("/api/redeem-code", json={}, headers=auth_headers(make_user()))
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestEnrollFree:
    """Tests for POST /api/enroll-free."""

    def test_enroll_scenario(self, client: TestClient, make_user, make_class, auth_headers) -> None:
        """Enrolling twice in free class 5 is refused the second time."""
        headers = auth_headers(make_user(user_id=3))
        make_class(class_id=5)

        response = client.post("/api/enroll-free", json={"classId": 5}, headers=headers)
        assert response.status_code == 200
        assert response.json()["classId"] == 5

        response = client.post("/api/enroll-free", json={"classId": 5}, headers=headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Already enrolled in this class"}

    def test_accepts_snake_case_body(
        self, client: TestClient, make_user, make_class, auth_headers
    ) -> None:
        class_model = make_class()
        response = client.post(
            "/api/enroll-free",
            json={"class_id": class_model.id},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 200

    def test_paid_class(self, client: TestClient, make_user, make_class, auth_headers) -> None:
        class_model = make_class(price=Decimal("10"))
        response = client.post(
            "/api/enroll-free",
            json={"classId": class_model.id},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Class not found or not free"}


class TestAccessReads:
    """Tests for /api/my-classes and /api/check-access."""

    def test_my_classes_and_check_access(
        self, client: TestClient, make_user, make_class, auth_headers
    ) -> None:
        headers = auth_headers(make_user())
        class_model = make_class(title="Optics")

        response = client.get(f"/api/check-access/{class_model.id}", headers=headers)
        assert response.json() == {"hasAccess": False}

        client.post("/api/enroll-free", json={"classId": class_model.id}, headers=headers)

        response = client.get(f"/api/check-access/{class_model.id}", headers=headers)
        assert response.json() == {"hasAccess": True}
        response = client.get("/api/my-classes", headers=headers)
        assert response.status_code == 200
        assert [c["title"] for c in response.json()] == ["Optics"]
