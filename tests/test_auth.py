# tests/test_auth.py

"""
Tests for authentication endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch, Mock

from core.config import settings
from core.errors import SheetsAPIError
from core.security import create_access_token


@pytest.fixture
def demo_auth(monkeypatch):
    monkeypatch.setattr(settings, "DEMO_AUTH_ENABLED", True)
    monkeypatch.setattr(settings, "ENV", "development")


def _sheets_returning(user=None, error=None):
    mock_client = Mock()
    if error is not None:
        mock_client.login.side_effect = error
    else:
        mock_client.login.return_value = user
    return mock_client


def test_login_success(client: TestClient):
    """Test successful login against the Users sheet."""
    user = {"ID": "U-4", "Name": "Dawit Solomon", "Email": "technician@eeu.gov.et",
            "Role": "technician", "Region": "Addis Ababa"}
    with patch("routers.auth.get_sheets", return_value=_sheets_returning(user)) as mock_get:
        response = client.post(
            "/auth/login",
            json={"email": "Technician@EEU.gov.et", "password": "password123"}
        )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["role"] == "technician"
    assert data["region"] == "Addis Ababa"
    mock_get.return_value.login.assert_called_once_with("technician@eeu.gov.et", "password123")

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == "U-4"
    assert me.json()["department"] == "Field Service"


def test_login_invalid_credentials(client: TestClient):
    """Test login with invalid credentials."""
    refused = SheetsAPIError("login: Invalid credentials", error="Invalid credentials")
    with patch("routers.auth.get_sheets", return_value=_sheets_returning(error=refused)):
        response = client.post(
            "/auth/login",
            json={"email": "test@example.com", "password": "wrongpassword"}
        )

    assert response.status_code == 401
    assert "Invalid email or password" in response.json()["detail"]


def test_login_backend_down(client: TestClient):
    broken = SheetsAPIError("getUsers failed with HTTP 500", status_code=500)
    with patch("routers.auth.get_sheets", return_value=_sheets_returning(error=broken)):
        response = client.post(
            "/auth/login",
            json={"email": "test@example.com", "password": "password123"}
        )

    assert response.status_code == 502


@pytest.mark.parametrize("body,detail", [
    ({"email": "", "password": "password123"}, "Please enter both email and password."),
    ({"email": "admin@eeu.gov.et", "password": ""}, "Please enter both email and password."),
    ({"email": "not-an-email", "password": "password123"}, "Please enter a valid email address."),
    ({"email": "admin@eeu.gov.et", "password": "12345"}, "Password must be at least 6 characters long."),
])
def test_login_input_validation(client: TestClient, body, detail):
    with patch("routers.auth.get_sheets") as mock_get:
        response = client.post("/auth/login", json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == detail
    mock_get.assert_not_called()


def test_login_deactivated_account(client: TestClient):
    user = {"ID": "U-5", "Email": "callattendant@eeu.gov.et", "Role": "call-attendant", "Is Active": "FALSE"}
    with patch("routers.auth.get_sheets", return_value=_sheets_returning(user)):
        response = client.post(
            "/auth/login",
            json={"email": "callattendant@eeu.gov.et", "password": "password123"}
        )

    assert response.status_code == 403
    assert response.json()["detail"] == "Account is deactivated"


def test_login_unknown_role(client: TestClient):
    user = {"ID": "U-6", "Email": "legacy@eeu.gov.et", "Role": "supervisor"}
    with patch("routers.auth.get_sheets", return_value=_sheets_returning(user)):
        response = client.post(
            "/auth/login",
            json={"email": "legacy@eeu.gov.et", "password": "password123"}
        )

    assert response.status_code == 403
    assert response.json()["detail"] == "Account has no valid role"


def test_login_rate_limiting(client: TestClient, monkeypatch):
    """Repeated failures lock the email out for the window."""
    monkeypatch.setattr(settings, "LOGIN_MAX_ATTEMPTS", 3)
    refused = SheetsAPIError("login: Invalid credentials", error="Invalid credentials")

    with patch("routers.auth.get_sheets", return_value=_sheets_returning(error=refused)) as mock_get:
        for _ in range(3):
            response = client.post(
                "/auth/login",
                json={"email": "test@example.com", "password": "wrongpassword"}
            )
            assert response.status_code == 401

        response = client.post(
            "/auth/login",
            json={"email": "test@example.com", "password": "wrongpassword"}
        )

    assert response.status_code == 429
    assert "Retry-After" in response.headers
    assert mock_get.return_value.login.call_count == 3


def test_demo_login(client: TestClient, demo_auth):
    with patch("routers.auth.get_sheets") as mock_get:
        response = client.post(
            "/auth/login",
            json={"email": "foreman@eeu.gov.et", "password": "foreman123"}
        )

    assert response.status_code == 200
    assert response.json()["role"] == "foreman"
    mock_get.assert_not_called()


def test_demo_login_requires_matching_password(client: TestClient, demo_auth):
    response = client.post(
        "/auth/login",
        json={"email": "foreman@eeu.gov.et", "password": "admin123"}
    )
    assert response.status_code == 401


def test_me_requires_token(client: TestClient):
    response = client.get("/auth/me")
    assert response.status_code in (401, 403)


@pytest.mark.parametrize("token", [
    "not-a-jwt",
    create_access_token(subject="U-1", claims={"email": "x@eeu.gov.et", "role": "supervisor"}),
    create_access_token(subject="U-1", claims={"role": "admin"}),
])
def test_me_rejects_bad_tokens(client: TestClient, token):
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_my_permissions(client: TestClient, auth_headers):
    response = client.get("/auth/permissions", headers=auth_headers("foreman", region="Oromia"))

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "foreman"
    assert data["accessible_regions"] == ["Addis Ababa", "Oromia"]
    assert data["scope"] == "Oromia"
    assert data["dashboard_title"] == "Field Operations Dashboard"
    assert data["permissions"]["complaints"]["delete"] is False


def test_my_permissions_admin(client: TestClient, auth_headers):
    data = client.get("/auth/permissions", headers=auth_headers("admin")).json()
    assert data["accessible_regions"] == "all"
    assert data["scope"] == "all regions"
