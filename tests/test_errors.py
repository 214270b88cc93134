# tests/test_errors.py

"""
Tests for error mapping, startup config validation and health checks.
"""

import pytest
import requests
from fastapi.testclient import TestClient
from unittest.mock import patch

from core import config_validator
from core.config import settings
from core.errors import InvalidArgument, SheetsAPIError, extract_sheets_error, handle_sheets_error


def test_invalid_argument_message():
    err = InvalidArgument("resource", "invoices")
    assert err.kind == "resource"
    assert err.value == "invoices"
    assert str(err) == "Unknown resource: 'invoices'"


@pytest.mark.parametrize("error,status_code", [
    (requests.Timeout("read timed out"), 504),
    (SheetsAPIError("getReports", error="Invalid action: getReports"), 501),
    (SheetsAPIError("createUser", error="User already exists"), 400),
    (SheetsAPIError("updateUser", error="User not found"), 404),
    (SheetsAPIError("getComplaints failed with HTTP 500", status_code=500), 502),
    (requests.ConnectionError("connection refused"), 502),
])
def test_handle_sheets_error(error, status_code):
    exc = handle_sheets_error(error, "Failed to do the thing")
    assert exc.status_code == status_code
    assert exc.detail.startswith("Failed to do the thing")


def test_extract_prefers_backend_message():
    assert extract_sheets_error(SheetsAPIError("wrapper", error="Sheet locked")) == "Sheet locked"
    assert extract_sheets_error(SheetsAPIError("wrapper")) == "wrapper"


def test_startup_requires_sheets_url(monkeypatch):
    monkeypatch.setattr(settings, "SHEETS_API_URL", None)
    assert config_validator.validate_required_config() == ["SHEETS_API_URL"]
    with pytest.raises(RuntimeError, match="SHEETS_API_URL"):
        config_validator.validate_config_on_startup()


def test_demo_auth_outside_development_warns(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    monkeypatch.setattr(settings, "DEMO_AUTH_ENABLED", True)
    assert "DEMO_AUTH_ENABLED is ignored outside development" in config_validator.validate_optional_config()


def test_health_app(client: TestClient):
    assert client.get("/health/app").json()["status"] == "ok"


def test_health_sheets(client: TestClient):
    report = {"service": "Sheets", "status": "ok", "actions": {}}
    with patch("routers.health.ping_sheets", return_value=report):
        response = client.get("/health/sheets")
    assert response.status_code == 200
    assert response.json() == report


def test_proxy_not_mounted_by_default(client: TestClient):
    assert client.get("/api?action=getComplaints").status_code == 404


def test_startup_tolerates_route_entries_without_a_path(app):
    # Newer FastAPI lists included routers in app.routes without .path/.methods
    app.router.routes.append(object())

    with TestClient(app) as test_client:
        assert test_client.app is app
