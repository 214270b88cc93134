# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from core.config import settings

# Must be in place before the app validates its config on startup
settings.SHEETS_API_URL = "https://script.example.test/macros/s/test/exec"
settings.JWT_SECRET_KEY = "test-secret-key"
settings.DEMO_AUTH_ENABLED = False
settings.PROXY_ENABLED = False

from main import create_app  # noqa: E402
from core.notifications import notification_center  # noqa: E402
from core.rate_limiter import clear_rate_limits  # noqa: E402
from core.security import create_access_token  # noqa: E402
from core.sheets_client import SheetsClient  # noqa: E402
from dependencies.sheets import get_sheets  # noqa: E402


# -----------------------------------------------------
# Spreadsheet rows, shaped like the Apps Script output
# -----------------------------------------------------
COMPLAINT_ROWS = [
    {
        "ID": "CMP-001", "Customer Name": "Abebe Kebede", "Title": "Power outage in Bole",
        "Category": "power-outage", "Priority": "critical", "Status": "open",
        "Region": "Addis Ababa", "Created At": "2024-01-15T08:30:00Z",
    },
    {
        "ID": "CMP-002", "Customer Name": "Tigist Haile", "Title": "Voltage fluctuation in Bahir Dar",
        "Category": "voltage-fluctuation", "Priority": "medium", "Status": "in-progress",
        "Region": "Amhara", "Created At": "2024-01-15T07:15:00Z", "Assigned To": "U-4",
    },
    {
        "ID": "CMP-003", "Customer Name": "Almaz Tesfaye", "Title": "Billing issue",
        "Category": "billing-issue", "Priority": "low", "Status": "resolved",
        "Region": "Oromia", "Created At": "2024-01-14T14:30:00Z",
    },
    {
        "ID": "CMP-004", "Customer Name": "Bekele Girma", "Title": "Meter not recording",
        "Category": "meter-problem", "Priority": "high", "Status": "resolved",
        "Region": "Addis Ababa", "Created At": "2024-01-16T09:00:00Z",
    },
    # malformed: no ID
    {"Customer Name": "Nobody", "Title": "Orphan row", "Region": "Addis Ababa"},
    # malformed: numeric region
    {"ID": "CMP-006", "Title": "Numeric region", "Region": 123},
    # valid but unscoped: no region at all
    {"ID": "CMP-007", "Title": "No region", "Status": "open", "Created At": "not a date"},
    # valid: sheet handed back numbers for text cells
    {
        "ID": "CMP-008", "Customer Name": "Kebede Alemu", "Title": "Street light out",
        "Category": "other", "Priority": "low", "Status": "open", "Region": "Tigray",
        "Customer Address": 42, "Description": 7, "Created At": "2024-01-10T12:00:00Z",
    },
]

USER_ROWS = [
    {"ID": "U-1", "Name": "Admin User", "Email": "admin@eeu.gov.et", "Role": "admin", "Region": "Addis Ababa", "Is Active": True},
    {"ID": "U-2", "Name": "Meron Manager", "Email": "manager@eeu.gov.et", "Role": "manager", "Region": "Amhara"},
    {"ID": "U-3", "Name": "Fikru Foreman", "Email": "foreman@eeu.gov.et", "Role": "foreman", "Region": "Oromia"},
    {"ID": "U-4", "Name": "Dawit Solomon", "Email": "technician@eeu.gov.et", "Role": "technician", "Region": "Addis Ababa"},
    {"ID": "U-5", "Name": "Sara Attendant", "Email": "callattendant@eeu.gov.et", "Role": "call-attendant", "Region": "Addis Ababa", "Is Active": "FALSE"},
    {"ID": "U-6", "Name": "Legacy Account", "Email": "legacy@eeu.gov.et", "Role": "supervisor"},
]


def _find_complaint(complaint_id):
    for row in COMPLAINT_ROWS:
        if row.get("ID") == complaint_id:
            return dict(row)
    return None


@pytest.fixture
def sheets() -> Mock:
    """A SheetsClient double serving the rows above."""
    mock_client = Mock(spec=SheetsClient)
    mock_client.get_complaints.return_value = [dict(r) for r in COMPLAINT_ROWS]
    mock_client.get_complaint.side_effect = _find_complaint
    mock_client.get_users.return_value = [dict(r) for r in USER_ROWS]
    mock_client.create_complaint.return_value = {"success": True, "id": "CMP-100"}
    mock_client.update_complaint.return_value = {"success": True}
    mock_client.delete_complaint.return_value = {"success": True}
    mock_client.create_user.return_value = {"success": True, "id": "U-100"}
    mock_client.update_user.return_value = {"success": True}
    mock_client.delete_user.return_value = {"success": True}
    return mock_client


@pytest.fixture(scope="function")
def app(sheets):
    """Create a test FastAPI application instance."""
    application = create_app()
    application.dependency_overrides[get_sheets] = lambda: sheets
    return application


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    """Factory: bearer headers for a signed-in user of the given role."""

    def make(role: str, user_id: str = None, region: str = "Addis Ababa", email: str = None):
        token = create_access_token(
            subject=user_id or f"user-{role}",
            claims={
                "email": email or f"{role}@eeu.gov.et",
                "role": role,
                "name": f"Test {role}",
                "region": region,
            },
        )
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.fixture(autouse=True)
def reset_state():
    """Reset in-process state before each test."""
    notification_center.clear()
    clear_rate_limits()
    yield
    notification_center.clear()
    clear_rate_limits()
