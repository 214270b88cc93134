# tests/test_analytics.py

"""
Tests for dashboard counters and analytics.
"""

from datetime import datetime

from fastapi.testclient import TestClient

from core.analytics import analytics_report, category_breakdown, sort_recent_first
from models.complaint import Complaint


def _complaint(id, **fields):
    return Complaint(id=id, **fields)


def test_dashboard_stats_are_region_scoped(client: TestClient, auth_headers):
    response = client.get("/dashboard/stats", headers=auth_headers("technician"))
    assert response.status_code == 200
    assert response.json() == {
        "scope": "Addis Ababa",
        "total": 2,
        "open": 1,
        "in_progress": 0,
        "resolved": 1,
        "closed": 0,
        "cancelled": 0,
        "critical": 1,
        "high_priority": 1,
    }


def test_dashboard_stats_for_unrestricted_role(client: TestClient, auth_headers):
    data = client.get("/dashboard/stats", headers=auth_headers("call-attendant")).json()
    assert data["scope"] == "all regions"
    assert data["total"] == 5
    assert data["in_progress"] == 1


def test_analytics_requires_reports_read(client: TestClient, auth_headers):
    response = client.get("/analytics", headers=auth_headers("technician"))
    assert response.status_code == 403


def test_analytics_report(client: TestClient, auth_headers):
    response = client.get("/analytics", headers=auth_headers("manager"))
    assert response.status_code == 200
    data = response.json()

    assert data["total"] == 5
    assert data["resolved"] == 2
    assert data["resolution_rate"] == 40.0
    assert data["critical_rate"] == 20.0
    assert [r["region"] for r in data["regions"]] == ["Addis Ababa", "Amhara", "Oromia", "Tigray"]
    assert data["regions"][0] == {"region": "Addis Ababa", "total": 2, "open": 1, "resolved": 1}
    assert [c["category"] for c in data["categories"]] == [
        "power-outage", "voltage-fluctuation", "billing-issue", "meter-problem", "other",
    ]


def test_foreman_analytics_cover_own_regions(client: TestClient, auth_headers):
    data = client.get("/analytics", headers=auth_headers("foreman")).json()
    assert data["total"] == 3
    assert [r["region"] for r in data["regions"]] == ["Addis Ababa", "Oromia"]


def test_sort_recent_first_puts_undated_last():
    complaints = [
        _complaint("A", created_at="2024-01-01T00:00:00Z"),
        _complaint("B", created_at="garbage"),
        _complaint("C", created_at="2024-03-01T00:00:00Z"),
        _complaint("D"),
    ]
    assert [c.id for c in sort_recent_first(complaints)][:2] == ["C", "A"]


def test_category_breakdown_sorted_by_count():
    complaints = [
        _complaint("1", category="billing-issue"),
        _complaint("2", category="power-outage"),
        _complaint("3", category="power-outage"),
        _complaint("4", category="not-a-category"),
    ]
    rows = category_breakdown(complaints)
    assert rows == [
        {"category": "power-outage", "count": 2, "percentage": 50.0},
        {"category": "billing-issue", "count": 1, "percentage": 25.0},
    ]


def test_analytics_report_this_week_and_empty_input():
    now = datetime(2024, 1, 20)
    complaints = [
        _complaint("1", created_at="2024-01-18T10:00:00Z"),
        _complaint("2", created_at="2024-01-01T10:00:00Z"),
    ]
    assert analytics_report(complaints, now=now)["this_week"] == 1

    empty = analytics_report([], now=now)
    assert empty["total"] == 0
    assert empty["resolution_rate"] == 0.0
    assert empty["regions"] == []
