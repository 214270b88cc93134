# tests/test_notifications.py

"""
Tests for the in-app notification inbox.
"""

import pytest
from fastapi.testclient import TestClient

from core.notifications import MAX_INBOX_SIZE, NotificationCenter, notification_center
from models.enums import NotificationType


def test_inbox_is_newest_first_and_per_user():
    center = NotificationCenter()
    center.push("U-1", title="First", message="one")
    center.push("U-1", title="Second", message="two", action_required=True)
    center.push("U-2", title="Other", message="three")

    assert [n.title for n in center.list("U-1")] == ["Second", "First"]
    assert [n.title for n in center.list("U-1", "action-required")] == ["Second"]
    assert center.list("U-9") == []


def test_inbox_drops_oldest_beyond_cap():
    center = NotificationCenter()
    for i in range(MAX_INBOX_SIZE + 5):
        center.push("U-1", title=f"n{i}", message="m")

    inbox = center.list("U-1")
    assert len(inbox) == MAX_INBOX_SIZE
    assert inbox[0].title == f"n{MAX_INBOX_SIZE + 4}"
    assert inbox[-1].title == "n5"


def test_unknown_filter_is_rejected():
    with pytest.raises(ValueError):
        NotificationCenter().list("U-1", "starred")


def test_summary_counts_unread_only():
    center = NotificationCenter()
    first = center.push("U-1", title="A", message="a", action_required=True)
    center.push("U-1", title="B", message="b", type=NotificationType.warning, action_required=True)
    center.mark_read("U-1", first.id)

    summary = center.summary("U-1")
    assert summary.total == 2
    assert summary.unread == 1
    assert summary.action_required == 1
    assert summary.by_type == {"info": 1, "warning": 1}


def test_notification_endpoints(client: TestClient, auth_headers):
    headers = auth_headers("technician", user_id="U-4")
    note = notification_center.push("U-4", title="Assigned", message="CMP-001", action_required=True)
    notification_center.push("U-4", title="FYI", message="hello")

    assert len(client.get("/notifications", headers=headers).json()) == 2
    assert client.get("/notifications/summary", headers=headers).json()["unread"] == 2

    assert client.post(f"/notifications/{note.id}/read", headers=headers).status_code == 200
    unread = client.get("/notifications?filter=unread", headers=headers).json()
    assert [n["title"] for n in unread] == ["FYI"]

    assert client.post("/notifications/read-all", headers=headers).json() == {"success": True, "updated": 1}

    assert client.delete(f"/notifications/{note.id}", headers=headers).status_code == 200
    assert client.delete(f"/notifications/{note.id}", headers=headers).status_code == 404


def test_other_users_notifications_are_invisible(client: TestClient, auth_headers):
    note = notification_center.push("U-4", title="Private", message="x")
    headers = auth_headers("admin", user_id="U-1")

    assert client.get("/notifications", headers=headers).json() == []
    assert client.post(f"/notifications/{note.id}/read", headers=headers).status_code == 404


def test_bad_filter_is_422(client: TestClient, auth_headers):
    response = client.get("/notifications?filter=starred", headers=auth_headers("admin"))
    assert response.status_code == 422
