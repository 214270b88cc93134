# routers/notifications.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from core.notifications import NotificationCenter, get_notification_center
from dependencies.auth import CurrentUser, get_current_user
from models.notification import Notification, NotificationSummary


router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
)


@router.get("", summary="List my notifications", response_model=List[Notification])
def list_notifications(
    filter: str = Query("all", pattern="^(all|unread|action-required)$"),
    current_user: CurrentUser = Depends(get_current_user),
    center: NotificationCenter = Depends(get_notification_center),
):
    return center.list(current_user.id, filter)


@router.get("/summary", summary="Notification counters", response_model=NotificationSummary)
def notification_summary(
    current_user: CurrentUser = Depends(get_current_user),
    center: NotificationCenter = Depends(get_notification_center),
):
    return center.summary(current_user.id)


@router.post("/read-all", summary="Mark all notifications read")
def mark_all_read(
    current_user: CurrentUser = Depends(get_current_user),
    center: NotificationCenter = Depends(get_notification_center),
):
    return {"success": True, "updated": center.mark_all_read(current_user.id)}


@router.post("/{notification_id}/read", summary="Mark one notification read")
def mark_read(
    notification_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    center: NotificationCenter = Depends(get_notification_center),
):
    if not center.mark_read(current_user.id, notification_id):
        raise HTTPException(404, "Notification not found")
    return {"success": True}


@router.delete("/{notification_id}", summary="Delete a notification")
def delete_notification(
    notification_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    center: NotificationCenter = Depends(get_notification_center),
):
    if not center.delete(current_user.id, notification_id):
        raise HTTPException(404, "Notification not found")
    return {"success": True}
