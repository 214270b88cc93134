# routers/complaints.py

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from core import access_control
from core.analytics import sort_recent_first
from core.errors import SHEETS_ERRORS, InvalidArgument, handle_sheets_error
from core.logging_config import logger
from core.notifications import notify_assignment, notify_critical_complaint
from core.sheets_client import SheetsClient
from core.sheets_helpers import load_complaint, load_complaints, load_users
from dependencies.auth import CurrentUser, requires_permission, require_region_access
from dependencies.sheets import get_sheets
from models.complaint import Complaint, ComplaintCreate, ComplaintUpdate
from models.enums import Action, ComplaintPriority, ComplaintStatus, Resource


router = APIRouter(
    prefix="/complaints",
    tags=["Complaints"],
)

_HIGH = (ComplaintPriority.high, ComplaintPriority.critical)


# -----------------------------------------------------
# Helper: search / status / priority filters
# -----------------------------------------------------
def matches_filters(
    complaint: Complaint,
    search: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
) -> bool:
    if status and complaint.status != status:
        return False
    if priority and complaint.priority != priority:
        return False
    if search:
        needle = search.strip().lower()
        haystack = (complaint.title, complaint.customer_name, complaint.id)
        if not any(needle in (field or "").lower() for field in haystack):
            return False
    return True


def visible_complaints(client: SheetsClient, current_user: CurrentUser) -> List[Complaint]:
    """Complaints in the regions the caller's role may see."""
    return access_control.filter_by_region_access(current_user.role, load_complaints(client))


# -----------------------------------------------------
# Helper: who hears about a critical complaint
# -----------------------------------------------------
def _critical_recipients(client: SheetsClient, region: str) -> List[str]:
    recipients = []
    for user in load_users(client):
        if not user.is_active:
            continue
        try:
            if (
                access_control.can_assign_complaint(user.role)
                and access_control.can_access_region(user.role, region)
            ):
                recipients.append(user.id)
        except InvalidArgument:
            # Users sheet rows with a role we don't know get nothing
            continue
    return recipients


# -----------------------------------------------------
# LIST COMPLAINTS
# -----------------------------------------------------
@router.get("", summary="List complaints", response_model=List[Complaint])
def list_complaints(
    search: Optional[str] = None,
    status: Optional[ComplaintStatus] = None,
    priority: Optional[ComplaintPriority] = None,
    current_user: CurrentUser = Depends(requires_permission(Resource.complaints, Action.read)),
    client: SheetsClient = Depends(get_sheets),
):
    complaints = [
        c for c in visible_complaints(client, current_user)
        if matches_filters(
            c,
            search=search,
            status=status.value if status else None,
            priority=priority.value if priority else None,
        )
    ]
    return sort_recent_first(complaints)


# -----------------------------------------------------
# RECENT COMPLAINTS (dashboard card)
# -----------------------------------------------------
@router.get("/recent", summary="Most recent complaints", response_model=List[Complaint])
def recent_complaints(
    limit: int = Query(5, ge=1, le=50),
    current_user: CurrentUser = Depends(requires_permission(Resource.complaints, Action.read)),
    client: SheetsClient = Depends(get_sheets),
):
    return sort_recent_first(visible_complaints(client, current_user))[:limit]


# -----------------------------------------------------
# GET ONE
# -----------------------------------------------------
@router.get("/{complaint_id}", summary="Complaint details", response_model=Complaint)
def get_complaint(
    complaint_id: str,
    current_user: CurrentUser = Depends(requires_permission(Resource.complaints, Action.read)),
    client: SheetsClient = Depends(get_sheets),
):
    complaint = load_complaint(client, complaint_id)
    require_region_access(current_user, complaint.region)
    return complaint


# -----------------------------------------------------
# CREATE
# -----------------------------------------------------
@router.post("", summary="Submit a complaint", status_code=201)
def create_complaint(
    payload: ComplaintCreate,
    current_user: CurrentUser = Depends(requires_permission(Resource.complaints, Action.create)),
    client: SheetsClient = Depends(get_sheets),
):
    if payload.priority not in access_control.allowed_priorities(current_user.role):
        raise HTTPException(403, f"Your role cannot set '{payload.priority.value}' priority")

    region = payload.region.value if payload.region else current_user.region
    if not region:
        raise HTTPException(400, "Region is required")
    require_region_access(current_user, region)

    try:
        result = client.create_complaint(payload.to_sheet_payload(created_by=current_user.id, region=region))
    except SHEETS_ERRORS as e:
        raise handle_sheets_error(e, "Failed to create complaint")

    complaint_id = result.get("id") if isinstance(result, dict) else None
    logger.info(f"Complaint {complaint_id} created by {current_user.email} in {region}")

    if payload.priority == ComplaintPriority.critical:
        try:
            notify_critical_complaint(
                _critical_recipients(client, region), complaint_id, payload.title, region
            )
        except HTTPException as e:
            logger.warning(f"Critical complaint {complaint_id} saved but not announced: {e.detail}")

    return {"success": True, "id": complaint_id}


# -----------------------------------------------------
# UPDATE
# -----------------------------------------------------
@router.patch("/{complaint_id}", summary="Update a complaint")
def update_complaint(
    complaint_id: str,
    payload: ComplaintUpdate,
    current_user: CurrentUser = Depends(requires_permission(Resource.complaints, Action.update)),
    client: SheetsClient = Depends(get_sheets),
):
    existing = load_complaint(client, complaint_id)
    require_region_access(current_user, existing.region)

    if payload.region is not None:
        require_region_access(current_user, payload.region)

    reassigned = payload.assigned_to is not None and payload.assigned_to != existing.assigned_to
    if reassigned and not access_control.can_assign_complaint(current_user.role):
        raise HTTPException(403, "Your role cannot assign complaints")

    if payload.priority in _HIGH and not access_control.can_set_high_priority(current_user.role):
        raise HTTPException(403, f"Your role cannot set '{payload.priority.value}' priority")

    changes = payload.to_sheet_payload()
    if not changes:
        raise HTTPException(400, "No changes supplied")

    now = datetime.utcnow().isoformat()
    changes["updatedAt"] = now
    if reassigned:
        changes["assignedBy"] = current_user.id
    if payload.status == ComplaintStatus.resolved and existing.status != ComplaintStatus.resolved.value:
        changes["resolvedAt"] = now

    try:
        client.update_complaint(complaint_id, changes)
    except SHEETS_ERRORS as e:
        raise handle_sheets_error(e, "Failed to update complaint")

    if reassigned:
        notify_assignment(
            payload.assigned_to,
            complaint_id,
            payload.title or existing.title,
            current_user.name or current_user.email,
        )

    return {"success": True, "id": complaint_id}


# -----------------------------------------------------
# DELETE
# -----------------------------------------------------
@router.delete("/{complaint_id}", summary="Delete a complaint")
def delete_complaint(
    complaint_id: str,
    current_user: CurrentUser = Depends(requires_permission(Resource.complaints, Action.delete)),
    client: SheetsClient = Depends(get_sheets),
):
    existing = load_complaint(client, complaint_id)
    require_region_access(current_user, existing.region)

    try:
        client.delete_complaint(complaint_id)
    except SHEETS_ERRORS as e:
        raise handle_sheets_error(e, "Failed to delete complaint")

    logger.info(f"Complaint {complaint_id} deleted by {current_user.email}")
    return {"success": True}
