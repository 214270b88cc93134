# routers/users.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from core import access_control
from core.errors import SHEETS_ERRORS, handle_sheets_error
from core.logging_config import logger
from core.sheets_client import SheetsClient
from core.sheets_helpers import find_user, load_users
from dependencies.auth import CurrentUser, requires_permission
from dependencies.sheets import get_sheets
from models.enums import Action, Resource, Role
from models.user import RoleChange, StaffUser, StatusChange, UserCreate, UserUpdate


router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


# -----------------------------------------------------
# Helper: may the caller hand out this role?
# -----------------------------------------------------
def require_grantable(current_user: CurrentUser, role: Role):
    if not access_control.can_grant_role(current_user.role, role):
        raise HTTPException(
            status_code=403,
            detail=f"Your role cannot grant '{role.value}'",
        )


def require_manageable(current_user: CurrentUser, target: StaffUser):
    # Nobody edits an account ranked above what they could grant
    if target.role in Role.list() and not access_control.can_grant_role(current_user.role, target.role):
        raise HTTPException(403, f"Your role cannot change a '{target.role}' account")


def _write(operation: str, call):
    try:
        return call()
    except SHEETS_ERRORS as e:
        raise handle_sheets_error(e, operation)


# -----------------------------------------------------
# LIST USERS
# -----------------------------------------------------
@router.get("", summary="List staff users", response_model=List[StaffUser])
def list_users(
    search: Optional[str] = None,
    role: Optional[Role] = None,
    current_user: CurrentUser = Depends(requires_permission(Resource.users, Action.read)),
    client: SheetsClient = Depends(get_sheets),
):
    users = load_users(client)

    if role is not None:
        users = [u for u in users if u.role == role.value]

    if search:
        needle = search.strip().lower()
        users = [u for u in users if needle in u.name.lower() or needle in u.email.lower()]

    return users


# -----------------------------------------------------
# CREATE USER
# -----------------------------------------------------
@router.post("", summary="Create staff user", status_code=201)
def create_user(
    payload: UserCreate,
    current_user: CurrentUser = Depends(requires_permission(Resource.users, Action.create)),
    client: SheetsClient = Depends(get_sheets),
):
    require_grantable(current_user, payload.role)

    result = _write("Failed to create user", lambda: client.create_user(payload.to_sheet_payload()))
    logger.info(f"{current_user.email} created {payload.role.value} account for {payload.email}")

    user_id = result.get("id") if isinstance(result, dict) else None
    return {"success": True, "id": user_id}


# -----------------------------------------------------
# UPDATE USER
# -----------------------------------------------------
@router.patch("/{user_id}", summary="Update staff user")
def update_user(
    user_id: str,
    payload: UserUpdate,
    current_user: CurrentUser = Depends(requires_permission(Resource.users, Action.update)),
    client: SheetsClient = Depends(get_sheets),
):
    if payload.role is not None:
        require_grantable(current_user, payload.role)

    changes = payload.to_sheet_payload()
    if not changes:
        raise HTTPException(400, "No changes supplied")

    target = find_user(client, user_id)
    require_manageable(current_user, target)
    _write("Failed to update user", lambda: client.update_user(user_id, changes))
    return {"success": True, "id": user_id}


@router.patch("/{user_id}/role", summary="Change a user's role")
def change_user_role(
    user_id: str,
    payload: RoleChange,
    current_user: CurrentUser = Depends(requires_permission(Resource.users, Action.update)),
    client: SheetsClient = Depends(get_sheets),
):
    require_grantable(current_user, payload.role)

    target = find_user(client, user_id)
    require_manageable(current_user, target)

    _write("Failed to update user role", lambda: client.update_user(user_id, {"role": payload.role.value}))
    logger.info(f"{current_user.email} changed role of {target.email} to {payload.role.value}")
    return {"success": True, "id": user_id, "role": payload.role.value}


@router.patch("/{user_id}/status", summary="Activate or deactivate a user")
def change_user_status(
    user_id: str,
    payload: StatusChange,
    current_user: CurrentUser = Depends(requires_permission(Resource.users, Action.update)),
    client: SheetsClient = Depends(get_sheets),
):
    if user_id == current_user.id and not payload.is_active:
        raise HTTPException(400, "You cannot deactivate your own account")

    target = find_user(client, user_id)
    require_manageable(current_user, target)
    _write("Failed to update user status", lambda: client.update_user(user_id, {"isActive": payload.is_active}))
    return {"success": True, "id": user_id, "is_active": payload.is_active}


# -----------------------------------------------------
# DELETE USER
# -----------------------------------------------------
@router.delete("/{user_id}", summary="Delete staff user")
def delete_user(
    user_id: str,
    current_user: CurrentUser = Depends(requires_permission(Resource.users, Action.delete)),
    client: SheetsClient = Depends(get_sheets),
):
    if user_id == current_user.id:
        raise HTTPException(400, "You cannot delete your own account")

    find_user(client, user_id)
    _write("Failed to delete user", lambda: client.delete_user(user_id))
    logger.info(f"User {user_id} deleted by {current_user.email}")
    return {"success": True}
