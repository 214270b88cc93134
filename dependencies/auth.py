from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import BaseModel

from core import access_control
from core.errors import InvalidArgument
from core.logging_config import logger
from core.security import decode_access_token
from models.enums import Action, Resource, Role


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (decoded from the session token)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    role: Role

    name: Optional[str] = None
    region: Optional[str] = None
    department: Optional[str] = None


# ============================================================
# AUTH DECODING (validates JWT, role must be known)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise unauthorized

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        raise unauthorized

    try:
        role = access_control.parse_role(payload.get("role"))
    except InvalidArgument:
        logger.warning(f"Token for {email} carries unknown role {payload.get('role')!r}")
        raise unauthorized

    return CurrentUser(
        id=user_id,
        email=email,
        role=role,
        name=payload.get("name"),
        region=payload.get("region"),
        department=payload.get("department"),
    )


# ============================================================
# PERMISSION CHECK (matrix lookup)
# ============================================================
def requires_permission(resource: Resource, action: Action):
    """
    Usage:
        @router.post("", dependencies=[Depends(requires_permission(Resource.complaints, Action.create))])

    Returns the current user so routes can take it as their dependency.
    """
    resource = access_control.parse_resource(resource)
    action = access_control.parse_action(action)

    def dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not access_control.has_permission(current_user.role, resource, action):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{resource.value}:{action.value}' required",
            )
        return current_user

    return dependency


def require_region_access(user: CurrentUser, region) -> None:
    """403 unless the user's role may see `region`."""
    if not access_control.can_access_region(user.role, region):
        raise HTTPException(
            status_code=403,
            detail="You do not have access to this region",
        )
