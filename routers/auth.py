import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from core import access_control
from core.config import settings, is_development
from core.errors import SHEETS_ERRORS, SheetsAPIError, InvalidArgument, handle_sheets_error
from core.logging_config import logger
from core.permissions import DASHBOARD_TITLES, DEPARTMENTS
from core.rate_limiter import (
    get_rate_limit_identifier,
    record_failure,
    require_not_blocked,
    reset_failures,
)
from core.security import create_access_token
from dependencies.auth import CurrentUser, get_current_user
from dependencies.sheets import get_sheets
from models.auth import LoginRequest, TokenResponse
from models.enums import Region, Role
from models.user import StaffUser


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


# ============================================================
# DEMO ACCOUNTS (development only)
# ============================================================
DEMO_ACCOUNTS = {
    "admin@eeu.gov.et": (Role.admin, "admin123"),
    "manager@eeu.gov.et": (Role.manager, "manager123"),
    "foreman@eeu.gov.et": (Role.foreman, "foreman123"),
    "callattendant@eeu.gov.et": (Role.call_attendant, "attendant123"),
    "technician@eeu.gov.et": (Role.technician, "tech123"),
}


def _demo_login(email: str, password: str) -> Optional[StaffUser]:
    account = DEMO_ACCOUNTS.get(email)
    if not account or account[1] != password:
        return None
    role = account[0]
    return StaffUser(
        id=f"demo-{role.value}",
        name=email.split("@")[0].title(),
        email=email,
        role=role.value,
        region=Region.addis_ababa.value,
    )


def _sheets_login(email: str, password: str) -> Optional[StaffUser]:
    client = get_sheets()
    try:
        raw = client.login(email, password)
    except SheetsAPIError as e:
        # A backend-supplied error string means the credentials were refused
        if e.error:
            return None
        raise handle_sheets_error(e, "Login failed")
    except SHEETS_ERRORS as e:
        raise handle_sheets_error(e, "Login failed")

    try:
        return StaffUser.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Login returned a malformed user for {email}: {e}")
        raise HTTPException(502, "Login failed: malformed user record")


# ============================================================
# LOGIN
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate staff user")
def login(payload: LoginRequest, request: Request):

    email = payload.email.strip().lower()
    password = payload.password

    if not email or not password:
        raise HTTPException(400, "Please enter both email and password.")
    if not EMAIL_RE.match(email):
        raise HTTPException(400, "Please enter a valid email address.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(400, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")

    identifier = get_rate_limit_identifier(request, email)
    require_not_blocked(identifier, settings.LOGIN_MAX_ATTEMPTS, settings.LOGIN_WINDOW_SECONDS)

    if settings.DEMO_AUTH_ENABLED and is_development():
        user = _demo_login(email, password)
    else:
        user = _sheets_login(email, password)

    if user is None:
        record_failure(identifier)
        logger.warning(f"Login attempt failed for {email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user.is_active:
        raise HTTPException(403, "Account is deactivated")

    try:
        role = access_control.parse_role(user.role)
    except InvalidArgument:
        logger.error(f"User {email} has unknown role {user.role!r} in the Users sheet")
        raise HTTPException(403, "Account has no valid role")

    reset_failures(identifier)

    region = user.region or None
    token = create_access_token(
        subject=user.id,
        claims={
            "email": email,
            "role": role.value,
            "name": user.name or None,
            "region": region,
            "department": user.department or DEPARTMENTS[role],
        },
    )
    logger.info(f"{email} signed in as {role.value}")

    return TokenResponse(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        role=role.value,
        region=region,
    )


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/me", response_model=CurrentUser, summary="Current authenticated user")
def read_me(current_user: CurrentUser = Depends(get_current_user)):
    return current_user


@router.get("/permissions", summary="What the current user may see and do")
def read_my_permissions(current_user: CurrentUser = Depends(get_current_user)):
    """
    Permission matrix, region access and capabilities for the caller's role,
    plus the dashboard title and region scope label.
    """
    return {
        **access_control.describe_role(current_user.role),
        "dashboard_title": DASHBOARD_TITLES[current_user.role],
        "scope": access_control.region_scope_label(current_user.role, current_user.region),
    }
