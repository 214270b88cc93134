# routers/analytics.py

from fastapi import APIRouter, Depends

from core import access_control
from core.analytics import analytics_report, dashboard_stats
from core.sheets_client import SheetsClient
from core.sheets_helpers import load_complaints
from dependencies.auth import CurrentUser, get_current_user, requires_permission
from dependencies.sheets import get_sheets
from models.enums import Action, Resource


router = APIRouter(tags=["Analytics"])


# -----------------------------------------------------
# GET /dashboard/stats
# Counters for the dashboard cards; every signed-in role
# -----------------------------------------------------
@router.get("/dashboard/stats", summary="Dashboard counters")
def get_dashboard_stats(
    current_user: CurrentUser = Depends(get_current_user),
    client: SheetsClient = Depends(get_sheets),
):
    complaints = access_control.filter_by_region_access(current_user.role, load_complaints(client))
    scope = access_control.region_scope_label(current_user.role, current_user.region)
    return dashboard_stats(complaints, scope)


# -----------------------------------------------------
# GET /analytics
# Breakdown by region and category; needs reports:read
# -----------------------------------------------------
@router.get("/analytics", summary="Complaint analytics")
def get_analytics(
    current_user: CurrentUser = Depends(requires_permission(Resource.reports, Action.read)),
    client: SheetsClient = Depends(get_sheets),
):
    complaints = access_control.filter_by_region_access(current_user.role, load_complaints(client))
    return analytics_report(complaints)
