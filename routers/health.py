# routers/health.py

from fastapi import APIRouter
from core.sheets_client import ping_sheets

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/sheets
# Reads both sheets through the web app
# No auth required
# -----------------------------------------------------
@router.get("/sheets", summary="Spreadsheet backend health check")
def health_sheets():
    """
    Verifies the Apps Script deployment answers.
    - Checks the URL is configured
    - Reads the Complaints and Users sheets
    - Returns row-count + error details per action

    Safe for external health monitors (no auth required).
    """
    return ping_sheets()


# -----------------------------------------------------
# GET /health/app
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    return {
        "service": "EEU Complaint API",
        "status": "ok",
    }
