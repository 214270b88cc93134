from fastapi import HTTPException

from core.errors import SheetsAPIError
from core.logging_config import logger
from core.sheets_client import SheetsClient, get_sheets_client


def get_sheets() -> SheetsClient:
    """Route dependency; tests swap it through app.dependency_overrides."""
    try:
        return get_sheets_client()
    except SheetsAPIError as e:
        logger.error(f"Spreadsheet client unavailable: {e}")
        raise HTTPException(503, "Spreadsheet backend not configured")
