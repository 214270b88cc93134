# core/errors.py

from typing import Optional

import requests
from fastapi import HTTPException


class InvalidArgument(ValueError):
    """
    A role, resource, action or region name outside its fixed enumeration.

    Raised by the access-control engine. Almost always a programming error
    (typo'd resource name, stale role string) so it is never swallowed.
    """

    def __init__(self, kind: str, value):
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value!r}")


class SheetsAPIError(Exception):
    """
    Failure talking to the spreadsheet web app.

    `status_code` is the upstream HTTP status when there was one.
    `error` is the backend's own `{"error": ...}` string when it sent one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, error: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.error = error
        super().__init__(message)


def extract_sheets_error(error: Exception) -> str:
    """
    Safely extract readable details from spreadsheet client errors.
    Handles:
      • SheetsAPIError (backend {"error": ...} payloads)
      • requests errors (timeouts, connection resets, HTTP status)
      • Generic Python exceptions
    """

    # Case 1: our own wrapper, prefer the backend's message
    if isinstance(error, SheetsAPIError):
        return str(error.error or error.message)

    # Case 2: requests HTTP errors carry the response
    if isinstance(error, requests.HTTPError) and error.response is not None:
        return f"HTTP {error.response.status_code}"

    # Case 3: errors with args (common)
    if getattr(error, "args", None):
        return str(error.args[0])

    # Case 4: plain string fallback
    return str(error) or "Unknown spreadsheet error"


def handle_sheets_error(error: Exception, operation: str = "Spreadsheet operation") -> HTTPException:
    """
    Map spreadsheet failures onto HTTP errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred
        operation: Description of what failed (e.g., "Failed to create complaint")

    Returns:
        HTTPException with standardized error message
    """
    from core.logging_config import logger

    error_detail = extract_sheets_error(error)
    logger.error(f"{operation}: {error_detail}")

    if isinstance(error, requests.Timeout):
        return HTTPException(status_code=504, detail=f"{operation}: spreadsheet backend timed out")

    error_lower = error_detail.lower()
    if "invalid action" in error_lower:
        return HTTPException(
            status_code=501,
            detail=f"{operation}: not yet implemented in the backend",
        )
    elif "duplicate" in error_lower or "already exists" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=502, detail=f"{operation} failed")


# Everything a spreadsheet call can raise
SHEETS_ERRORS = (SheetsAPIError, requests.RequestException)
