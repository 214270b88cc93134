# core/sheets_client.py

from typing import Any, Dict, List, Optional

import requests

from core.cache import SnapshotCache
from core.config import settings
from core.errors import SheetsAPIError
from core.logging_config import logger


COMPLAINTS_KEY = "getComplaints"
USERS_KEY = "getUsers"


# ============================================================
# Spreadsheet web-app client
#   GET  {url}?action=getComplaints
#   POST {url}  {"action": "createComplaint", ...}
# ============================================================
class SheetsClient:

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        cache: Optional[SnapshotCache] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.cache = cache or SnapshotCache(ttl_seconds=0)
        self.session = session or requests.Session()

    # -----------------------------------------------------
    # Transport
    # -----------------------------------------------------
    def _unwrap(self, action: str, response: requests.Response) -> Any:
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise SheetsAPIError(
                f"{action} failed with HTTP {response.status_code}",
                status_code=response.status_code,
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            # Apps Script answers with an HTML login page when the deployment isn't public
            raise SheetsAPIError(f"{action} returned a non-JSON response") from e

        if isinstance(data, dict):
            if data.get("error"):
                raise SheetsAPIError(f"{action}: {data['error']}", error=str(data["error"]))
            if data.get("success") is False:
                raise SheetsAPIError(
                    f"{action} was rejected by the backend",
                    error=str(data.get("message") or "rejected"),
                )
        return data

    def get(self, action: str, **params) -> Any:
        query = {"action": action, **params}
        logger.debug(f"Sheets GET {action} {params}")
        try:
            response = self.session.get(self.base_url, params=query, timeout=self.timeout)
        except requests.Timeout:
            raise
        except requests.RequestException as e:
            raise SheetsAPIError(f"{action} request failed: {e}") from e
        return self._unwrap(action, response)

    def post(self, action: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        body = {"action": action, **(payload or {})}
        logger.debug(f"Sheets POST {action}")
        try:
            response = self.session.post(self.base_url, json=body, timeout=self.timeout)
        except requests.Timeout:
            raise
        except requests.RequestException as e:
            raise SheetsAPIError(f"{action} request failed: {e}") from e
        return self._unwrap(action, response)

    # -----------------------------------------------------
    # Complaints
    # -----------------------------------------------------
    def get_complaints(self) -> List[Any]:
        return self.cache.get_or_load(COMPLAINTS_KEY, lambda: self.get(COMPLAINTS_KEY))

    def get_complaint(self, complaint_id: str) -> Optional[Dict[str, Any]]:
        """
        Single-row fetch. Older deployments answer `getComplaint` with the
        whole sheet, so a list response is searched for the id.
        """
        data = self.get("getComplaint", id=complaint_id)

        if isinstance(data, dict) and (data.get("ID") or data.get("id")):
            return data

        if isinstance(data, list):
            for row in data:
                if isinstance(row, dict) and complaint_id in (str(row.get("ID")), str(row.get("id"))):
                    return row

        return None

    def create_complaint(self, payload: Dict[str, Any]) -> Any:
        result = self.post("createComplaint", payload)
        self.cache.invalidate(COMPLAINTS_KEY)
        return result

    def update_complaint(self, complaint_id: str, payload: Dict[str, Any]) -> Any:
        result = self.post("updateComplaint", {"id": complaint_id, **payload})
        self.cache.invalidate(COMPLAINTS_KEY)
        return result

    def delete_complaint(self, complaint_id: str) -> Any:
        result = self.post("deleteComplaint", {"id": complaint_id})
        self.cache.invalidate(COMPLAINTS_KEY)
        return result

    # -----------------------------------------------------
    # Users
    # -----------------------------------------------------
    def get_users(self) -> List[Any]:
        return self.cache.get_or_load(USERS_KEY, lambda: self.get(USERS_KEY))

    def create_user(self, payload: Dict[str, Any]) -> Any:
        result = self.post("createUser", payload)
        self.cache.invalidate(USERS_KEY)
        return result

    def update_user(self, user_id: str, payload: Dict[str, Any]) -> Any:
        result = self.post("updateUser", {"id": user_id, **payload})
        self.cache.invalidate(USERS_KEY)
        return result

    def delete_user(self, user_id: str) -> Any:
        result = self.post("deleteUser", {"id": user_id})
        self.cache.invalidate(USERS_KEY)
        return result

    # -----------------------------------------------------
    # Auth
    # -----------------------------------------------------
    def login(self, email: str, password: str) -> Dict[str, Any]:
        """Returns the backend's user object; raises SheetsAPIError on bad credentials."""
        data = self.post("login", {"email": email, "password": password})
        user = data.get("user") if isinstance(data, dict) else None
        if not isinstance(user, dict):
            raise SheetsAPIError("login returned no user", error="Invalid credentials")
        return user


# ============================================================
# Client factory (one per process)
# ============================================================
_client: Optional[SheetsClient] = None


def get_sheets_client() -> SheetsClient:
    global _client
    if _client is None:
        if not settings.SHEETS_API_URL:
            raise SheetsAPIError("SHEETS_API_URL is not configured")
        _client = SheetsClient(
            settings.SHEETS_API_URL,
            timeout=settings.SHEETS_TIMEOUT_SECONDS,
            cache=SnapshotCache(ttl_seconds=settings.SHEETS_CACHE_TTL_SECONDS),
        )
    return _client


def reset_sheets_client():
    global _client
    _client = None


# ============================================================
# Ping the spreadsheet for health checks
# ============================================================
def ping_sheets() -> dict:
    """
    Connectivity check. Reads both sheets, bypassing the snapshot cache.
    Never raises.
    """
    try:
        client = get_sheets_client()
    except SheetsAPIError:
        return {"service": "Sheets", "status": "not_configured"}

    results = {}
    status = "ok"
    for action in (COMPLAINTS_KEY, USERS_KEY):
        try:
            rows = client.get(action)
            results[action] = {
                "status": "ok",
                "rows_found": len(rows) if isinstance(rows, list) else 0,
            }
        except (SheetsAPIError, requests.RequestException) as err:
            status = "error"
            results[action] = {"status": "error", "detail": str(err)}

    return {"service": "Sheets", "status": status, "actions": results}
