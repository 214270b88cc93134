# core/sheets_helpers.py

from typing import List

from fastapi import HTTPException

from core.errors import SHEETS_ERRORS, handle_sheets_error
from core.logging_config import logger
from core.sheets_client import SheetsClient
from models.complaint import Complaint
from models.records import MalformedRecord, parse_record, parse_records
from models.user import StaffUser


def _log_malformed(kind: str, malformed: List[MalformedRecord]):
    if not malformed:
        return
    logger.warning(f"Skipped {len(malformed)} malformed {kind} row(s)")
    for record in malformed[:5]:
        logger.debug(f"Malformed {kind} row: {record.reason}")


def load_complaints(client: SheetsClient) -> List[Complaint]:
    """Every valid complaint row; malformed rows are logged and dropped."""
    try:
        rows = client.get_complaints()
    except SHEETS_ERRORS as e:
        raise handle_sheets_error(e, "Failed to fetch complaints")

    complaints, malformed = parse_records(rows, Complaint)
    _log_malformed("complaint", malformed)
    return complaints


def load_complaint(client: SheetsClient, complaint_id: str) -> Complaint:
    try:
        row = client.get_complaint(complaint_id)
    except SHEETS_ERRORS as e:
        raise handle_sheets_error(e, "Failed to fetch complaint")

    if row is None:
        raise HTTPException(404, "Complaint not found")

    parsed = parse_record(row, Complaint)
    if isinstance(parsed, MalformedRecord):
        logger.error(f"Complaint {complaint_id} is malformed: {parsed.reason}")
        raise HTTPException(502, "Complaint record is malformed in the spreadsheet")
    return parsed


def load_users(client: SheetsClient) -> List[StaffUser]:
    try:
        rows = client.get_users()
    except SHEETS_ERRORS as e:
        raise handle_sheets_error(e, "Failed to fetch users")

    users, malformed = parse_records(rows, StaffUser)
    _log_malformed("user", malformed)
    return users


def find_user(client: SheetsClient, user_id: str) -> StaffUser:
    for user in load_users(client):
        if user.id == user_id:
            return user
    raise HTTPException(404, "User not found")
