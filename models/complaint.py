from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, AliasChoices, ConfigDict, Field, field_validator

from .enums import ComplaintCategory, ComplaintPriority, ComplaintStatus, Region


# ======================================================
# Helpers
# ======================================================

def _sheet_field(*names: str, default=None, **kwargs):
    """Accept either the spreadsheet header or the camelCase key."""
    return Field(default, validation_alias=AliasChoices(*names), **kwargs)


def _to_text(value):
    # Sheets hand back numbers for ids, phone numbers, meter numbers...
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Lenient ISO-8601 parse; None when the sheet cell is blank or garbage."""
    if not value or not isinstance(value, str):
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed


# ======================================================
# READ (spreadsheet row → API response)
# ======================================================

class Complaint(BaseModel):
    """
    One row of the Complaints sheet.

    `region`, `status`, `priority` and `category` are kept verbatim: rows
    come from a hand-edited spreadsheet, and visibility decisions are made
    by the access-control engine, not by rejecting rows here.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = _sheet_field("ID", "id", default=...)
    customer_id: Optional[str] = _sheet_field("Customer ID", "customerId", "customer_id")
    customer_name: str = _sheet_field("Customer Name", "customerName", "customer_name", default="")
    customer_email: Optional[str] = _sheet_field("Customer Email", "customerEmail", "customer_email")
    customer_phone: Optional[str] = _sheet_field("Customer Phone", "customerPhone", "customer_phone")
    customer_address: Optional[str] = _sheet_field("Customer Address", "customerAddress", "customer_address")
    meter_number: Optional[str] = _sheet_field("Meter Number", "meterNumber", "meter_number")
    account_number: Optional[str] = _sheet_field("Account Number", "accountNumber", "account_number")

    title: str = _sheet_field("Title", "title", default="")
    description: Optional[str] = _sheet_field("Description", "description")
    category: Optional[str] = _sheet_field("Category", "category")
    priority: Optional[str] = _sheet_field("Priority", "priority")
    status: Optional[str] = _sheet_field("Status", "status")
    region: Optional[str] = _sheet_field("Region", "region")

    assigned_to: Optional[str] = _sheet_field("Assigned To", "assignedTo", "assigned_to")
    assigned_by: Optional[str] = _sheet_field("Assigned By", "assignedBy", "assigned_by")
    created_by: Optional[str] = _sheet_field("Created By", "createdBy", "created_by")

    created_at: Optional[str] = _sheet_field("Created At", "createdAt", "created_at")
    updated_at: Optional[str] = _sheet_field("Updated At", "updatedAt", "updated_at")
    est_resolution: Optional[str] = _sheet_field("Est. Resolution", "estResolution", "est_resolution")
    resolved_at: Optional[str] = _sheet_field("Resolved At", "resolvedAt", "resolved_at")

    notes: Optional[Any] = _sheet_field("Notes", "notes")

    @field_validator("id", mode="before")
    def normalize_id(cls, v):
        v = _to_text(v)
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("complaint row has no ID")
        return v

    @field_validator(
        "customer_id", "customer_email", "customer_phone", "customer_address",
        "meter_number", "account_number", "description", "category", "priority", "status",
        "assigned_to", "assigned_by", "created_by",
        "created_at", "updated_at", "est_resolution", "resolved_at",
        mode="before",
    )
    def normalize_text(cls, v):
        v = _to_text(v)
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("customer_name", "title", mode="before")
    def normalize_blank(cls, v):
        return "" if v is None else _to_text(v)

    @property
    def created(self) -> Optional[datetime]:
        return parse_timestamp(self.created_at)


# ======================================================
# CREATE
# ======================================================

class ComplaintCreate(BaseModel):
    customer_name: str = Field(..., min_length=1)
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None

    # Defaults to the submitting user's region
    region: Optional[Region] = None

    meter_number: Optional[str] = None
    account_number: Optional[str] = None

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: ComplaintCategory
    priority: ComplaintPriority = ComplaintPriority.medium

    @field_validator("customer_name", "title", mode="before")
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    def to_sheet_payload(self, created_by: str, region: str) -> dict:
        return {
            "customerId": "",
            "customerName": self.customer_name,
            "customerEmail": self.customer_email or "",
            "customerPhone": self.customer_phone or "",
            "customerAddress": self.customer_address or "",
            "region": region,
            "meterNumber": self.meter_number or "",
            "accountNumber": self.account_number or "",
            "title": self.title,
            "description": self.description or "",
            "category": self.category.value,
            "priority": self.priority.value,
            "createdBy": created_by,
            "notes": [],
            "attachments": [],
        }


# ======================================================
# UPDATE
# ======================================================

class ComplaintUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ComplaintCategory] = None
    priority: Optional[ComplaintPriority] = None
    status: Optional[ComplaintStatus] = None
    region: Optional[Region] = None
    assigned_to: Optional[str] = None
    est_resolution: Optional[str] = None
    notes: Optional[str] = None

    def to_sheet_payload(self) -> dict:
        camel = {
            "title": "title",
            "description": "description",
            "category": "category",
            "priority": "priority",
            "status": "status",
            "region": "region",
            "assigned_to": "assignedTo",
            "est_resolution": "estResolution",
            "notes": "notes",
        }
        data = self.model_dump(exclude_none=True, mode="json")
        return {camel[k]: v for k, v in data.items()}
