# models/user.py

from typing import Optional
from pydantic import BaseModel, AliasChoices, ConfigDict, EmailStr, Field, field_validator

from .enums import Region, Role


_FALSE_STRINGS = {"false", "no", "0", "inactive"}


# ===============================================================
# USERS SHEET ROW
# ===============================================================

class StaffUser(BaseModel):
    """
    One row of the Users sheet, mapped from its headers.
    Role and region stay as raw strings; a hand-edited sheet may hold
    values outside the enumerations.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("ID", "id"))
    name: str = Field("", validation_alias=AliasChoices("Name", "name"))
    email: str = Field("", validation_alias=AliasChoices("Email", "email"))
    role: Optional[str] = Field(None, validation_alias=AliasChoices("Role", "role"))
    region: Optional[str] = Field(None, validation_alias=AliasChoices("Region", "region"))
    department: Optional[str] = Field(None, validation_alias=AliasChoices("Department", "department"))
    phone: Optional[str] = Field(None, validation_alias=AliasChoices("Phone", "phone"))
    is_active: bool = Field(True, validation_alias=AliasChoices("Is Active", "isActive", "is_active"))
    created_at: Optional[str] = Field(None, validation_alias=AliasChoices("Created At", "createdAt", "created_at"))

    @field_validator("id", mode="before")
    def normalize_id(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("user row has no ID")
        return v

    @field_validator("name", "email", mode="before")
    def normalize_blank(cls, v):
        return "" if v is None else v

    @field_validator("department", "phone", "created_at", mode="before")
    def normalize_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    # Only an explicit "false" deactivates an account
    @field_validator("is_active", mode="before")
    def parse_active(cls, v):
        if v is None or v == "":
            return True
        if isinstance(v, str):
            return v.strip().lower() not in _FALSE_STRINGS
        return bool(v)


# ===============================================================
# WRITE MODELS
# ===============================================================

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    role: Role
    region: Optional[Region] = None
    department: Optional[str] = None
    phone: Optional[str] = None

    def to_sheet_payload(self) -> dict:
        return {
            "name": self.name.strip(),
            "email": str(self.email).lower(),
            "role": self.role.value,
            "region": self.region.value if self.region else "",
            "department": self.department or "",
            "phone": self.phone or "",
        }


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    region: Optional[Region] = None
    department: Optional[str] = None
    phone: Optional[str] = None

    def to_sheet_payload(self) -> dict:
        return self.model_dump(exclude_none=True, mode="json")


class RoleChange(BaseModel):
    role: Role


class StatusChange(BaseModel):
    is_active: bool
