# -------------------------
# Enums
# -------------------------
from .enums import (
    Role,
    Resource,
    Action,
    Region,
    ComplaintStatus,
    ComplaintPriority,
    ComplaintCategory,
    NotificationType,
)

# -------------------------
# Complaint Models
# -------------------------
from .complaint import (
    Complaint,
    ComplaintCreate,
    ComplaintUpdate,
)

# -------------------------
# User Models (Users sheet)
# -------------------------
from .user import (
    StaffUser,
    UserCreate,
    UserUpdate,
    RoleChange,
    StatusChange,
)

# -------------------------
# Auth Models
# -------------------------
from .auth import LoginRequest, TokenResponse

# -------------------------
# Notification Models
# -------------------------
from .notification import Notification, NotificationSummary

# -------------------------
# Spreadsheet row parsing
# -------------------------
from .records import MalformedRecord, parse_record, parse_records

__all__ = [
    # enums
    "Role",
    "Resource",
    "Action",
    "Region",
    "ComplaintStatus",
    "ComplaintPriority",
    "ComplaintCategory",
    "NotificationType",

    # complaints
    "Complaint",
    "ComplaintCreate",
    "ComplaintUpdate",

    # users
    "StaffUser",
    "UserCreate",
    "UserUpdate",
    "RoleChange",
    "StatusChange",

    # auth
    "LoginRequest",
    "TokenResponse",

    # notifications
    "Notification",
    "NotificationSummary",

    # records
    "MalformedRecord",
    "parse_record",
    "parse_records",
]
