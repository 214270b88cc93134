from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# STAFF ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Staff role; fixed for the lifetime of a session."""

    admin = "admin"
    manager = "manager"
    foreman = "foreman"
    call_attendant = "call-attendant"
    technician = "technician"


# -----------------------------------------------------
# ACCESS-CONTROLLED RESOURCE
# -----------------------------------------------------
class Resource(BaseStrEnum):
    complaints = "complaints"
    users = "users"
    reports = "reports"
    settings = "settings"


# -----------------------------------------------------
# CRUD ACTION
# -----------------------------------------------------
class Action(BaseStrEnum):
    create = "create"
    read = "read"
    update = "update"
    delete = "delete"


# -----------------------------------------------------
# ADMINISTRATIVE REGION
# -----------------------------------------------------
class Region(BaseStrEnum):
    """The twelve administrative regions used to scope data visibility."""

    addis_ababa = "Addis Ababa"
    afar = "Afar"
    amhara = "Amhara"
    benishangul_gumuz = "Benishangul-Gumuz"
    dire_dawa = "Dire Dawa"
    gambela = "Gambela"
    harari = "Harari"
    oromia = "Oromia"
    sidama = "Sidama"
    snnpr = "SNNPR"
    somali = "Somali"
    tigray = "Tigray"


# -----------------------------------------------------
# COMPLAINT STATUS
# -----------------------------------------------------
class ComplaintStatus(BaseStrEnum):
    """Workflow state for a complaint."""

    open = "open"
    in_progress = "in-progress"
    resolved = "resolved"
    closed = "closed"
    cancelled = "cancelled"


# -----------------------------------------------------
# COMPLAINT PRIORITY
# -----------------------------------------------------
class ComplaintPriority(BaseStrEnum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


# -----------------------------------------------------
# COMPLAINT CATEGORY
# -----------------------------------------------------
class ComplaintCategory(BaseStrEnum):
    """Kind of electrical supply problem reported."""

    power_outage = "power-outage"
    voltage_fluctuation = "voltage-fluctuation"
    billing_issue = "billing-issue"
    meter_problem = "meter-problem"
    line_damage = "line-damage"
    new_connection = "new-connection"
    other = "other"


# -----------------------------------------------------
# NOTIFICATION TYPE
# -----------------------------------------------------
class NotificationType(BaseStrEnum):
    info = "info"
    warning = "warning"
    success = "success"
    error = "error"
    system = "system"
