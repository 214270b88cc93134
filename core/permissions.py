from types import MappingProxyType

from models.enums import Role, Resource, Action, Region


ALL_REGIONS = "all"


# ============================================
# CENTRALIZED ROLE → PERMISSION MATRIX
# Every role lists every resource and every action explicitly.
# ============================================
_ROLE_PERMISSIONS = {

    # =====================================================
    # ADMIN: Full access to everything
    # =====================================================
    "admin": {
        "complaints": {"create": True, "read": True, "update": True, "delete": True},
        "users":      {"create": True, "read": True, "update": True, "delete": True},
        "reports":    {"create": True, "read": True, "update": True, "delete": True},
        "settings":   {"create": True, "read": True, "update": True, "delete": True},
    },

    # =====================================================
    # MANAGER: cannot delete users or reports
    # =====================================================
    "manager": {
        "complaints": {"create": True,  "read": True, "update": True,  "delete": True},
        "users":      {"create": True,  "read": True, "update": True,  "delete": False},
        "reports":    {"create": True,  "read": True, "update": True,  "delete": False},
        "settings":   {"create": False, "read": True, "update": True,  "delete": False},
    },

    # =====================================================
    # FOREMAN: field operations, read-only on staff and reports
    # =====================================================
    "foreman": {
        "complaints": {"create": True,  "read": True, "update": True,  "delete": False},
        "users":      {"create": False, "read": True, "update": False, "delete": False},
        "reports":    {"create": False, "read": True, "update": False, "delete": False},
        "settings":   {"create": False, "read": True, "update": False, "delete": False},
    },

    # =====================================================
    # CALL ATTENDANT: logs complaints from every region
    # =====================================================
    "call-attendant": {
        "complaints": {"create": True,  "read": True,  "update": True,  "delete": False},
        "users":      {"create": False, "read": False, "update": False, "delete": False},
        "reports":    {"create": False, "read": False, "update": False, "delete": False},
        "settings":   {"create": False, "read": True,  "update": False, "delete": False},
    },

    # =====================================================
    # TECHNICIAN: works assigned complaints only
    # =====================================================
    "technician": {
        "complaints": {"create": False, "read": True,  "update": True,  "delete": False},
        "users":      {"create": False, "read": False, "update": False, "delete": False},
        "reports":    {"create": False, "read": False, "update": False, "delete": False},
        "settings":   {"create": False, "read": True,  "update": False, "delete": False},
    },
}


# ============================================
# ROLE → ACCESSIBLE REGIONS
# ============================================
_REGION_ACCESS = {
    "admin": ALL_REGIONS,
    "manager": ALL_REGIONS,
    "foreman": ["Addis Ababa", "Oromia"],
    "call-attendant": ALL_REGIONS,
    "technician": ["Addis Ababa"],
}


# ============================================
# ROLE → CAPABILITIES outside the CRUD matrix
# ============================================
_ROLE_CAPABILITIES = {
    "admin":          {"can_assign_complaint": True,  "can_set_high_priority": True},
    "manager":        {"can_assign_complaint": True,  "can_set_high_priority": True},
    "foreman":        {"can_assign_complaint": True,  "can_set_high_priority": True},
    "call-attendant": {"can_assign_complaint": False, "can_set_high_priority": True},
    "technician":     {"can_assign_complaint": False, "can_set_high_priority": False},
}

# Roles each role may hand out when creating or editing staff accounts
_GRANTABLE_ROLES = {
    "admin": ["technician", "call-attendant", "foreman", "manager", "admin"],
    "manager": ["technician", "call-attendant", "foreman", "manager"],
    "foreman": ["technician", "call-attendant", "foreman"],
    "call-attendant": ["technician", "call-attendant", "foreman"],
    "technician": ["technician", "call-attendant", "foreman"],
}

CAPABILITIES = ("can_assign_complaint", "can_set_high_priority")


# -----------------------------------------------------
# Construction-time checks: the tables must be total
# -----------------------------------------------------
def _freeze_permissions(raw: dict) -> MappingProxyType:
    frozen = {}
    for role in Role:
        if role.value not in raw:
            raise RuntimeError(f"Permission matrix missing role '{role.value}'")
        by_resource = {}
        for resource in Resource:
            actions = raw[role.value].get(resource.value)
            if actions is None:
                raise RuntimeError(
                    f"Permission matrix missing '{role.value}' → '{resource.value}'"
                )
            by_action = {}
            for action in Action:
                value = actions.get(action.value)
                if not isinstance(value, bool):
                    raise RuntimeError(
                        f"Permission matrix entry '{role.value}' → "
                        f"'{resource.value}:{action.value}' must be an explicit boolean"
                    )
                by_action[action] = value
            by_resource[resource] = MappingProxyType(by_action)
        frozen[role] = MappingProxyType(by_resource)
    return MappingProxyType(frozen)


def _freeze_regions(raw: dict) -> MappingProxyType:
    valid = set(Region.list())
    frozen = {}
    for role in Role:
        if role.value not in raw:
            raise RuntimeError(f"Region access missing role '{role.value}'")
        access = raw[role.value]
        if access == ALL_REGIONS:
            frozen[role] = ALL_REGIONS
            continue
        regions = frozenset(access)
        if not regions:
            raise RuntimeError(f"Region access for '{role.value}' must not be empty")
        unknown = regions - valid
        if unknown:
            raise RuntimeError(
                f"Region access for '{role.value}' has unknown regions: {sorted(unknown)}"
            )
        frozen[role] = regions
    return MappingProxyType(frozen)


def _freeze_capabilities(raw: dict) -> MappingProxyType:
    frozen = {}
    for role in Role:
        flags = raw.get(role.value, {})
        for name in CAPABILITIES:
            if not isinstance(flags.get(name), bool):
                raise RuntimeError(f"Capability '{name}' for '{role.value}' must be a boolean")
        frozen[role] = MappingProxyType({name: flags[name] for name in CAPABILITIES})
    return MappingProxyType(frozen)


def _freeze_grants(raw: dict) -> MappingProxyType:
    return MappingProxyType({
        role: tuple(Role(r) for r in raw[role.value]) for role in Role
    })


ROLE_PERMISSIONS = _freeze_permissions(_ROLE_PERMISSIONS)
REGION_ACCESS = _freeze_regions(_REGION_ACCESS)
ROLE_CAPABILITIES = _freeze_capabilities(_ROLE_CAPABILITIES)
GRANTABLE_ROLES = _freeze_grants(_GRANTABLE_ROLES)


# Dashboard heading and department shown for each role
DASHBOARD_TITLES = MappingProxyType({
    Role.admin: "System Administration Dashboard",
    Role.manager: "Regional Management Dashboard",
    Role.foreman: "Field Operations Dashboard",
    Role.call_attendant: "Customer Service Dashboard",
    Role.technician: "Technician Dashboard",
})

DEPARTMENTS = MappingProxyType({
    Role.admin: "System Administration",
    Role.manager: "Regional Management",
    Role.foreman: "Field Operations",
    Role.call_attendant: "Customer Service",
    Role.technician: "Field Service",
})
