# core/access_control.py

"""
Role-based access control and region scoping.

Pure functions over the read-only tables in core.permissions:

    has_permission(role, resource, action)  -> bool
    accessible_regions(role)                -> "all" | frozenset of region names
    can_access_region(role, region)         -> bool
    filter_by_region_access(role, records)  -> list

Unknown role/resource/action names raise InvalidArgument. Region values are
treated as untrusted data: they never raise, anything that is not a
non-empty string is simply inaccessible.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union, FrozenSet

from core.errors import InvalidArgument
from core.permissions import (
    ALL_REGIONS,
    GRANTABLE_ROLES,
    REGION_ACCESS,
    ROLE_CAPABILITIES,
    ROLE_PERMISSIONS,
)
from models.enums import Action, ComplaintPriority, Region, Resource, Role


RegionAccess = Union[str, FrozenSet[str]]

_BASE_PRIORITIES = (ComplaintPriority.low, ComplaintPriority.medium)
_HIGH_PRIORITIES = (ComplaintPriority.high, ComplaintPriority.critical)


# -----------------------------------------------------
# Enum coercion (programmer errors fail loudly)
# -----------------------------------------------------
def _coerce(enum_cls, kind: str, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise InvalidArgument(kind, value) from None


def parse_role(value) -> Role:
    return _coerce(Role, "role", value)


def parse_resource(value) -> Resource:
    return _coerce(Resource, "resource", value)


def parse_action(value) -> Action:
    return _coerce(Action, "action", value)


# -----------------------------------------------------
# Permission matrix
# -----------------------------------------------------
def has_permission(role, resource, action) -> bool:
    role = parse_role(role)
    resource = parse_resource(resource)
    action = parse_action(action)
    return ROLE_PERMISSIONS[role][resource][action]


def permissions_for(role) -> dict:
    """Full resource → action → bool matrix for one role (plain dicts, JSON-ready)."""
    role = parse_role(role)
    return {
        resource.value: {action.value: allowed for action, allowed in actions.items()}
        for resource, actions in ROLE_PERMISSIONS[role].items()
    }


# -----------------------------------------------------
# Region access
# -----------------------------------------------------
def accessible_regions(role) -> RegionAccess:
    return REGION_ACCESS[parse_role(role)]


def _region_name(region: Any) -> Optional[str]:
    # Missing / blank / non-string regions never match
    if isinstance(region, Region):
        return region.value
    if not isinstance(region, str) or region == "":
        return None
    return region


def can_access_region(role, region: Any) -> bool:
    access = accessible_regions(role)

    region = _region_name(region)
    if region is None:
        return False

    if access == ALL_REGIONS:
        return True

    return region in access


def _record_region(record: Any) -> Optional[str]:
    if isinstance(record, Mapping):
        return _region_name(record.get("region"))
    return _region_name(getattr(record, "region", None))


def filter_by_region_access(role, records: Iterable[Any]) -> List[Any]:
    """
    Return the records whose `region` the role may see, in input order.

    Records may be mappings or objects; ones without a usable region are
    dropped rather than raising, so one bad row never hides a whole list.
    """
    access = accessible_regions(role)
    visible = []
    for record in records:
        region = _record_region(record)
        if region is None:
            continue
        if access == ALL_REGIONS or region in access:
            visible.append(record)
    return visible


def region_scope_label(role, region: Optional[str] = None) -> str:
    """Human label for what a dashboard is scoped to."""
    access = accessible_regions(role)
    if access == ALL_REGIONS:
        return "all regions"
    if region and region in access:
        return region
    return ", ".join(sorted(access))


# -----------------------------------------------------
# Capabilities beyond CRUD
# -----------------------------------------------------
def can_assign_complaint(role) -> bool:
    return ROLE_CAPABILITIES[parse_role(role)]["can_assign_complaint"]


def can_set_high_priority(role) -> bool:
    return ROLE_CAPABILITIES[parse_role(role)]["can_set_high_priority"]


def allowed_priorities(role) -> Tuple[ComplaintPriority, ...]:
    if can_set_high_priority(role):
        return _BASE_PRIORITIES + _HIGH_PRIORITIES
    return _BASE_PRIORITIES


def grantable_roles(role) -> Tuple[Role, ...]:
    return GRANTABLE_ROLES[parse_role(role)]


def can_grant_role(role, target) -> bool:
    return parse_role(target) in grantable_roles(role)


def describe_role(role) -> dict:
    """Everything the dashboard needs to gate its UI for one role."""
    role = parse_role(role)
    access = accessible_regions(role)
    return {
        "role": role.value,
        "permissions": permissions_for(role),
        "accessible_regions": access if access == ALL_REGIONS else sorted(access),
        **dict(ROLE_CAPABILITIES[role]),
        "allowed_priorities": [p.value for p in allowed_priorities(role)],
        "grantable_roles": [r.value for r in grantable_roles(role)],
    }
