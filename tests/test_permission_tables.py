# tests/test_permission_tables.py

"""
The permission tables are validated when core.permissions is imported.
These tests feed the freeze helpers broken tables directly.
"""

import copy

import pytest

from core import permissions
from core.permissions import (
    ALL_REGIONS,
    _ROLE_CAPABILITIES,
    _ROLE_PERMISSIONS,
    _REGION_ACCESS,
    _freeze_capabilities,
    _freeze_permissions,
    _freeze_regions,
)
from models.enums import Action, Resource, Role


def test_shipped_tables_cover_every_role():
    for role in Role:
        assert set(permissions.ROLE_PERMISSIONS[role]) == set(Resource)
        for resource in Resource:
            assert set(permissions.ROLE_PERMISSIONS[role][resource]) == set(Action)
        assert role in permissions.REGION_ACCESS
        assert role in permissions.ROLE_CAPABILITIES
        assert role in permissions.GRANTABLE_ROLES
        assert role in permissions.DASHBOARD_TITLES
        assert role in permissions.DEPARTMENTS


def test_missing_role_is_rejected():
    raw = copy.deepcopy(_ROLE_PERMISSIONS)
    del raw["foreman"]
    with pytest.raises(RuntimeError, match="foreman"):
        _freeze_permissions(raw)


def test_missing_resource_is_rejected():
    raw = copy.deepcopy(_ROLE_PERMISSIONS)
    del raw["technician"]["reports"]
    with pytest.raises(RuntimeError, match="reports"):
        _freeze_permissions(raw)


def test_missing_action_is_rejected():
    raw = copy.deepcopy(_ROLE_PERMISSIONS)
    del raw["manager"]["users"]["delete"]
    with pytest.raises(RuntimeError, match="users:delete"):
        _freeze_permissions(raw)


def test_truthy_non_bool_entry_is_rejected():
    raw = copy.deepcopy(_ROLE_PERMISSIONS)
    raw["admin"]["settings"]["read"] = 1
    with pytest.raises(RuntimeError, match="explicit boolean"):
        _freeze_permissions(raw)


def test_empty_region_set_is_rejected():
    raw = dict(_REGION_ACCESS, technician=[])
    with pytest.raises(RuntimeError, match="must not be empty"):
        _freeze_regions(raw)


def test_unknown_region_is_rejected():
    raw = dict(_REGION_ACCESS, foreman=["Addis Ababa", "Atlantis"])
    with pytest.raises(RuntimeError, match="Atlantis"):
        _freeze_regions(raw)


def test_region_sentinel_is_kept():
    frozen = _freeze_regions(dict(_REGION_ACCESS))
    assert frozen[Role.admin] == ALL_REGIONS
    assert frozen[Role.technician] == frozenset({"Addis Ababa"})


def test_missing_capability_is_rejected():
    raw = copy.deepcopy(_ROLE_CAPABILITIES)
    del raw["call-attendant"]["can_set_high_priority"]
    with pytest.raises(RuntimeError, match="can_set_high_priority"):
        _freeze_capabilities(raw)
