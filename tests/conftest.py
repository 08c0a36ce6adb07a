"""Pytest configuration and fixtures for transit-rbac tests."""

import pytest

from transit_rbac.config.constants import Role
from transit_rbac.core.value_objects import Principal
from transit_rbac.features.audit import AuditLogger
from transit_rbac.features.permissions import (
    AccessControlService,
    AuthorizationEngine,
    PermissionCatalog,
    PolicyStore,
    ProvisioningGuard,
    load_default_policy,
)


@pytest.fixture
def catalog():
    """Permission catalog with the default descriptions."""
    return PermissionCatalog()


@pytest.fixture
def engine(catalog):
    """Authorization engine."""
    return AuthorizationEngine(catalog)


@pytest.fixture
def default_policy():
    """Policy built from the built-in tables."""
    return load_default_policy()


@pytest.fixture
def grant_table(default_policy):
    return default_policy.grants


@pytest.fixture
def hierarchy_table(default_policy):
    return default_policy.hierarchy


@pytest.fixture
def guard(hierarchy_table):
    """Provisioning guard over the default hierarchy."""
    return ProvisioningGuard(hierarchy_table)


@pytest.fixture
def policy_store(default_policy):
    return PolicyStore(default_policy)


@pytest.fixture
def access_control(policy_store):
    """Access control service that also audits granted decisions."""
    return AccessControlService(policy_store, auditor=AuditLogger(enabled=True, log_granted=True))


@pytest.fixture
def make_principal():
    """Factory for principals."""
    def _make(*roles, user_id="user-1", tenant_id="tenant-a"):
        return Principal.of(user_id, roles, tenant_id=tenant_id)
    return _make


@pytest.fixture
def super_admin(make_principal):
    return make_principal(Role.SUPER_ADMIN, user_id="root", tenant_id="platform")


@pytest.fixture
def operator_admin(make_principal):
    return make_principal(Role.OPERATOR_ADMIN, user_id="operator-1")


@pytest.fixture
def driver(make_principal):
    return make_principal(Role.DRIVER, user_id="driver-1")


@pytest.fixture
def passenger(make_principal):
    return make_principal(Role.PASSENGER, user_id="passenger-1")
