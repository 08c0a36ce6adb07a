"""Tests for the access control service facade."""

import gc
import json
import logging

import pytest

from transit_rbac.config import RbacSettings
from transit_rbac.config.constants import Role
from transit_rbac.core.exceptions import (
    MissingRoleGrantError,
    PermissionDeniedError,
    PolicyLoadError,
    ProvisioningDeniedError,
    TenantAccessError,
    TenantRequiredError,
)
from transit_rbac.features.permissions import (
    AccessControlService,
    DecisionKind,
    MatchRule,
    PolicyStore,
    create_access_control,
    policy_from_document,
)

AUDIT_LOGGER = "transit_rbac.audit"


def _audit_records(caplog):
    return [record for record in caplog.records if record.name == AUDIT_LOGGER]


class TestCheckPermission:
    """Test cases for permission checks."""

    def test_granted_decision(self, access_control, operator_admin):
        decision = access_control.check_permission(operator_admin, "vehicles.delete")

        assert decision.granted
        assert decision.kind == DecisionKind.PERMISSION
        assert decision.subject == "vehicles.delete"
        assert decision.matched_rule == MatchRule.MANAGE
        assert decision.reason == "Granted by manage rule"
        assert decision.user_id == "operator-1"

    def test_denied_decision(self, access_control, passenger):
        decision = access_control.check_permission(passenger, "finance.read")

        assert not decision
        assert decision.denied
        assert decision.matched_rule is None
        assert decision.reason == "Permission not granted to any held role"

    def test_multi_role_union(self, access_control, make_principal):
        """Test a principal with several roles is authorized by any of them."""
        principal = make_principal(Role.DRIVER, Role.INSPECTOR)

        assert access_control.check_permission(principal, "fuel_logs.write")
        assert access_control.check_permission(principal, "vehicles.read")
        assert not access_control.check_permission(principal, "vehicles.write")

    def test_principal_without_roles(self, access_control, make_principal):
        assert not access_control.check_permission(make_principal(), "trips.read")

    def test_malformed_permission_is_denied_and_audited(self, access_control, super_admin, caplog):
        """Test a malformed permission fails closed, even for the wildcard holder."""
        with caplog.at_level(logging.INFO):
            decision = access_control.check_permission(super_admin, "vehicles")

        assert decision.denied
        assert decision.reason == "Malformed permission"
        assert "Malformed permission" in caplog.text
        audits = _audit_records(caplog)
        assert audits[-1].audit["action"] == "MALFORMED_PERMISSION"

    def test_require_permission(self, access_control, driver):
        assert access_control.require_permission(driver, "settings.delete").granted

        with pytest.raises(PermissionDeniedError) as exc_info:
            access_control.require_permission(driver, "vehicles.read")

        assert exc_info.value.details["required"] == "vehicles.read"

    def test_any_and_all(self, access_control, driver):
        assert access_control.check_any_permission(driver, ["finance.read", "trips.read"])
        assert not access_control.check_all_permissions(driver, ["finance.read", "trips.read"])

    def test_role_checks(self, access_control, make_principal):
        principal = make_principal(Role.DRIVER, Role.INSPECTOR)

        assert access_control.has_any_role(principal, [Role.PASSENGER, "DRIVER"])
        assert not access_control.has_any_role(principal, [Role.PASSENGER])
        assert access_control.has_all_roles(principal, [Role.DRIVER, Role.INSPECTOR])
        assert not access_control.has_all_roles(principal, [Role.DRIVER, Role.SUPER_ADMIN])


class TestAuditing:
    """Decisions reach the audit logger."""

    def test_denied_logged_at_warning(self, access_control, passenger, caplog):
        with caplog.at_level(logging.INFO):
            access_control.check_permission(passenger, "finance.read")

        record = _audit_records(caplog)[-1]
        assert record.levelno == logging.WARNING
        assert record.audit["action"] == "PERMISSION_DENIED"
        assert record.audit["user_id"] == "passenger-1"
        assert record.audit["subject"] == "finance.read"

    def test_granted_logged_at_info(self, access_control, driver, caplog):
        with caplog.at_level(logging.INFO):
            access_control.check_permission(driver, "trips.read")

        record = _audit_records(caplog)[-1]
        assert record.levelno == logging.INFO
        assert record.audit["action"] == "PERMISSION_GRANTED"

    def test_policy_reload_is_audited(self, access_control, policy_store, default_policy, caplog):
        replacement = policy_from_document(default_policy.to_document(), source="reloaded")

        with caplog.at_level(logging.INFO):
            policy_store.swap(replacement)

        record = _audit_records(caplog)[-1]
        assert record.audit["action"] == "POLICY_RELOADED"
        assert record.audit["metadata"] == {"previous_source": "defaults"}

    def test_discarded_services_do_not_accumulate(self, default_policy, caplog):
        """Test services sharing one store leave no listeners behind once dropped."""
        store = PolicyStore(default_policy)
        for _ in range(50):
            AccessControlService(store)
        gc.collect()

        service = AccessControlService(store)
        assert store.listener_count == 1

        with caplog.at_level(logging.INFO):
            store.swap(policy_from_document(default_policy.to_document(), source="reloaded"))

        reloads = [r for r in _audit_records(caplog) if r.audit["action"] == "POLICY_RELOADED"]
        assert len(reloads) == 1
        assert service.policy.source == "reloaded"

    def test_close_stops_reload_auditing(self, policy_store, default_policy, caplog):
        service = AccessControlService(policy_store)
        service.close()

        with caplog.at_level(logging.INFO):
            policy_store.swap(policy_from_document(default_policy.to_document(), source="reloaded"))

        assert _audit_records(caplog) == []


class TestProvisioning:
    """Test cases for account-creation checks."""

    def test_operator_admin_creates_driver(self, access_control, operator_admin):
        decision = access_control.check_provisioning(operator_admin, Role.DRIVER)

        assert decision.granted
        assert decision.kind == DecisionKind.PROVISIONING
        assert decision.subject == "DRIVER"

    def test_operator_admin_cannot_create_operator_admin(self, access_control, operator_admin):
        with pytest.raises(ProvisioningDeniedError, match="create users with role: OPERATOR_ADMIN"):
            access_control.require_provisioning(operator_admin, Role.OPERATOR_ADMIN)

    def test_unknown_target_denied(self, access_control, super_admin):
        assert not access_control.check_provisioning(super_admin, "PILOT")

    def test_resolve_target_tenant(self, access_control, super_admin, operator_admin):
        assert access_control.resolve_target_tenant(super_admin, "tenant-b") == "tenant-b"
        assert access_control.resolve_target_tenant(operator_admin, "tenant-b") == "tenant-a"

    def test_resolve_target_tenant_missing(self, access_control, make_principal):
        principal = make_principal(Role.OPERATOR_ADMIN, tenant_id=None)

        with pytest.raises(TenantRequiredError):
            access_control.resolve_target_tenant(principal)

    def test_uses_reloaded_hierarchy(self, access_control, policy_store, default_policy, operator_admin):
        document = default_policy.to_document()
        document["hierarchy"]["OPERATOR_ADMIN"] = ["PASSENGER"]
        policy_store.swap(policy_from_document(document, source="narrowed"))

        assert not access_control.check_provisioning(operator_admin, Role.DRIVER)
        assert access_control.check_provisioning(operator_admin, Role.PASSENGER)


class TestTenantAccess:
    """Tenant ownership is checked explicitly, outside the engine."""

    def test_same_tenant(self, access_control, operator_admin):
        assert access_control.check_tenant_access(operator_admin, "tenant-a")

    def test_other_tenant_denied(self, access_control, operator_admin):
        """Test holding the permission does not reach another tenant's data."""
        assert access_control.check_permission(operator_admin, "vehicles.manage")
        assert not access_control.check_tenant_access(operator_admin, "tenant-b")

    def test_cross_tenant_role(self, access_control, super_admin):
        assert access_control.check_tenant_access(super_admin, "tenant-b")
        assert access_control.check_tenant_access(super_admin, None)

    def test_resource_without_tenant(self, access_control, operator_admin):
        assert not access_control.check_tenant_access(operator_admin, None)

    def test_require_tenant_access(self, access_control, driver):
        with pytest.raises(TenantAccessError):
            access_control.require_tenant_access(driver, "tenant-z")

    def test_denial_audited(self, access_control, driver, caplog):
        with caplog.at_level(logging.INFO):
            access_control.check_tenant_access(driver, "tenant-z")

        assert _audit_records(caplog)[-1].audit["action"] == "TENANT_ACCESS_DENIED"

    def test_custom_cross_tenant_roles(self, policy_store, make_principal):
        service = AccessControlService(policy_store, cross_tenant_roles=[Role.GOVERNMENT])

        regulator = make_principal(Role.GOVERNMENT, tenant_id=None)
        assert service.check_tenant_access(regulator, "tenant-b")


class TestCreateAccessControl:
    """Test cases for the startup factory."""

    def test_defaults(self):
        service = create_access_control(RbacSettings(policy_file=None))

        assert service.policy.source == "defaults"
        assert service.auditor.log_granted is False

    def test_policy_file(self, tmp_path, default_policy):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps(default_policy.to_document()), encoding="utf-8")

        service = create_access_control(RbacSettings(policy_file=path, audit_granted=True))

        assert service.policy.source == str(path)
        assert service.auditor.log_granted is True

    def test_invalid_policy_aborts_startup(self, tmp_path, caplog):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps({"grants": {"SUPER_ADMIN": ["*"]}}), encoding="utf-8")

        with caplog.at_level(logging.CRITICAL):
            with pytest.raises(MissingRoleGrantError):
                create_access_control(RbacSettings(policy_file=path))

        assert "refusing to start" in caplog.text

    def test_unreadable_policy_aborts_startup(self, tmp_path):
        with pytest.raises(PolicyLoadError):
            create_access_control(RbacSettings(policy_file=tmp_path / "missing.json"))

    def test_store_is_shared(self):
        store = PolicyStore()
        service = AccessControlService(store)

        assert service.policy is store.current
