"""Access control service - the caller-side facade over the decision core.

Resolves a principal's effective grants from the current policy, asks the
engine or guard for a verdict, performs the explicit tenant ownership check
and records decisions to the audit trail. The engine and guard stay pure;
everything with a side effect lives here.
"""

import logging
from typing import Collection, Iterable, Optional, Union

from ....config.constants import Role
from ....config.settings import RbacSettings, get_settings
from ....core.exceptions import (
    ConfigurationError,
    MalformedPermissionError,
    PermissionDeniedError,
    ProvisioningDeniedError,
    TenantAccessError,
)
from ....core.value_objects import Principal
from ...audit import AuditAction, AuditEntry, AuditLogger
from ..entities import AccessDecision, DecisionKind, GrantSet, PermissionLike
from ..repositories import Policy, PolicyStore, load_default_policy, load_policy_file
from .authorization import AuthorizationEngine
from .catalog import PermissionCatalog, get_permission_catalog
from .provisioning import ProvisioningGuard, RoleLike


logger = logging.getLogger(__name__)


class AccessControlService:
    """Service orchestrating permission, provisioning and tenant checks."""

    def __init__(
        self,
        store: PolicyStore,
        auditor: Optional[AuditLogger] = None,
        cross_tenant_roles: Collection[RoleLike] = (Role.SUPER_ADMIN,),
        catalog: Optional[PermissionCatalog] = None,
    ):
        self.store = store
        self.auditor = auditor or AuditLogger()
        self.catalog = catalog or get_permission_catalog()
        self.engine = AuthorizationEngine(self.catalog)
        self.cross_tenant_roles = frozenset(Role(role) for role in cross_tenant_roles)
        self.store.add_listener(self._on_policy_swapped)

    @property
    def policy(self) -> Policy:
        return self.store.current

    # Permission checks

    def permissions_for(self, principal: Principal) -> GrantSet:
        """Union of the grant sets of every role the principal holds."""
        return self.store.current.grants.grants_for_roles(principal.roles)

    def check_permission(self, principal: Principal, permission: PermissionLike) -> AccessDecision:
        """
        Decide whether ``principal`` holds ``permission``.

        The caller must already have verified the target resource belongs to
        the principal's tenant (see check_tenant_access). A malformed
        permission is a caller bug: it is logged as an error and denied.
        """
        grants = self.permissions_for(principal)

        try:
            rule = self.engine.matched_by(grants, permission)
        except MalformedPermissionError as e:
            logger.error(f"Malformed permission {permission!r} checked for {principal}: {e.message}")
            self.auditor.log(AuditEntry(
                action=AuditAction.MALFORMED_PERMISSION,
                success=False,
                user_id=principal.user_id,
                tenant_id=principal.tenant_id,
                subject=str(permission),
                error_message=e.message,
            ))
            return AccessDecision(
                kind=DecisionKind.PERMISSION,
                granted=False,
                subject=str(permission),
                user_id=principal.user_id,
                tenant_id=principal.tenant_id,
                reason="Malformed permission",
            )

        code = self.catalog.parse(permission).code
        decision = AccessDecision(
            kind=DecisionKind.PERMISSION,
            granted=rule is not None,
            subject=code,
            user_id=principal.user_id,
            tenant_id=principal.tenant_id,
            reason=f"Granted by {rule.value} rule" if rule else "Permission not granted to any held role",
            matched_rule=rule,
        )
        self.auditor.log_decision(decision)
        return decision

    def require_permission(self, principal: Principal, permission: PermissionLike) -> AccessDecision:
        """Like check_permission, raising PermissionDeniedError on deny."""
        decision = self.check_permission(principal, permission)
        if not decision.granted:
            raise PermissionDeniedError(
                f"Permission denied: {decision.subject}",
                details={"required": decision.subject, "reason": decision.reason},
            )
        return decision

    def check_any_permission(self, principal: Principal, permissions: Iterable[PermissionLike]) -> bool:
        grants = self.permissions_for(principal)
        return self.engine.is_authorized_any(grants, permissions)

    def check_all_permissions(self, principal: Principal, permissions: Iterable[PermissionLike]) -> bool:
        grants = self.permissions_for(principal)
        return self.engine.is_authorized_all(grants, permissions)

    # Role checks

    def has_any_role(self, principal: Principal, roles: Iterable[RoleLike]) -> bool:
        return any(principal.has_role(role) for role in roles)

    def has_all_roles(self, principal: Principal, roles: Iterable[RoleLike]) -> bool:
        return all(principal.has_role(role) for role in roles)

    # Provisioning

    def _guard(self) -> ProvisioningGuard:
        return ProvisioningGuard(self.store.current.hierarchy, self.cross_tenant_roles)

    def check_provisioning(self, principal: Principal, target_role: RoleLike) -> AccessDecision:
        """Decide whether ``principal`` may create an account with ``target_role``."""
        granted = self._guard().can_provision_any(principal.roles, target_role)
        decision = AccessDecision(
            kind=DecisionKind.PROVISIONING,
            granted=granted,
            subject=str(getattr(target_role, "value", target_role)),
            user_id=principal.user_id,
            tenant_id=principal.tenant_id,
            reason="Target role is creatable" if granted else "Target role not creatable by held roles",
        )
        self.auditor.log_decision(decision)
        return decision

    def require_provisioning(self, principal: Principal, target_role: RoleLike) -> AccessDecision:
        """Like check_provisioning, raising ProvisioningDeniedError on deny."""
        decision = self.check_provisioning(principal, target_role)
        if not decision.granted:
            raise ProvisioningDeniedError(
                f"You do not have permission to create users with role: {decision.subject}",
                details={"target_role": decision.subject},
            )
        return decision

    def resolve_target_tenant(self, principal: Principal, requested_tenant_id: Optional[str] = None) -> str:
        """Tenant a new account created by ``principal`` belongs to."""
        return self._guard().resolve_target_tenant(principal.roles, principal.tenant_id, requested_tenant_id)

    # Tenant ownership

    def check_tenant_access(self, principal: Principal, tenant_id: Optional[str]) -> AccessDecision:
        """
        Decide whether ``principal`` may act on a resource owned by ``tenant_id``.

        Same-tenant access is allowed; cross-tenant roles may act anywhere.
        A resource without a tenant is only reachable by cross-tenant roles.
        """
        if principal.roles & self.cross_tenant_roles:
            granted, reason = True, "Cross-tenant role"
        elif tenant_id and principal.tenant_id == tenant_id:
            granted, reason = True, "Same tenant"
        else:
            granted, reason = False, "Resource belongs to another tenant"

        decision = AccessDecision(
            kind=DecisionKind.TENANT_ACCESS,
            granted=granted,
            subject=str(tenant_id),
            user_id=principal.user_id,
            tenant_id=principal.tenant_id,
            reason=reason,
        )
        self.auditor.log_decision(decision)
        return decision

    def require_tenant_access(self, principal: Principal, tenant_id: Optional[str]) -> AccessDecision:
        """Like check_tenant_access, raising TenantAccessError on deny."""
        decision = self.check_tenant_access(principal, tenant_id)
        if not decision.granted:
            raise TenantAccessError(
                "Resource belongs to another tenant",
                details={"tenant_id": tenant_id},
            )
        return decision

    def close(self) -> None:
        """Stop auditing policy swaps of the shared store."""
        self.store.remove_listener(self._on_policy_swapped)

    def _on_policy_swapped(self, previous: Policy, current: Policy) -> None:
        self.auditor.log(AuditEntry(
            action=AuditAction.POLICY_RELOADED,
            success=True,
            subject=current.source,
            metadata={"previous_source": previous.source},
        ))


def create_access_control(settings: Optional[RbacSettings] = None) -> AccessControlService:
    """
    Build the access control service at process start.

    Loads the policy from ``settings.policy_file`` or the built-in defaults.
    Configuration errors are logged as CRITICAL and re-raised so startup
    aborts instead of serving traffic with an incomplete policy.
    """
    settings = settings or get_settings()

    try:
        if settings.policy_file:
            policy = load_policy_file(settings.policy_file)
        else:
            policy = load_default_policy()
    except ConfigurationError as e:
        logger.critical(f"Access control policy is invalid, refusing to start: {e.message}")
        raise

    service = AccessControlService(
        store=PolicyStore(policy),
        auditor=AuditLogger(enabled=settings.audit_enabled, log_granted=settings.audit_granted),
        cross_tenant_roles=settings.cross_tenant_roles,
    )
    logger.info(f"Access control ready: policy={policy.source}, roles={len(policy.grants)}")
    return service


__all__ = ["AccessControlService", "create_access_control"]
