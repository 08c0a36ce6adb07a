"""Permissions feature for transit-rbac.

Feature-First layout:
- entities/: permission values, grant sets and decision records
- repositories/: policy tables, loaders and the policy store
- services/: catalog, authorization engine, provisioning guard and the
  access control facade
"""

from .entities import (
    Permission,
    PermissionLike,
    GrantSet,
    WILDCARD_PERMISSION,
    AccessDecision,
    DecisionKind,
    GrantRow,
    MatchRule,
)

from .repositories import (
    DEFAULT_ROLE_GRANTS,
    DEFAULT_ROLE_HIERARCHY,
    RoleGrantTable,
    RoleHierarchyTable,
    Policy,
    PolicyDocument,
    PolicyStore,
    build_policy,
    load_default_policy,
    load_policy_file,
    policy_from_document,
)

from .services import (
    PermissionCatalog,
    get_permission_catalog,
    AuthorizationEngine,
    is_authorized,
    ProvisioningGuard,
    AccessControlService,
    create_access_control,
)

__all__ = [
    # Entities
    "Permission",
    "PermissionLike",
    "GrantSet",
    "WILDCARD_PERMISSION",
    "AccessDecision",
    "DecisionKind",
    "GrantRow",
    "MatchRule",

    # Policy tables
    "DEFAULT_ROLE_GRANTS",
    "DEFAULT_ROLE_HIERARCHY",
    "RoleGrantTable",
    "RoleHierarchyTable",
    "Policy",
    "PolicyDocument",
    "PolicyStore",
    "build_policy",
    "load_default_policy",
    "load_policy_file",
    "policy_from_document",

    # Services
    "PermissionCatalog",
    "get_permission_catalog",
    "AuthorizationEngine",
    "is_authorized",
    "ProvisioningGuard",
    "AccessControlService",
    "create_access_control",
]
