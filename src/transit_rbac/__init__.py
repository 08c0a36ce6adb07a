"""transit-rbac - Role-based access control core for the transit fleet platform.

Decides whether an authenticated principal may perform an action on an
application section, and whether it may provision accounts with a given role.
FastAPI integration lives in ``transit_rbac.api``.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    Role,
    ResourceSection,
    Action,
    WILDCARD,
    RbacSettings,
    get_settings,
)

from .core.exceptions import (
    RbacError,
    ConfigurationError,
    MissingRoleGrantError,
    PolicyLoadError,
    MalformedPermissionError,
    InvalidSectionError,
    InvalidActionError,
    AuthorizationError,
    PermissionDeniedError,
    ProvisioningDeniedError,
    TenantAccessError,
    TenantRequiredError,
    get_http_status_code,
    create_error_response,
)

from .core.value_objects import Principal, TenantContext

from .features.permissions import (
    Permission,
    GrantSet,
    WILDCARD_PERMISSION,
    AccessDecision,
    GrantRow,
    MatchRule,
    RoleGrantTable,
    RoleHierarchyTable,
    Policy,
    PolicyStore,
    load_default_policy,
    load_policy_file,
    policy_from_document,
    PermissionCatalog,
    get_permission_catalog,
    AuthorizationEngine,
    is_authorized,
    ProvisioningGuard,
    AccessControlService,
    create_access_control,
)

from .features.audit import AuditAction, AuditEntry, AuditLogger

__all__ = [
    "__version__",

    # Enumerations and settings
    "Role",
    "ResourceSection",
    "Action",
    "WILDCARD",
    "RbacSettings",
    "get_settings",

    # Exceptions
    "RbacError",
    "ConfigurationError",
    "MissingRoleGrantError",
    "PolicyLoadError",
    "MalformedPermissionError",
    "InvalidSectionError",
    "InvalidActionError",
    "AuthorizationError",
    "PermissionDeniedError",
    "ProvisioningDeniedError",
    "TenantAccessError",
    "TenantRequiredError",
    "get_http_status_code",
    "create_error_response",

    # Identity
    "Principal",
    "TenantContext",

    # Permissions
    "Permission",
    "GrantSet",
    "WILDCARD_PERMISSION",
    "AccessDecision",
    "GrantRow",
    "MatchRule",
    "RoleGrantTable",
    "RoleHierarchyTable",
    "Policy",
    "PolicyStore",
    "load_default_policy",
    "load_policy_file",
    "policy_from_document",
    "PermissionCatalog",
    "get_permission_catalog",
    "AuthorizationEngine",
    "is_authorized",
    "ProvisioningGuard",
    "AccessControlService",
    "create_access_control",

    # Audit
    "AuditAction",
    "AuditEntry",
    "AuditLogger",
]
