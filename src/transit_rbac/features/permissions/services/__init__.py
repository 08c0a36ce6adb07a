"""Permission decision services."""

from .catalog import PermissionCatalog, SECTION_DESCRIPTIONS, get_permission_catalog
from .authorization import AuthorizationEngine, GrantsLike, is_authorized
from .provisioning import ProvisioningGuard, RoleLike
from .access_service import AccessControlService, create_access_control

__all__ = [
    "PermissionCatalog",
    "SECTION_DESCRIPTIONS",
    "get_permission_catalog",
    "AuthorizationEngine",
    "GrantsLike",
    "is_authorized",
    "ProvisioningGuard",
    "RoleLike",
    "AccessControlService",
    "create_access_control",
]
