"""Policy configuration and permission-shape exceptions."""

from typing import Iterable, Optional

from ...config.constants import ErrorCodes
from .base import RbacError


class ConfigurationError(RbacError):
    """Raised when the access control policy is misconfigured."""
    pass


class MissingRoleGrantError(ConfigurationError):
    """Raised at startup when a declared role has no grant-table entry."""

    default_error_code = ErrorCodes.MISSING_ROLE_GRANT

    def __init__(self, missing_roles: Iterable[str]):
        self.missing_roles = sorted(str(getattr(role, "value", role)) for role in missing_roles)
        super().__init__(
            f"Role grant table is missing entries for: {', '.join(self.missing_roles)}",
            details={"missing_roles": self.missing_roles},
        )


class PolicyLoadError(ConfigurationError):
    """Raised when a policy document cannot be read or validated."""

    default_error_code = ErrorCodes.POLICY_LOAD_FAILED


class MalformedPermissionError(RbacError):
    """Raised when a permission is not '*' and not '<section>.<action>'."""

    default_error_code = ErrorCodes.MALFORMED_PERMISSION

    def __init__(self, permission: object, message: Optional[str] = None):
        self.permission = permission
        super().__init__(
            message or f"Malformed permission: {permission!r}",
            details={"permission": str(permission)},
        )


class InvalidSectionError(MalformedPermissionError):
    """Raised for a section outside the ResourceSection enumeration."""

    default_error_code = ErrorCodes.INVALID_SECTION

    def __init__(self, section: object):
        self.section = section
        super().__init__(section, f"Unknown resource section: {section!r}")


class InvalidActionError(MalformedPermissionError):
    """Raised for an action outside the Action enumeration."""

    default_error_code = ErrorCodes.INVALID_ACTION

    def __init__(self, action: object):
        self.action = action
        super().__init__(action, f"Unknown action: {action!r}")
