"""Authorization exceptions raised by the explicit ``require_*`` helpers.

The engine and guard return booleans; these exist for callers that prefer
an exception at the point of enforcement.
"""

from typing import Any, Dict, Optional

from ...config.constants import ErrorCodes
from .base import RbacError


class AuthorizationError(RbacError):
    """Base exception for denied decisions."""
    pass


class PermissionDeniedError(AuthorizationError):
    """Raised when a principal lacks a required permission."""

    default_error_code = ErrorCodes.PERMISSION_DENIED


class ProvisioningDeniedError(AuthorizationError):
    """Raised when a principal may not create an account with the target role."""

    default_error_code = ErrorCodes.PROVISIONING_DENIED


class TenantAccessError(AuthorizationError):
    """Raised when a principal acts on a resource owned by another tenant."""

    default_error_code = ErrorCodes.TENANT_ACCESS_DENIED


class TenantRequiredError(RbacError):
    """Raised when no tenant can be resolved for an account-creation request."""

    default_error_code = ErrorCodes.TENANT_REQUIRED

    def __init__(self, message: str = "Tenant ID is required", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
