"""Exception hierarchy for transit-rbac."""

from .base import RbacError, create_error_response
from .policy import (
    ConfigurationError,
    MissingRoleGrantError,
    PolicyLoadError,
    MalformedPermissionError,
    InvalidSectionError,
    InvalidActionError,
)
from .auth import (
    AuthorizationError,
    PermissionDeniedError,
    ProvisioningDeniedError,
    TenantAccessError,
    TenantRequiredError,
)
from .http_mapping import HTTP_STATUS_MAP, get_http_status_code

__all__ = [
    # Base
    "RbacError",
    "create_error_response",

    # Configuration
    "ConfigurationError",
    "MissingRoleGrantError",
    "PolicyLoadError",

    # Permission shape
    "MalformedPermissionError",
    "InvalidSectionError",
    "InvalidActionError",

    # Authorization
    "AuthorizationError",
    "PermissionDeniedError",
    "ProvisioningDeniedError",
    "TenantAccessError",
    "TenantRequiredError",

    # HTTP mapping
    "HTTP_STATUS_MAP",
    "get_http_status_code",
]
