"""HTTP status code mapping for exceptions."""

from typing import Dict, Type

from .auth import AuthorizationError, TenantRequiredError
from .base import RbacError
from .policy import ConfigurationError, MalformedPermissionError


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    MalformedPermissionError: 400,
    TenantRequiredError: 400,

    # 403 Forbidden
    AuthorizationError: 403,

    # 500 Internal Server Error
    ConfigurationError: 500,
}

DEFAULT_STATUS_CODE = 500


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception.

    Walks the exception's MRO so subclasses inherit their base class mapping.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    for klass in type(exception).__mro__:
        if klass in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[klass]
        if klass is RbacError:
            break
    return DEFAULT_STATUS_CODE
