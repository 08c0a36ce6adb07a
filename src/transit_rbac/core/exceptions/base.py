"""Base exceptions for transit-rbac.

This module defines the base exception hierarchy for the library. All
exceptions inherit from RbacError and include error codes and details so
callers can render structured API responses.
"""

from typing import Any, Dict, Optional


class RbacError(Exception):
    """Base exception for all transit-rbac errors."""

    default_error_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.default_error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: RbacError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The transit-rbac exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
