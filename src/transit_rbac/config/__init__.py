"""Configuration module for transit-rbac.

Closed enumerations, runtime settings and logging configuration.
"""

from .constants import (
    Role,
    ResourceSection,
    Action,
    MANAGE_SUBSUMES,
    WILDCARD,
    PERMISSION_SEPARATOR,
    AuditLoggers,
    ErrorCodes,
)

from .settings import RbacSettings, get_settings

from .logging_config import (
    setup_logging,
    get_logger,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    # Enumerations
    "Role",
    "ResourceSection",
    "Action",
    "MANAGE_SUBSUMES",
    "WILDCARD",
    "PERMISSION_SEPARATOR",
    "AuditLoggers",
    "ErrorCodes",

    # Settings
    "RbacSettings",
    "get_settings",

    # Logging configuration
    "setup_logging",
    "get_logger",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
