"""Constants and enums for transit-rbac.

This module defines the closed enumerations the access control core decides
against. These correspond to the role and section identifiers used by the
fleet platform's API and stored on user records.
"""

from enum import Enum
from typing import Final


class Role(str, Enum):
    """Identity classification assigned to a platform user."""

    SUPER_ADMIN = "SUPER_ADMIN"          # Platform-wide administration
    OPERATOR_ADMIN = "OPERATOR_ADMIN"    # Tenant (fleet operator) administration
    GOVERNMENT = "GOVERNMENT"            # Read-only regulator / observer
    DRIVER = "DRIVER"
    INSPECTOR = "INSPECTOR"
    PASSENGER = "PASSENGER"


class ResourceSection(str, Enum):
    """Application area a permission governs."""

    OVERVIEW = "overview"
    VEHICLES = "vehicles"
    DRIVERS = "drivers"
    ROUTES = "routes"
    SCHEDULES = "schedules"
    TRIPS = "trips"
    BRANCHES = "branches"
    ANALYTICS = "analytics"
    FINANCE = "finance"
    FUEL_LOGS = "fuel_logs"
    FLEET_CONFIG = "fleet_config"
    SETTINGS = "settings"
    ORGANIZATION = "organization"
    USERS = "users"


class Action(str, Enum):
    """Operation kind within a section."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    MANAGE = "manage"  # Full CRUD within its own section


# Actions covered by MANAGE on the same section
MANAGE_SUBSUMES: Final[frozenset] = frozenset({Action.READ, Action.WRITE, Action.DELETE})

# Permission code syntax
WILDCARD: Final[str] = "*"
PERMISSION_SEPARATOR: Final[str] = "."


class AuditLoggers:
    """Logger names used by the library."""

    AUDIT: Final[str] = "transit_rbac.audit"


class ErrorCodes:
    """Stable error codes returned in error responses."""

    MISSING_ROLE_GRANT: Final[str] = "RBAC_MISSING_ROLE_GRANT"
    POLICY_LOAD_FAILED: Final[str] = "RBAC_POLICY_LOAD_FAILED"
    MALFORMED_PERMISSION: Final[str] = "RBAC_MALFORMED_PERMISSION"
    INVALID_SECTION: Final[str] = "RBAC_INVALID_SECTION"
    INVALID_ACTION: Final[str] = "RBAC_INVALID_ACTION"
    PERMISSION_DENIED: Final[str] = "RBAC_PERMISSION_DENIED"
    PROVISIONING_DENIED: Final[str] = "RBAC_PROVISIONING_DENIED"
    TENANT_ACCESS_DENIED: Final[str] = "RBAC_TENANT_ACCESS_DENIED"
    TENANT_REQUIRED: Final[str] = "RBAC_TENANT_REQUIRED"
