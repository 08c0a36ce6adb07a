"""
Built-in policy tables for the fleet platform.

Reviewed as plain data: one entry per role, permission codes written out in
full so the table reads the same way it is audited.
"""
from typing import Dict, List

from ....config.constants import Role


DEFAULT_ROLE_GRANTS: Dict[Role, List[str]] = {
    Role.SUPER_ADMIN: ["*"],

    Role.OPERATOR_ADMIN: [
        # Fleet management
        "overview.read",
        "vehicles.manage",
        "drivers.manage",
        "routes.manage",
        "schedules.manage",
        "trips.manage",
        "branches.manage",
        "fuel_logs.manage",
        "fleet_config.manage",

        # Reporting
        "analytics.read",
        "finance.read",

        # Organization and accounts (user creation is further limited by the hierarchy)
        "organization.manage",
        "settings.manage",
        "users.manage",
    ],

    Role.GOVERNMENT: [
        "overview.read",
        "analytics.read",
        "trips.read",
        "routes.read",
        "drivers.read",
        "vehicles.read",
        "settings.read",
    ],

    Role.DRIVER: [
        "trips.read",
        "schedules.read",
        "fuel_logs.write",
        "settings.manage",
    ],

    Role.INSPECTOR: [
        "trips.read",
        "vehicles.read",
        "drivers.read",
        "routes.read",
        "settings.read",
    ],

    Role.PASSENGER: [
        "trips.read",
        "routes.read",
        "settings.manage",
    ],
}


DEFAULT_ROLE_HIERARCHY: Dict[Role, List[Role]] = {
    Role.SUPER_ADMIN: [
        Role.SUPER_ADMIN,
        Role.OPERATOR_ADMIN,
        Role.GOVERNMENT,
        Role.DRIVER,
        Role.INSPECTOR,
        Role.PASSENGER,
    ],
    Role.OPERATOR_ADMIN: [
        Role.DRIVER,
        Role.INSPECTOR,
        Role.PASSENGER,
    ],
    Role.GOVERNMENT: [],
    Role.DRIVER: [],
    Role.INSPECTOR: [],
    Role.PASSENGER: [],
}
