"""Permission catalog - the closed set of section/action permissions.

Renders canonical permission values and the human-readable descriptions used
by audit trails and admin screens. Descriptions never influence decisions.
"""

from functools import lru_cache
from typing import Dict, List, Mapping, Optional, Union

from ....config.constants import Action, ResourceSection
from ..entities import Permission, PermissionLike, coerce_action, coerce_section


SECTION_DESCRIPTIONS: Dict[ResourceSection, str] = {
    ResourceSection.OVERVIEW: "View dashboard overview and key metrics",
    ResourceSection.VEHICLES: "Manage fleet vehicles",
    ResourceSection.DRIVERS: "Manage drivers",
    ResourceSection.ROUTES: "Manage routes and schedules",
    ResourceSection.SCHEDULES: "View and manage trip schedules",
    ResourceSection.TRIPS: "Manage trips and bookings",
    ResourceSection.BRANCHES: "Manage branch locations",
    ResourceSection.ANALYTICS: "View analytics and reports",
    ResourceSection.FINANCE: "View financial data and transactions",
    ResourceSection.FUEL_LOGS: "Manage fuel logs and expenses",
    ResourceSection.FLEET_CONFIG: "Configure fleet settings",
    ResourceSection.SETTINGS: "Manage account settings",
    ResourceSection.ORGANIZATION: "Manage organization profile",
    ResourceSection.USERS: "Manage users and permissions",
}

ACTION_LABELS: Dict[Action, str] = {
    Action.READ: "read",
    Action.WRITE: "create and edit",
    Action.DELETE: "delete",
    Action.MANAGE: "full control",
}

WILDCARD_DESCRIPTION = "All permissions in every section"


class PermissionCatalog:
    """
    Enumerates every (section, action) pair.

    The catalog is immutable; one instance can be shared by any number of
    concurrent callers.
    """

    def __init__(self, descriptions: Optional[Mapping[ResourceSection, str]] = None):
        descriptions = dict(descriptions or SECTION_DESCRIPTIONS)
        missing = [section.value for section in ResourceSection if section not in descriptions]
        if missing:
            raise ValueError(f"Missing section descriptions for: {', '.join(missing)}")
        self._descriptions = descriptions
        self._permissions = tuple(
            Permission(section, action) for section in ResourceSection for action in Action
        )

    def permission(
        self,
        section: Union[ResourceSection, str],
        action: Union[Action, str],
    ) -> Permission:
        """
        Produce the canonical permission for a section and action.

        Raises:
            InvalidSectionError: section outside ResourceSection
            InvalidActionError: action outside Action
        """
        return Permission(coerce_section(section), coerce_action(action))

    def parse(self, code: PermissionLike) -> Permission:
        """Parse a permission code into a catalog value."""
        return Permission.parse(code)

    def describe(self, section: Union[ResourceSection, str]) -> str:
        """Stable human-readable description of a section."""
        return self._descriptions[coerce_section(section)]

    def describe_permission(self, permission: PermissionLike) -> str:
        """Description of a permission including its action."""
        permission = Permission.parse(permission)
        if permission.is_wildcard:
            return WILDCARD_DESCRIPTION
        return f"{self.describe(permission.section)} ({ACTION_LABELS[permission.action]})"

    def all_permissions(self) -> List[Permission]:
        """Every concrete permission, sections × actions in enumeration order."""
        return list(self._permissions)

    def sections(self) -> List[ResourceSection]:
        return list(ResourceSection)

    def actions(self) -> List[Action]:
        return list(Action)

    def __contains__(self, permission: object) -> bool:
        return permission in self._permissions

    def __len__(self) -> int:
        return len(self._permissions)


@lru_cache()
def get_permission_catalog() -> PermissionCatalog:
    """Shared catalog built from the default descriptions."""
    return PermissionCatalog()
