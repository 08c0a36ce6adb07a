"""Role grant table - the single source of truth for what each role may do."""

import logging
from collections import Counter
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Union

from ....config.constants import Action, ResourceSection, Role
from ....core.exceptions import ConfigurationError, MissingRoleGrantError
from ..entities import GrantRow, GrantSet, Permission, PermissionLike

logger = logging.getLogger(__name__)


def coerce_role(role: Union[Role, str]) -> Role:
    """Resolve a role value, raising ConfigurationError for unknown roles."""
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        raise ConfigurationError(
            f"Unknown role in policy: {role!r}", details={"role": str(role)}
        ) from None


class RoleGrantTable:
    """
    Immutable mapping from every Role to its GrantSet.

    Built once at startup. Construction fails with MissingRoleGrantError when
    any declared role has no entry, because an absent entry and an intentional
    empty grant set would otherwise be indistinguishable.
    """

    def __init__(self, grants: Mapping[Union[Role, str], Iterable[PermissionLike]]):
        table = {}
        for raw_role, raw_permissions in grants.items():
            role = coerce_role(raw_role)
            permissions = [Permission.parse(permission) for permission in raw_permissions]

            duplicates = [str(p) for p, count in Counter(permissions).items() if count > 1]
            if duplicates:
                logger.warning(
                    f"Duplicate permissions for role {role.value} collapsed: {', '.join(sorted(duplicates))}"
                )

            grant_set = GrantSet(permissions)
            if grant_set.is_wildcard and len(set(permissions)) > 1:
                logger.debug(f"Wildcard grant for role {role.value} absorbs {len(permissions) - 1} other entries")
            table[role] = grant_set

        missing = [role for role in Role if role not in table]
        if missing:
            raise MissingRoleGrantError(missing)

        self._table = MappingProxyType(table)

    def grants_for(self, role: Union[Role, str]) -> GrantSet:
        """Return the grant set of a role."""
        return self._table[coerce_role(role)]

    def grants_for_roles(self, roles: Iterable[Union[Role, str]]) -> GrantSet:
        """Union of grant sets for a principal holding several roles."""
        grant_sets = [self.grants_for(role) for role in roles]
        if not grant_sets:
            return GrantSet.empty()
        return grant_sets[0].union(*grant_sets[1:])

    def roles(self) -> List[Role]:
        return list(self._table)

    def as_dict(self) -> dict:
        """Plain ``{role: [codes]}`` rendering, suitable for JSON export."""
        return {role.value: sorted(grant_set.codes()) for role, grant_set in self._table.items()}

    def audit_rows(self, engine: Optional["AuthorizationEngine"] = None) -> List[GrantRow]:
        """
        Flatten the table into role × section × action rows.

        Each row carries the effective verdict and the rule that produced it,
        so wildcard and manage grants are visible in review.
        """
        from ..services.authorization import AuthorizationEngine

        engine = engine or AuthorizationEngine()
        rows = []
        for role in Role:
            grant_set = self._table[role]
            for section in ResourceSection:
                for action in Action:
                    rule = engine.matched_by(grant_set, Permission(section, action))
                    rows.append(GrantRow(role, section, action, rule is not None, rule))
        return rows

    def __getitem__(self, role: Union[Role, str]) -> GrantSet:
        return self.grants_for(role)

    def __contains__(self, role: object) -> bool:
        return role in self._table

    def __iter__(self) -> Iterator[Role]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"RoleGrantTable(roles={len(self._table)})"
