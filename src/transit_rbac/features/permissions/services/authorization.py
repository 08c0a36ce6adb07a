"""
Authorization engine - decides a permission against a grant set.

Decision order:
    1. '*' in grants                          -> allowed
    2. required permission in grants verbatim -> allowed
    3. '<section>.manage' in grants for a read/write/delete requirement
       on the same section                    -> allowed
    4. otherwise                              -> denied

The engine is a pure function of its inputs. It does no I/O and never logs;
denial is a normal return value. Callers that want an audit trail wrap it
(see AccessControlService).
"""
from typing import FrozenSet, Iterable, Optional, Union

from ..entities import GrantSet, MatchRule, Permission, PermissionLike
from .catalog import PermissionCatalog, get_permission_catalog


GrantsLike = Union[GrantSet, Iterable[PermissionLike]]


def _as_grant_set(grants: GrantsLike) -> GrantSet:
    if isinstance(grants, GrantSet):
        return grants
    return GrantSet(grants)


class AuthorizationEngine:
    """Stateless permission decision function."""

    def __init__(self, catalog: Optional[PermissionCatalog] = None):
        self.catalog = catalog or get_permission_catalog()

    def matched_by(self, grants: GrantsLike, required: PermissionLike) -> Optional[MatchRule]:
        """
        Return the rule that grants ``required``, or None when denied.

        Raises:
            MalformedPermissionError: ``required`` is not '*' or '<section>.<action>'
        """
        required = Permission.parse(required)
        grant_set = _as_grant_set(grants)

        if grant_set.is_wildcard:
            return MatchRule.WILDCARD

        if required in grant_set:
            return MatchRule.EXPLICIT

        # manage subsumes read/write/delete within its own section only
        manage = required.manage_equivalent()
        if manage is not None and manage in grant_set:
            return MatchRule.MANAGE

        return None

    def is_authorized(self, grants: GrantsLike, required: PermissionLike) -> bool:
        """Check whether ``grants`` allow ``required``."""
        return self.matched_by(grants, required) is not None

    def is_authorized_any(self, grants: GrantsLike, required: Iterable[PermissionLike]) -> bool:
        """True if at least one required permission is allowed; False for none required."""
        grant_set = _as_grant_set(grants)
        return any(self.is_authorized(grant_set, permission) for permission in required)

    def is_authorized_all(self, grants: GrantsLike, required: Iterable[PermissionLike]) -> bool:
        """True if every required permission is allowed; True for none required."""
        grant_set = _as_grant_set(grants)
        return all(self.is_authorized(grant_set, permission) for permission in required)

    def effective_permissions(self, grants: GrantsLike) -> FrozenSet[Permission]:
        """Every concrete catalog permission the grants allow."""
        grant_set = _as_grant_set(grants)
        return frozenset(
            permission
            for permission in self.catalog.all_permissions()
            if self.is_authorized(grant_set, permission)
        )


_default_engine = AuthorizationEngine()


def is_authorized(grants: GrantsLike, required: PermissionLike) -> bool:
    """Module-level shortcut for ``AuthorizationEngine().is_authorized``."""
    return _default_engine.is_authorized(grants, required)


__all__ = [
    "AuthorizationEngine",
    "GrantsLike",
    "is_authorized",
]
