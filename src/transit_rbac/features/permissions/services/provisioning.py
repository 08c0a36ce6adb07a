"""Provisioning guard - stops privilege escalation on account creation."""

from typing import Collection, Iterable, Optional, Union

from ....config.constants import Role
from ....core.exceptions import TenantRequiredError
from ..repositories.hierarchy_table import RoleHierarchyTable


RoleLike = Union[Role, str]


class ProvisioningGuard:
    """
    Decides whether a creator role may provision an account with a target role.

    Pure and stateless apart from the immutable hierarchy it is built with.
    """

    def __init__(
        self,
        hierarchy: RoleHierarchyTable,
        cross_tenant_roles: Collection[RoleLike] = (Role.SUPER_ADMIN,),
    ):
        self.hierarchy = hierarchy
        self.cross_tenant_roles = frozenset(Role(role) for role in cross_tenant_roles)

    def can_provision(self, creator: RoleLike, target: RoleLike) -> bool:
        """
        Check ``target`` is in the creation set of ``creator``.

        Unknown creators may create nothing; unknown targets are never allowed.
        """
        try:
            target = Role(target)
        except ValueError:
            return False
        return target in self.hierarchy.creatable_by(creator)

    def can_provision_any(self, creators: Iterable[RoleLike], target: RoleLike) -> bool:
        """True if any of the creator's roles may provision ``target``."""
        return any(self.can_provision(creator, target) for creator in creators)

    def resolve_target_tenant(
        self,
        creator_roles: Iterable[RoleLike],
        creator_tenant_id: Optional[str],
        requested_tenant_id: Optional[str] = None,
    ) -> str:
        """
        Decide which tenant a new account belongs to.

        Cross-tenant creators get the requested tenant (falling back to their
        own); everyone else is pinned to their own tenant regardless of what
        was requested.

        Raises:
            TenantRequiredError: no tenant could be resolved
        """
        roles = set()
        for role in creator_roles:
            try:
                roles.add(Role(role))
            except ValueError:
                continue

        if roles & self.cross_tenant_roles:
            tenant_id = requested_tenant_id or creator_tenant_id
        else:
            tenant_id = creator_tenant_id

        if not tenant_id:
            raise TenantRequiredError(
                details={"requested_tenant_id": requested_tenant_id}
            )
        return tenant_id


__all__ = ["ProvisioningGuard", "RoleLike"]
