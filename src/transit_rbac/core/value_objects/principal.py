"""
Principal and tenant context value objects.

Immutable types describing the already-authenticated caller. Token
verification happens upstream; these only carry its outcome.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Optional, Union

from ...config.constants import Role


@dataclass(frozen=True)
class TenantContext:
    """
    Tenant scope of a request.

    The core treats the tenant as an opaque identifier supplied by the caller.
    """
    tenant_id: str
    tenant_name: Optional[str] = None

    def __post_init__(self):
        if not self.tenant_id:
            raise ValueError("tenant_id must be a non-empty string")

    def __str__(self) -> str:
        return self.tenant_id


@dataclass(frozen=True)
class Principal:
    """
    Authenticated caller identity used for authorization decisions.

    Roles are a set; decisions never depend on the order they were assigned in.
    """
    user_id: str
    roles: FrozenSet[Role] = field(default_factory=frozenset)
    tenant_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        """Normalise roles to a frozenset of Role members."""
        object.__setattr__(self, "roles", frozenset(Role(role) for role in self.roles))

    @classmethod
    def of(
        cls,
        user_id: str,
        roles: Iterable[Union[Role, str]],
        tenant_id: Optional[str] = None,
    ) -> "Principal":
        """Build a principal from raw claim values."""
        return cls(user_id=user_id, roles=frozenset(roles), tenant_id=tenant_id)

    @property
    def tenant(self) -> Optional[TenantContext]:
        """Tenant context, or None for principals without a tenant."""
        return TenantContext(self.tenant_id) if self.tenant_id else None

    def has_role(self, role: Union[Role, str]) -> bool:
        """Check if principal holds a role."""
        try:
            return Role(role) in self.roles
        except ValueError:
            return False

    def __str__(self) -> str:
        roles = ",".join(sorted(role.value for role in self.roles))
        return f"{self.user_id}[{roles}]@{self.tenant_id or 'platform'}"
