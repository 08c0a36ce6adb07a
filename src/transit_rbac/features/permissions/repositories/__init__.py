"""Policy tables, loaders and the shared policy store."""

from .defaults import DEFAULT_ROLE_GRANTS, DEFAULT_ROLE_HIERARCHY
from .grant_table import RoleGrantTable, coerce_role
from .hierarchy_table import RoleHierarchyTable
from .policy import (
    Policy,
    PolicyDocument,
    build_policy,
    load_default_policy,
    load_policy_file,
    policy_from_document,
)
from .policy_store import PolicyStore

__all__ = [
    "DEFAULT_ROLE_GRANTS",
    "DEFAULT_ROLE_HIERARCHY",
    "RoleGrantTable",
    "RoleHierarchyTable",
    "coerce_role",
    "Policy",
    "PolicyDocument",
    "build_policy",
    "load_default_policy",
    "load_policy_file",
    "policy_from_document",
    "PolicyStore",
]
