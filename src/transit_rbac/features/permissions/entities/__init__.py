"""Permission domain objects."""

from .permission import (
    Permission,
    PermissionLike,
    GrantSet,
    WILDCARD_PERMISSION,
    coerce_section,
    coerce_action,
)
from .decision import AccessDecision, DecisionKind, GrantRow, MatchRule

__all__ = [
    "Permission",
    "PermissionLike",
    "GrantSet",
    "WILDCARD_PERMISSION",
    "coerce_section",
    "coerce_action",
    "AccessDecision",
    "DecisionKind",
    "GrantRow",
    "MatchRule",
]
