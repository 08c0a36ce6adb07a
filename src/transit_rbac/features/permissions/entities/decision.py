"""
Decision value objects.

Immutable results returned by the access control service, plus the rows of
the flat audit table rendered from a grant table.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ....config.constants import Action, ResourceSection, Role


class MatchRule(str, Enum):
    """Which rule of the authorization algorithm granted a permission."""
    WILDCARD = "wildcard"    # grant set holds '*'
    EXPLICIT = "explicit"    # grant set holds the permission verbatim
    MANAGE = "manage"        # grant set holds '<section>.manage'


class DecisionKind(str, Enum):
    """What was decided."""
    PERMISSION = "permission"
    PROVISIONING = "provisioning"
    TENANT_ACCESS = "tenant_access"


@dataclass(frozen=True)
class AccessDecision:
    """
    Immutable outcome of a single access check.

    ``subject`` is the permission code, target role or target tenant that was
    checked, depending on ``kind``.
    """
    kind: DecisionKind
    granted: bool
    subject: str
    user_id: Optional[str] = None
    tenant_id: Optional[str] = None
    reason: str = ""
    matched_rule: Optional[MatchRule] = None

    @property
    def denied(self) -> bool:
        return not self.granted

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "granted": self.granted,
            "subject": self.subject,
            "user_id": self.user_id,
            "tenant_id": self.tenant_id,
            "reason": self.reason,
            "matched_rule": self.matched_rule.value if self.matched_rule else None,
        }

    def __bool__(self) -> bool:
        return self.granted

    def __str__(self) -> str:
        outcome = "granted" if self.granted else "denied"
        return f"{self.kind.value}:{self.subject} {outcome} for {self.user_id}"


@dataclass(frozen=True)
class GrantRow:
    """One cell of the role × section × action review table."""
    role: Role
    section: ResourceSection
    action: Action
    granted: bool
    matched_rule: Optional[MatchRule] = None

    @property
    def code(self) -> str:
        return f"{self.section.value}.{self.action.value}"
