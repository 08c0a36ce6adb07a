"""
Audit trail for access control decisions.

Records go to a dedicated logger so deployments can route them to a separate
sink. Failed decisions are logged at WARNING, successful ones at INFO.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from ...config.constants import AuditLoggers

audit_logger = logging.getLogger(AuditLoggers.AUDIT)


class AuditAction(str, Enum):
    """Audited event types."""
    PERMISSION_GRANTED = "PERMISSION_GRANTED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    PROVISIONING_GRANTED = "PROVISIONING_GRANTED"
    PROVISIONING_DENIED = "PROVISIONING_DENIED"
    TENANT_ACCESS_DENIED = "TENANT_ACCESS_DENIED"
    MALFORMED_PERMISSION = "MALFORMED_PERMISSION"
    POLICY_RELOADED = "POLICY_RELOADED"


@dataclass(frozen=True)
class AuditEntry:
    """One audit record."""
    action: AuditAction
    success: bool
    user_id: Optional[str] = None
    tenant_id: Optional[str] = None
    subject: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    error_message: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "action": self.action.value,
            "success": self.success,
            "user_id": self.user_id,
            "tenant_id": self.tenant_id,
            "subject": self.subject,
            "metadata": dict(self.metadata),
            "error_message": self.error_message,
        }


class AuditLogger:
    """Writes audit entries to the audit logger."""

    def __init__(self, enabled: bool = True, log_granted: bool = False, logger: Optional[logging.Logger] = None):
        self.enabled = enabled
        self.log_granted = log_granted
        self.logger = logger or audit_logger

    def log(self, entry: AuditEntry) -> None:
        if not self.enabled:
            return

        record = entry.to_dict()
        if entry.success:
            self.logger.info(f"[AUDIT] {entry.action.value}", extra={"audit": record})
        else:
            self.logger.warning(f"[AUDIT FAIL] {entry.action.value}", extra={"audit": record})

    def log_decision(self, decision) -> None:
        """Record an AccessDecision; granted decisions only when ``log_granted`` is set."""
        if decision.granted and not self.log_granted:
            return

        action = _DECISION_ACTIONS.get((decision.kind.value, decision.granted))
        if action is None:
            return
        self.log(AuditEntry(
            action=action,
            success=decision.granted,
            user_id=decision.user_id,
            tenant_id=decision.tenant_id,
            subject=decision.subject,
            metadata={"reason": decision.reason},
        ))


_DECISION_ACTIONS = {
    ("permission", True): AuditAction.PERMISSION_GRANTED,
    ("permission", False): AuditAction.PERMISSION_DENIED,
    ("provisioning", True): AuditAction.PROVISIONING_GRANTED,
    ("provisioning", False): AuditAction.PROVISIONING_DENIED,
    # Tenant checks are only audited on failure
    ("tenant_access", False): AuditAction.TENANT_ACCESS_DENIED,
}
