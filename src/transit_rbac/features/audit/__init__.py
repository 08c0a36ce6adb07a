"""Audit trail for access control decisions."""

from .audit_logger import AuditAction, AuditEntry, AuditLogger, audit_logger

__all__ = ["AuditAction", "AuditEntry", "AuditLogger", "audit_logger"]
