"""Audit logging package."""

from bank.audit.events import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from bank.audit.logger import AuditLogger, configure_logging

__all__ = [
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditLogger",
    "AuditSeverity",
    "configure_logging",
]
