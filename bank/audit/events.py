"""
Audit Event Models

Every account opening and withdrawal attempt is logged for audit purposes.
This provides:
1. Traceability of every balance change
2. Visibility into rejected attempts (wrong PIN, overdraft)

DESIGN DECISION: Audit events are log records only. Nothing here stores
them; the account balance remains the only state.

PINs never appear in an audit event.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    ACCOUNT_OPENED = "account_opened"
    WITHDRAWAL_COMPLETED = "withdrawal_completed"
    WITHDRAWAL_REJECTED = "withdrawal_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every opening and withdrawal attempt creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which account is this about?
    entity_type: str = Field(
        default="account",
        description="Type of entity"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="Account number the event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (rejections only)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.account_opened("123456", "Jane Doe", "2024-01-15")
        event = AuditEventBuilder.withdrawal_completed("123456", amount, balance)
    """

    @staticmethod
    def account_opened(
        account_id: str,
        owner_name: str,
        opened_on: str,
        closed_on: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_OPENED,
            entity_id=account_id,
            description=f"Account #{account_id} created for {owner_name}",
            details={
                "owner": owner_name,
                "opened_on": opened_on,
                "closed_on": closed_on,
            },
        )

    @staticmethod
    def withdrawal_completed(
        account_id: str,
        amount: Decimal,
        balance: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WITHDRAWAL_COMPLETED,
            entity_id=account_id,
            description=f"Withdrew ${amount} from account #{account_id}",
            details={
                "amount": str(amount),
                "balance": str(balance),
            },
        )

    @staticmethod
    def withdrawal_rejected(
        account_id: str,
        error_code: str,
        error_message: str,
        balance: Decimal,
        amount: Optional[Decimal] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.WITHDRAWAL_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_id=account_id,
            description=f"Withdrawal from account #{account_id} rejected: {error_code}",
            details={
                "amount": str(amount) if amount is not None else None,
                "balance": str(balance),
            },
            error_code=error_code,
            error_message=error_message,
        )
