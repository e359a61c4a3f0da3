"""
Audit Logger

DESIGN DECISION: Every account opening and withdrawal attempt is logged.
This provides:
1. Complete traceability of balance changes
2. Visibility into failed PIN attempts
3. Debugging capability

The audit logger:
- Is synchronous; accounts have no suspension points
- Writes to the structured local log only
- Can be switched off through settings
"""

import logging
import sys
from decimal import Decimal
from typing import Optional

import structlog

from bank.audit.events import AuditEvent, AuditEventBuilder, AuditSeverity
from bank.config import LoggingSettings, get_settings


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Call once at startup. Without a call, structlog's defaults apply.
    """
    settings = settings or get_settings().logging
    level = getattr(logging, settings.level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Each account owns one. Events are dropped when auditing is disabled.
    """

    def __init__(self, enabled: Optional[bool] = None):
        """
        Initialize audit logger.

        Args:
            enabled: Whether events are emitted.
                     If None, read from AppSettings.audit_enabled.
        """
        if enabled is None:
            enabled = get_settings().app.audit_enabled
        self._enabled = enabled
        self._logger = structlog.get_logger("bank.audit")

    @property
    def enabled(self) -> bool:
        return self._enabled

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was emitted.
        """
        if not self._enabled:
            return False

        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        return True

    def log_account_opened(
        self,
        account_id: str,
        owner_name: str,
        opened_on: str,
        closed_on: Optional[str] = None,
    ) -> None:
        """Log account creation."""
        event = AuditEventBuilder.account_opened(
            account_id=account_id,
            owner_name=owner_name,
            opened_on=opened_on,
            closed_on=closed_on,
        )
        self.log(event)

    def log_withdrawal_completed(
        self,
        account_id: str,
        amount: Decimal,
        balance: Decimal,
    ) -> None:
        """Log a successful withdrawal."""
        event = AuditEventBuilder.withdrawal_completed(
            account_id=account_id,
            amount=amount,
            balance=balance,
        )
        self.log(event)

    def log_withdrawal_rejected(
        self,
        account_id: str,
        error_code: str,
        error_message: str,
        balance: Decimal,
        amount: Optional[Decimal] = None,
    ) -> None:
        """Log a rejected withdrawal."""
        event = AuditEventBuilder.withdrawal_rejected(
            account_id=account_id,
            error_code=error_code,
            error_message=error_message,
            balance=balance,
            amount=amount,
        )
        self.log(event)
