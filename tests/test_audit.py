"""Tests for audit events and the audit logger."""

import json
import logging
from decimal import Decimal

import pytest
import structlog
from structlog.testing import capture_logs

from bank.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditLogger,
    AuditSeverity,
    configure_logging,
)
from bank.config import LoggingSettings, get_settings


class TestAuditModels:
    """Tests for audit event models."""

    def test_audit_event_creation(self):
        """Test AuditEvent defaults."""
        event = AuditEvent(
            event_type=AuditEventType.ACCOUNT_OPENED,
            description="Account opened",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.entity_type == "account"
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.withdrawal_completed(
            account_id="123456",
            amount=Decimal("30"),
            balance=Decimal("70.00"),
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "withdrawal_completed"
        assert log_dict["entity_id"] == "123456"
        assert log_dict["details"] == {"amount": "30", "balance": "70.00"}
        json.dumps(log_dict)

    def test_builder_account_opened(self):
        """Test AuditEventBuilder.account_opened."""
        event = AuditEventBuilder.account_opened(
            account_id="123456",
            owner_name="Jane Doe",
            opened_on="2020-01-06",
        )
        assert event.event_type == AuditEventType.ACCOUNT_OPENED
        assert event.description == "Account #123456 created for Jane Doe"
        assert event.details["closed_on"] is None

    def test_builder_withdrawal_rejected(self):
        """Test AuditEventBuilder.withdrawal_rejected."""
        event = AuditEventBuilder.withdrawal_rejected(
            account_id="123456",
            error_code="insufficient_funds",
            error_message="Insufficient funds for withdrawal",
            balance=Decimal("70"),
            amount=Decimal("1000"),
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.error_code == "insufficient_funds"
        assert event.details == {"amount": "1000", "balance": "70"}


class TestAuditLogger:
    """Tests for AuditLogger dispatch."""

    @pytest.mark.parametrize("severity,level", [
        (AuditSeverity.DEBUG, "debug"),
        (AuditSeverity.INFO, "info"),
        (AuditSeverity.WARNING, "warning"),
        (AuditSeverity.ERROR, "error"),
    ])
    def test_log_level_follows_severity(self, severity, level):
        """Test each severity maps to its log method."""
        audit = AuditLogger(enabled=True)
        event = AuditEvent(
            event_type=AuditEventType.WITHDRAWAL_REJECTED,
            severity=severity,
            description="test",
        )
        with capture_logs() as logs:
            assert audit.log(event) is True
        assert logs[0]["log_level"] == level
        assert logs[0]["event"] == "audit_event"

    def test_disabled_logger_drops_events(self):
        """Test nothing is emitted when auditing is off."""
        audit = AuditLogger(enabled=False)
        with capture_logs() as logs:
            assert audit.log(AuditEventBuilder.account_opened("123456", "A B", "2020-01-06")) is False
        assert logs == []

    def test_enabled_defaults_to_settings(self, monkeypatch):
        """Test AUDIT_ENABLED controls the default."""
        monkeypatch.setenv("AUDIT_ENABLED", "false")
        assert AuditLogger().enabled is False

        monkeypatch.setenv("AUDIT_ENABLED", "true")
        get_settings.cache_clear()
        assert AuditLogger().enabled is True

    def test_log_withdrawal_rejected(self):
        """Test the convenience method emits a rejection."""
        audit = AuditLogger(enabled=True)
        with capture_logs() as logs:
            audit.log_withdrawal_rejected(
                account_id="123456",
                error_code="unauthorized",
                error_message="Invalid PIN",
                balance=Decimal("70"),
            )
        assert logs[0]["event_type"] == "withdrawal_rejected"
        assert logs[0]["details"]["amount"] is None


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """Tests for structlog configuration."""

    def test_json_output(self, capsys):
        """Test JSON rendering through the stdlib logger."""
        configure_logging(LoggingSettings(level="INFO", json_output=True))
        structlog.get_logger("bank.test").info("hello", account_id="123456")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "hello"
        assert record["account_id"] == "123456"
        assert record["level"] == "info"
        assert record["logger"] == "bank.test"

    def test_level_filter(self, capsys):
        """Test records below the configured level are dropped."""
        configure_logging(LoggingSettings(level="WARNING", json_output=True))
        structlog.get_logger("bank.test").info("quiet")
        assert "quiet" not in capsys.readouterr().out
        assert logging.getLogger().level == logging.WARNING
