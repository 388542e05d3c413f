"""
Audit Models for the Finance Tracker

Every change to the transaction collection, and every failure around it,
is recorded as an AuditEvent. This gives:
1. A readable trail of what the user did
2. Debugging information when persistence goes wrong

Audit events are written to the structured log; they are not persisted
alongside the transactions.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence lifecycle
    TRANSACTIONS_LOADED = "transactions_loaded"
    LOAD_FAILED = "load_failed"
    PERSIST_FAILED = "persist_failed"
    BACKUP_DISCARDED = "backup_discarded"

    # Collection changes
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    TARGET_NOT_FOUND = "target_not_found"

    # Form interaction
    VALIDATION_REJECTED = "validation_rejected"
    EDIT_STARTED = "edit_started"
    EDIT_CANCELLED = "edit_cancelled"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
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

    # Context - which transaction is this about?
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the transaction this event relates to"
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
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(txn_id, "Coffee", ...)
        event = AuditEventBuilder.persist_failed("set", error)
    """

    @staticmethod
    def transactions_loaded(count: int, key: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_LOADED,
            description=f"Loaded {count} transactions",
            details={"count": count, "key": key},
        )

    @staticmethod
    def load_failed(key: str, error_message: str, backup_key: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            description="Stored transactions could not be read; starting empty",
            error_message=error_message,
            details={"key": key, "backup_key": backup_key},
        )

    @staticmethod
    def persist_failed(operation: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSIST_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Failed to persist transactions after {operation}",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def backup_discarded(backup_key: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_DISCARDED,
            description="Unreadable transaction backup discarded",
            details={"backup_key": backup_key},
            is_user_action=True,
        )

    @staticmethod
    def transaction_added(
        transaction_id: str,
        description: str,
        amount: Decimal,
        transaction_type: str,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_id=transaction_id,
            description=f"Transaction added: {description} - {amount}",
            details={
                "amount": str(amount),
                "type": transaction_type,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(transaction_id: str, description: str, amount: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_id=transaction_id,
            description=f"Transaction updated: {description} - {amount}",
            details={"amount": str(amount)},
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(transaction_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_id=transaction_id,
            description="Transaction deleted",
            is_user_action=True,
        )

    @staticmethod
    def target_not_found(transaction_id: str, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TARGET_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_id=transaction_id,
            description=f"No transaction to {operation}: {transaction_id}",
            details={"operation": operation},
            is_user_action=True,
        )

    @staticmethod
    def validation_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Form submission rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def edit_started(transaction_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_STARTED,
            severity=AuditSeverity.DEBUG,
            entity_id=transaction_id,
            description="Started editing transaction",
            is_user_action=True,
        )

    @staticmethod
    def edit_cancelled(transaction_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EDIT_CANCELLED,
            severity=AuditSeverity.DEBUG,
            entity_id=transaction_id,
            description="Editing cancelled",
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
