"""
Audit Models for LocaPay

Every roster mutation, accepted or refused, is logged for audit purposes.
This provides:
1. Traceability of who changed which reading and when
2. Debugging information when a bill split looks wrong
3. Ability to reconstruct the roster history

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Roster lifecycle
    ROSTER_LOADED = "roster_loaded"
    ROSTER_SEEDED = "roster_seeded"
    ROSTER_SAVED = "roster_saved"
    SAVE_FAILED = "save_failed"

    # Tenant mutations
    TENANT_ADDED = "tenant_added"
    TENANT_EDITED = "tenant_edited"
    TENANT_DELETED = "tenant_deleted"
    METER_READING_RECORDED = "meter_reading_recorded"

    # Billing
    BILL_AMOUNT_SET = "bill_amount_set"

    # Refusals
    VALIDATION_FAILED = "validation_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
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

    # Context - which tenant is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'tenant', 'roster', 'bill')"
    )
    entity_id: Optional[int] = Field(
        default=None,
        description="Tenant id the event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one session)"
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

    # Error information (if applicable)
    error_code: Optional[str] = None
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
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_json_line(self) -> str:
        """Serialize as one line of an append-only JSON lines file."""
        return json.dumps(self.to_log_dict(), ensure_ascii=False, default=str)


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.tenant_added(tenant_id, "Diallo Mamadou", "A-101", correlation_id)
        event = AuditEventBuilder.validation_failed("add_tenant", "duplicate_room", msg, correlation_id)
    """

    @staticmethod
    def roster_loaded(
        tenant_count: int,
        seeded: bool,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ROSTER_SEEDED if seeded else AuditEventType.ROSTER_LOADED,
            entity_type="roster",
            correlation_id=correlation_id,
            description=(
                f"Roster seeded with {tenant_count} default tenants"
                if seeded
                else f"Roster loaded with {tenant_count} tenants"
            ),
            details={"tenant_count": tenant_count},
        )

    @staticmethod
    def roster_saved(
        tenant_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ROSTER_SAVED,
            severity=AuditSeverity.DEBUG,
            entity_type="roster",
            correlation_id=correlation_id,
            description=f"Roster saved ({tenant_count} tenants)",
            details={"tenant_count": tenant_count},
        )

    @staticmethod
    def tenant_added(
        tenant_id: int,
        display_name: str,
        room_label: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TENANT_ADDED,
            entity_type="tenant",
            entity_id=tenant_id,
            correlation_id=correlation_id,
            description=f"Tenant added: {display_name} ({room_label})",
            details={
                "display_name": display_name,
                "room_label": room_label,
            },
            is_user_action=True,
        )

    @staticmethod
    def tenant_edited(
        tenant_id: int,
        changes: dict[str, Any],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TENANT_EDITED,
            entity_type="tenant",
            entity_id=tenant_id,
            correlation_id=correlation_id,
            description=f"Tenant {tenant_id} edited ({len(changes)} fields changed)",
            details={"changes": changes},
            is_user_action=True,
        )

    @staticmethod
    def tenant_deleted(
        tenant_id: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TENANT_DELETED,
            entity_type="tenant",
            entity_id=tenant_id,
            correlation_id=correlation_id,
            description=f"Tenant {tenant_id} deleted",
            is_user_action=True,
        )

    @staticmethod
    def meter_reading_recorded(
        tenant_id: int,
        meter_previous: int,
        meter_current: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.METER_READING_RECORDED,
            entity_type="tenant",
            entity_id=tenant_id,
            correlation_id=correlation_id,
            description=(
                f"Meter reading recorded for tenant {tenant_id}: "
                f"{meter_previous} -> {meter_current} kWh"
            ),
            details={
                "meter_previous": meter_previous,
                "meter_current": meter_current,
            },
            is_user_action=True,
        )

    @staticmethod
    def bill_amount_set(
        bill_amount: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_AMOUNT_SET,
            entity_type="bill",
            correlation_id=correlation_id,
            description=f"Electricity bill amount set to {bill_amount}",
            details={"bill_amount": bill_amount},
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        operation: str,
        error_code: str,
        error_message: str,
        tenant_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="tenant" if tenant_id is not None else None,
            entity_id=tenant_id,
            correlation_id=correlation_id,
            description=f"{operation} refused: {error_code}",
            details={"operation": operation},
            error_code=error_code,
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def save_failed(
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="roster",
            correlation_id=correlation_id,
            description="Roster could not be saved",
            error_message=error_message,
        )
