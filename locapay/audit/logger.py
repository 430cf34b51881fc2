"""
Audit Logger

DESIGN DECISION: Every roster mutation is logged, whether it was
committed or refused. This provides:
1. Complete traceability of readings and rent changes
2. Debugging capability when a split looks wrong
3. A history the landlord can review

The audit logger:
- Always logs locally through structlog
- Gracefully handles storage failures (never crashes the app)
- Supports correlation IDs to trace related events
"""

from typing import Any, Optional
from uuid import UUID, uuid4

from locapay.log import get_logger
from locapay.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from locapay.storage.interface import AuditStorageInterface
from locapay.validation.errors import RosterError


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend (for persistence), if configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = get_logger("locapay.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_roster_loaded(
        self,
        tenant_count: int,
        seeded: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log the roster being loaded at session start."""
        self.log(AuditEventBuilder.roster_loaded(
            tenant_count=tenant_count,
            seeded=seeded,
            correlation_id=correlation_id,
        ))

    def log_roster_saved(
        self,
        tenant_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.roster_saved(
            tenant_count=tenant_count,
            correlation_id=correlation_id,
        ))

    def log_save_failed(
        self,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.save_failed(
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_tenant_added(
        self,
        tenant_id: int,
        display_name: str,
        room_label: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a new tenant."""
        self.log(AuditEventBuilder.tenant_added(
            tenant_id=tenant_id,
            display_name=display_name,
            room_label=room_label,
            correlation_id=correlation_id,
        ))

    def log_tenant_edited(
        self,
        tenant_id: int,
        changes: dict[str, Any],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.tenant_edited(
            tenant_id=tenant_id,
            changes=changes,
            correlation_id=correlation_id,
        ))

    def log_tenant_deleted(
        self,
        tenant_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.tenant_deleted(
            tenant_id=tenant_id,
            correlation_id=correlation_id,
        ))

    def log_meter_reading(
        self,
        tenant_id: int,
        meter_previous: int,
        meter_current: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a committed meter reading."""
        self.log(AuditEventBuilder.meter_reading_recorded(
            tenant_id=tenant_id,
            meter_previous=meter_previous,
            meter_current=meter_current,
            correlation_id=correlation_id,
        ))

    def log_bill_amount(
        self,
        bill_amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.bill_amount_set(
            bill_amount=bill_amount,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        operation: str,
        error: RosterError,
        tenant_id: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a refused operation."""
        self.log(AuditEventBuilder.validation_failed(
            operation=operation,
            error_code=error.kind.value,
            error_message=error.message,
            tenant_id=tenant_id,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    The session creates one at start and passes it to every event.
    """
    return uuid4()
