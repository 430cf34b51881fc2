"""
Roster Session

This module ties together the billing core, storage and auditing for
one running application. A UI collaborator holds one RosterSession and
calls it with raw form values; it gets back models to render.

DESIGN DECISION: The session enforces the boundaries:
- Raw input is parsed leniently here, never inside the core
- The core validates fully before mutating anything
- The roster is saved after every committed mutation, never after a refused one
- Every mutation, committed or refused, is audited

There is no ambient roster: the session owns one Roster instance and
passes it explicitly to every core call.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Optional, Union

from locapay.audit import AuditLogger, create_correlation_id
from locapay.billing import reading_difference, summarize
from locapay.config import Settings, get_settings
from locapay.formatting import format_amount
from locapay.models.tenant import (
    BillingSummary,
    Roster,
    Tenant,
    TenantDraft,
    ValidationResult,
)
from locapay.parsing import draft_from_form, lenient_int, lenient_number
from locapay.roster import (
    add_tenant,
    apply_meter_update,
    delete_tenant,
    edit_tenant,
    search_tenants,
    tenant_changes,
)
from locapay.storage import (
    InMemoryRosterStorage,
    JsonFileRosterStorage,
    JsonLinesAuditStorage,
    RosterStorageInterface,
    StorageError,
    seed_roster,
)
from locapay.validation import NegativeValueError, RosterError, review_draft


FormInput = Union[Mapping[str, Any], TenantDraft]


class RosterSession:
    """
    Owns the roster and the current bill amount for one user session.

    Flow for every mutation:
    1. Parse → raw form values become a typed draft / ints
    2. Apply → core operation validates, then mutates in place
    3. Save → whole roster handed to storage (rolled back if refused)
    4. Audit → success or refusal recorded

    A refused mutation raises the RosterError after auditing it; the
    caller shows error.message and restores its inputs from the roster.
    """

    def __init__(
        self,
        storage: Optional[RosterStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        default_photo_ref: Optional[str] = None,
        currency: str = "FCFA",
    ):
        self._storage = storage or InMemoryRosterStorage()
        self._audit_logger = audit_logger or AuditLogger()
        self._default_photo_ref = default_photo_ref
        self._currency = currency

        self.correlation_id = create_correlation_id()
        self.bill_amount = Decimal(0)
        self.roster: Roster = self._storage.load()

        self._audit_logger.log_roster_loaded(
            tenant_count=len(self.roster),
            seeded=self._storage.last_load_seeded,
            correlation_id=self.correlation_id,
        )

    @contextmanager
    def _audited(self, operation: str, tenant_id: Optional[int] = None) -> Iterator[None]:
        """Audit refusals raised by the core, then let them propagate."""
        try:
            yield
        except RosterError as e:
            self._audit_logger.log_validation_failed(
                operation=operation,
                error=e,
                tenant_id=tenant_id,
                correlation_id=self.correlation_id,
            )
            raise

    def _save(self, snapshot: Roster) -> None:
        """Persist the roster, rolling back to snapshot if storage refuses."""
        try:
            self._storage.save(self.roster)
        except StorageError as e:
            self.roster = snapshot
            self._audit_logger.log_save_failed(
                error_message=str(e),
                correlation_id=self.correlation_id,
            )
            raise

        self._audit_logger.log_roster_saved(
            tenant_count=len(self.roster),
            correlation_id=self.correlation_id,
        )

    # -------------------------------------------------------------------------
    # Bill
    # -------------------------------------------------------------------------

    def set_bill_amount(self, raw_amount: Any) -> Decimal:
        """
        Set the shared electricity bill from raw form input.

        Unparsable input counts as 0; a negative amount is refused.
        """
        amount = lenient_number(raw_amount)

        with self._audited("set_bill_amount"):
            if amount < 0:
                raise NegativeValueError("bill_amount", amount)

        self.bill_amount = amount
        self._audit_logger.log_bill_amount(
            bill_amount=format_amount(amount, self._currency),
            correlation_id=self.correlation_id,
        )
        return amount

    def summary(self) -> BillingSummary:
        """Apportion the current bill across the current roster."""
        return summarize(self.roster, self.bill_amount)

    # -------------------------------------------------------------------------
    # Tenant mutations
    # -------------------------------------------------------------------------

    def record_meter_reading(
        self,
        tenant_id: int,
        raw_previous: Any,
        raw_current: Any,
    ) -> Tenant:
        """Commit a new pair of readings typed into the roster table."""
        new_previous = lenient_int(raw_previous)
        new_current = lenient_int(raw_current)

        snapshot = self.roster.model_copy(deep=True)
        with self._audited("record_meter_reading", tenant_id):
            tenant = apply_meter_update(self.roster, tenant_id, new_previous, new_current)

        self._save(snapshot)
        self._audit_logger.log_meter_reading(
            tenant_id=tenant.id,
            meter_previous=tenant.meter_previous,
            meter_current=tenant.meter_current,
            correlation_id=self.correlation_id,
        )
        return tenant

    def add_tenant(self, form: FormInput) -> Tenant:
        """Create a tenant from the add form."""
        draft = form if isinstance(form, TenantDraft) else draft_from_form(form)

        snapshot = self.roster.model_copy(deep=True)
        with self._audited("add_tenant"):
            tenant = add_tenant(self.roster, draft, default_photo_ref=self._default_photo_ref)

        self._save(snapshot)
        self._audit_logger.log_tenant_added(
            tenant_id=tenant.id,
            display_name=tenant.display_name,
            room_label=tenant.room_label,
            correlation_id=self.correlation_id,
        )
        return tenant

    def edit_tenant(self, tenant_id: int, form: FormInput) -> Tenant:
        """Apply the edit form to an existing tenant."""
        draft = form if isinstance(form, TenantDraft) else draft_from_form(form)
        current = self.roster.get(tenant_id)
        before = current.model_copy() if current is not None else None

        snapshot = self.roster.model_copy(deep=True)
        with self._audited("edit_tenant", tenant_id):
            tenant = edit_tenant(self.roster, tenant_id, draft)

        self._save(snapshot)
        self._audit_logger.log_tenant_edited(
            tenant_id=tenant.id,
            changes=tenant_changes(before, tenant) if before is not None else {},
            correlation_id=self.correlation_id,
        )
        return tenant

    def delete_tenant(self, tenant_id: int) -> Roster:
        """Remove a tenant after the UI has asked for confirmation."""
        snapshot = self.roster.model_copy(deep=True)
        with self._audited("delete_tenant", tenant_id):
            delete_tenant(self.roster, tenant_id)

        self._save(snapshot)
        self._audit_logger.log_tenant_deleted(
            tenant_id=tenant_id,
            correlation_id=self.correlation_id,
        )
        return self.roster

    # -------------------------------------------------------------------------
    # Read-only helpers
    # -------------------------------------------------------------------------

    def review(self, form: FormInput, tenant_id: Optional[int] = None) -> ValidationResult:
        """Live feedback for an add/edit form, without committing anything."""
        draft = form if isinstance(form, TenantDraft) else draft_from_form(form)
        return review_draft(self.roster, draft, exclude_id=tenant_id)

    def measure_consumption(self, raw_previous: Any, raw_current: Any) -> int:
        """Standalone meter calculator: kWh between two readings."""
        return reading_difference(lenient_int(raw_previous), lenient_int(raw_current))

    def search(self, term: str) -> list[Tenant]:
        return search_tenants(self.roster, term)


def create_session(settings: Optional[Settings] = None) -> RosterSession:
    """
    Factory function to build a session from configuration.

    Uses the JSON roster file and the JSON lines audit trail configured
    in the environment.
    """
    settings = settings or get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    storage = JsonFileRosterStorage(
        storage_settings.roster_path,
        seed=seed_roster if storage_settings.seed_on_missing else None,
    )
    audit_logger = AuditLogger(JsonLinesAuditStorage(storage_settings.audit_path))

    return RosterSession(
        storage=storage,
        audit_logger=audit_logger,
        default_photo_ref=app_settings.default_photo_ref,
        currency=app_settings.currency_label,
    )
