"""
Core Data Models for LocaPay

These models define the schemas for everything the billing core
reads and returns:
1. Tenant / Roster - the state owned by the hosting application
2. TenantDraft - what an add/edit form submits
3. TenantStatement / BillingSummary - what the engine computes
4. ValidationIssue / ValidationResult - what the validator reports

DESIGN DECISION: Tenant and TenantDraft use Pydantic v2 strict mode.
The core only accepts well-typed integers; turning raw form text into
numbers is the job of locapay.parsing, at the edge of the system.
"""

from decimal import Decimal
from enum import Enum
from typing import Iterator, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ErrorKind(str, Enum):
    """
    Every way a roster mutation can be refused.

    All of them are local, recoverable validation failures.
    """
    NEGATIVE_VALUE = "negative_value"
    CURRENT_BELOW_PREVIOUS = "current_below_previous"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    DUPLICATE_ROOM = "duplicate_room"
    TENANT_NOT_FOUND = "tenant_not_found"
    INVALID_NUMBER = "invalid_number"


# =============================================================================
# TENANT & ROSTER
# =============================================================================

class Tenant(BaseModel):
    """
    One rented unit and its occupant.

    NOTE: meter_current >= meter_previous is guaranteed by the roster
    operations, not by this model. A tenant loaded from storage with
    inconsistent readings is still representable; the engine clamps
    its consumption to zero.

    Assignments are validated too, so a tenant held in memory always
    loads back from storage.
    """
    model_config = ConfigDict(strict=True, str_strip_whitespace=True, validate_assignment=True)

    id: int = Field(
        ...,
        ge=1,
        description="Stable identifier, assigned as max(existing ids) + 1"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Family name"
    )
    first_name: str = Field(
        ...,
        min_length=1,
        description="Given name"
    )
    room_label: str = Field(
        ...,
        min_length=1,
        description="Room identifier, unique across the roster (case-insensitive)"
    )
    rent: int = Field(
        ...,
        ge=0,
        description="Base monthly rent"
    )
    meter_previous: int = Field(
        default=0,
        ge=0,
        description="Previous cumulative meter reading (kWh)"
    )
    meter_current: int = Field(
        default=0,
        ge=0,
        description="Current cumulative meter reading (kWh)"
    )

    # Display metadata, no invariants
    phone: Optional[str] = None
    photo_ref: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.first_name}"

    @property
    def room_key(self) -> str:
        """Case-folded room label used for uniqueness checks."""
        return self.room_label.casefold()


class TenantDraft(BaseModel):
    """
    Fields submitted by the add/edit tenant forms.

    Nothing is enforced here beyond types: required-field, sign and
    duplicate-room checks live in the validator so that they surface
    as typed errors rather than schema errors.

    meter_reading is the initial reading when adding a tenant and the
    new previous reading when editing one (None keeps the stored value).
    """
    model_config = ConfigDict(strict=True, str_strip_whitespace=True)

    name: str = ""
    first_name: str = ""
    room_label: str = ""
    rent: int = 0
    meter_reading: Optional[int] = None
    phone: Optional[str] = None
    photo_ref: Optional[str] = None


class Roster(BaseModel):
    """
    Ordered collection of all tenants in the current session.

    Insertion order is display order. Ids and case-folded room labels
    are unique; a stored roster breaking either rule fails to load.
    """
    model_config = ConfigDict(strict=True)

    tenants: list[Tenant] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_uniqueness(self) -> 'Roster':
        """Reject duplicate ids and duplicate rooms."""
        ids = [tenant.id for tenant in self.tenants]
        if len(ids) != len(set(ids)):
            raise ValueError("Tenant ids must be unique")

        rooms = [tenant.room_key for tenant in self.tenants]
        if len(rooms) != len(set(rooms)):
            raise ValueError("Room labels must be unique (case-insensitive)")

        return self

    def __iter__(self) -> Iterator[Tenant]:  # type: ignore[override]
        return iter(self.tenants)

    def __len__(self) -> int:
        return len(self.tenants)

    def get(self, tenant_id: int) -> Optional[Tenant]:
        """Find a tenant by id."""
        for tenant in self.tenants:
            if tenant.id == tenant_id:
                return tenant
        return None

    def next_id(self) -> int:
        return max((tenant.id for tenant in self.tenants), default=0) + 1

    def room_taken(self, room_label: str, exclude_id: Optional[int] = None) -> bool:
        """Check whether another tenant already occupies this room."""
        key = room_label.strip().casefold()
        return any(
            tenant.room_key == key and tenant.id != exclude_id
            for tenant in self.tenants
        )

    def total_rent(self) -> int:
        return sum(tenant.rent for tenant in self.tenants)


# =============================================================================
# BILLING OUTPUT MODELS
# =============================================================================

class TenantStatement(BaseModel):
    """What one tenant owes for the period."""

    tenant_id: int
    display_name: str
    room_label: str
    rent: int = Field(ge=0)
    consumption: int = Field(
        ge=0,
        description="kWh consumed this period"
    )
    percentage: int = Field(
        ge=0,
        description="Share of the house consumption, rounded to a whole percent"
    )
    electricity_share: int = Field(
        ge=0,
        description="Portion of the electricity bill"
    )
    total_due: int = Field(
        ge=0,
        description="Rent plus electricity share"
    )


class BillingSummary(BaseModel):
    """
    Roster-wide result of apportioning one electricity bill.

    rounding_drift is total_shares - bill_amount. Shares are rounded
    independently per tenant and are NOT reconciled to the bill, so a
    small drift is expected.
    """

    bill_amount: Decimal = Field(ge=0)
    total_rent: int = Field(ge=0)
    total_consumption: int = Field(ge=0)
    statements: list[TenantStatement] = Field(default_factory=list)
    total_shares: int = Field(ge=0)
    rounding_drift: Decimal

    @property
    def total_due(self) -> int:
        return sum(statement.total_due for statement in self.statements)

    def statement_for(self, tenant_id: int) -> Optional[TenantStatement]:
        for statement in self.statements:
            if statement.tenant_id == tenant_id:
                return statement
        return None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    kind: Optional[ErrorKind] = Field(
        default=None,
        description="Error kind for blocking issues, None for plain warnings"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """Outcome of reviewing a tenant draft against the roster."""

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
