"""
Roster Operations

The only code allowed to mutate a Roster. Each operation:
1. Looks up what it needs (TenantNotFoundError if the id is unknown)
2. Validates everything (typed RosterError on failure)
3. Only then mutates, in place, and returns the result

A refused operation leaves the roster exactly as it was.
Persisting the roster afterwards is the caller's job.
"""

from typing import Any, Optional

from locapay.models.tenant import Roster, Tenant, TenantDraft
from locapay.validation.errors import TenantNotFoundError
from locapay.validation.validator import (
    ensure_valid_draft,
    validate_meter_update,
)


def _find(roster: Roster, tenant_id: int) -> Tenant:
    tenant = roster.get(tenant_id)
    if tenant is None:
        raise TenantNotFoundError(tenant_id)
    return tenant


def apply_meter_update(
    roster: Roster,
    tenant_id: int,
    new_previous: int,
    new_current: int,
) -> Tenant:
    """
    Record a new pair of meter readings for one tenant.

    Raises:
        TenantNotFoundError: Unknown tenant id
        InvalidNumberError / NegativeValueError / CurrentBelowPreviousError:
            see validate_meter_update
    """
    tenant = _find(roster, tenant_id)
    validate_meter_update(new_previous, new_current)

    tenant.meter_previous = new_previous
    tenant.meter_current = new_current
    return tenant


def add_tenant(
    roster: Roster,
    draft: TenantDraft,
    default_photo_ref: Optional[str] = None,
) -> Tenant:
    """
    Create a tenant from a draft and append it to the roster.

    The new tenant gets id max(existing ids, 0) + 1 and starts with both
    readings equal to the initial reading, i.e. zero consumption.

    Raises:
        MissingRequiredFieldError, NegativeValueError, DuplicateRoomError
    """
    ensure_valid_draft(roster, draft)

    initial_reading = draft.meter_reading or 0
    tenant = Tenant(
        id=roster.next_id(),
        name=draft.name,
        first_name=draft.first_name,
        room_label=draft.room_label,
        rent=draft.rent,
        meter_previous=initial_reading,
        meter_current=initial_reading,
        phone=draft.phone or None,
        photo_ref=draft.photo_ref or default_photo_ref,
    )
    roster.tenants.append(tenant)
    return tenant


def edit_tenant(roster: Roster, tenant_id: int, draft: TenantDraft) -> Tenant:
    """
    Update a tenant's identity, room, rent, previous reading and phone.

    meter_current is never touched here: editing does not reset the
    consumption. A new previous reading must still be <= meter_current.

    Raises:
        TenantNotFoundError, MissingRequiredFieldError, NegativeValueError,
        DuplicateRoomError, CurrentBelowPreviousError
    """
    tenant = _find(roster, tenant_id)
    ensure_valid_draft(roster, draft, exclude_id=tenant_id)

    meter_previous = tenant.meter_previous
    if draft.meter_reading is not None:
        meter_previous = draft.meter_reading
        validate_meter_update(meter_previous, tenant.meter_current)

    # Validated copy swapped in whole, so a failure leaves the old tenant
    updated = Tenant.model_validate({
        **tenant.model_dump(),
        "name": draft.name,
        "first_name": draft.first_name,
        "room_label": draft.room_label,
        "rent": draft.rent,
        "meter_previous": meter_previous,
        "phone": draft.phone or None,
        "photo_ref": draft.photo_ref or tenant.photo_ref,
    })
    roster.tenants[roster.tenants.index(tenant)] = updated
    return updated


def delete_tenant(roster: Roster, tenant_id: int) -> Roster:
    """Remove a tenant by id, keeping the order of the others."""
    tenant = _find(roster, tenant_id)
    roster.tenants.remove(tenant)
    return roster


def search_tenants(roster: Roster, term: str) -> list[Tenant]:
    """
    Case-insensitive substring search over name, first name, room and phone.

    An empty term matches everyone.
    """
    needle = (term or "").strip().casefold()
    if not needle:
        return list(roster)

    def haystack(tenant: Tenant) -> str:
        parts = [tenant.name, tenant.first_name, tenant.room_label, tenant.phone or ""]
        return " ".join(parts).casefold()

    return [tenant for tenant in roster if needle in haystack(tenant)]


def tenant_changes(before: Tenant, after: Tenant) -> dict[str, Any]:
    """Field-by-field diff of two snapshots of the same tenant."""
    old = before.model_dump()
    new = after.model_dump()
    return {
        field: {"from": old[field], "to": new[field]}
        for field in new
        if old[field] != new[field]
    }

