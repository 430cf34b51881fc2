"""Roster operations package."""

from locapay.roster.operations import (
    add_tenant,
    apply_meter_update,
    delete_tenant,
    edit_tenant,
    search_tenants,
    tenant_changes,
)

__all__ = [
    "add_tenant",
    "apply_meter_update",
    "delete_tenant",
    "edit_tenant",
    "search_tenants",
    "tenant_changes",
]
