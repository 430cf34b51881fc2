"""Shared fixtures for LocaPay tests."""

import pytest

from locapay.audit import AuditLogger
from locapay.models.tenant import Roster, Tenant
from locapay.storage import InMemoryAuditStorage, InMemoryRosterStorage, seed_roster


def make_tenant(
    tenant_id: int,
    room_label: str,
    rent: int = 100000,
    meter_previous: int = 0,
    meter_current: int = 0,
    name: str = "Test",
    first_name: str = "Tenant",
) -> Tenant:
    return Tenant(
        id=tenant_id,
        name=name,
        first_name=first_name,
        room_label=room_label,
        rent=rent,
        meter_previous=meter_previous,
        meter_current=meter_current,
    )


@pytest.fixture
def roster() -> Roster:
    """The five demo tenants."""
    return seed_roster()


@pytest.fixture
def two_tenant_roster() -> Roster:
    """Diallo (125 kWh) and Ndiaye (130 kWh)."""
    return Roster(tenants=[
        make_tenant(1, "A-101", rent=150000, meter_previous=120, meter_current=245,
                    name="Diallo", first_name="Mamadou"),
        make_tenant(2, "A-102", rent=175000, meter_previous=180, meter_current=310,
                    name="Ndiaye", first_name="Fatou"),
    ])


@pytest.fixture
def roster_storage(roster) -> InMemoryRosterStorage:
    return InMemoryRosterStorage(roster)


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage) -> AuditLogger:
    return AuditLogger(audit_storage)
