"""
Tests for LocaPay models

Test strategy:
1. Unit tests for individual components (models, engine, validators)
2. Session tests with in-memory storage
3. File storage tests under pytest's tmp_path
"""

import pytest
from decimal import Decimal

from locapay.models.tenant import (
    BillingSummary,
    ErrorKind,
    Roster,
    Tenant,
    TenantDraft,
    TenantStatement,
    ValidationIssue,
    ValidationResult,
)
from locapay.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

from tests.conftest import make_tenant


class TestTenantModel:
    """Tests for the Tenant model."""

    def test_tenant_creation(self):
        """Test Tenant model creation."""
        tenant = Tenant(
            id=1,
            name="Diallo",
            first_name="Mamadou",
            room_label="A-101",
            rent=150000,
            meter_previous=120,
            meter_current=245,
            phone="+228 90 00 00 00",
        )
        assert tenant.display_name == "Diallo Mamadou"
        assert tenant.photo_ref is None

    def test_tenant_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        tenant = make_tenant(1, "  B-201  ", name="  Sarr ")
        assert tenant.room_label == "B-201"
        assert tenant.name == "Sarr"

    def test_room_key_is_case_folded(self):
        """Test room_key ignores case."""
        assert make_tenant(1, "a-101").room_key == make_tenant(2, "A-101").room_key

    def test_tenant_rejects_negative_rent(self):
        """Test that negative rent is rejected."""
        with pytest.raises(ValueError):
            make_tenant(1, "A-101", rent=-1)

    def test_tenant_rejects_negative_readings(self):
        """Test that negative meter readings are rejected."""
        with pytest.raises(ValueError):
            make_tenant(1, "A-101", meter_previous=-5)

    def test_tenant_is_strict_about_numbers(self):
        """Test that numeric strings are not coerced."""
        with pytest.raises(ValueError):
            Tenant(id=1, name="Ba", first_name="Moussa", room_label="C-301", rent="185000")

    def test_tenant_accepts_long_names(self):
        """Test that names have no upper length limit."""
        tenant = make_tenant(1, "R" * 80, name="N" * 150)
        assert len(tenant.name) == 150

    def test_tenant_assignment_is_validated(self):
        """Test that assigning an invalid value is refused."""
        tenant = make_tenant(1, "A-101", rent=1000)
        with pytest.raises(ValueError):
            tenant.rent = -1
        with pytest.raises(ValueError):
            tenant.meter_current = "12"
        assert tenant.rent == 1000

    def test_tenant_allows_readings_going_backwards(self):
        """Test that an inconsistent stored pair is still representable."""
        tenant = make_tenant(1, "A-101", meter_previous=300, meter_current=200)
        assert tenant.meter_current < tenant.meter_previous


class TestRosterModel:
    """Tests for the Roster model."""

    def test_roster_iterates_in_insertion_order(self, roster):
        """Test iteration follows display order."""
        assert [tenant.id for tenant in roster] == [1, 2, 3, 4, 5]
        assert len(roster) == 5

    def test_roster_get(self, roster):
        """Test lookup by id."""
        assert roster.get(3).name == "Sarr"
        assert roster.get(99) is None

    def test_next_id(self):
        """Test next id is max + 1, or 1 for an empty roster."""
        assert Roster().next_id() == 1
        roster = Roster(tenants=[make_tenant(2, "A"), make_tenant(7, "B")])
        assert roster.next_id() == 8

    def test_room_taken_is_case_insensitive(self, roster):
        """Test room lookups ignore case and surrounding spaces."""
        assert roster.room_taken("a-101") is True
        assert roster.room_taken(" A-101 ") is True
        assert roster.room_taken("Z-999") is False

    def test_room_taken_excludes_tenant(self, roster):
        """Test a tenant's own room is not taken for itself."""
        assert roster.room_taken("A-101", exclude_id=1) is False
        assert roster.room_taken("A-101", exclude_id=2) is True

    def test_total_rent(self, two_tenant_roster):
        assert two_tenant_roster.total_rent() == 325000

    def test_roster_rejects_duplicate_ids(self):
        """Test duplicate ids fail validation."""
        with pytest.raises(ValueError, match="Tenant ids must be unique"):
            Roster(tenants=[make_tenant(1, "A"), make_tenant(1, "B")])

    def test_roster_rejects_duplicate_rooms(self):
        """Test rooms differing only by case fail validation."""
        with pytest.raises(ValueError, match="Room labels must be unique"):
            Roster(tenants=[make_tenant(1, "a-101"), make_tenant(2, "A-101")])


class TestDraftModel:
    """Tests for TenantDraft."""

    def test_draft_defaults(self):
        """Test an empty draft."""
        draft = TenantDraft()
        assert draft.name == ""
        assert draft.rent == 0
        assert draft.meter_reading is None

    def test_draft_strips_whitespace(self):
        draft = TenantDraft(room_label="  a-101 ")
        assert draft.room_label == "a-101"


class TestBillingSummary:
    """Tests for BillingSummary helpers."""

    def test_statement_lookup_and_total_due(self):
        """Test statement_for and total_due."""
        summary = BillingSummary(
            bill_amount=Decimal("1000"),
            total_rent=300,
            total_consumption=10,
            statements=[
                TenantStatement(
                    tenant_id=1, display_name="A B", room_label="1", rent=100,
                    consumption=5, percentage=50, electricity_share=500, total_due=600,
                ),
                TenantStatement(
                    tenant_id=2, display_name="C D", room_label="2", rent=200,
                    consumption=5, percentage=50, electricity_share=500, total_due=700,
                ),
            ],
            total_shares=1000,
            rounding_drift=Decimal("0"),
        )
        assert summary.total_due == 1300
        assert summary.statement_for(2).rent == 200
        assert summary.statement_for(3) is None


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="rent",
                    kind=ErrorKind.MISSING_REQUIRED_FIELD,
                    message="Rent is required",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.warnings == []

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="phone",
                    message="Phone number looks unusual",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0
        assert result.warnings == ["Phone number looks unusual"]

    def test_issue_severity_pattern(self):
        """Test unknown severities are rejected."""
        with pytest.raises(ValueError):
            ValidationIssue(field="x", message="m", severity="fatal")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.ROSTER_LOADED,
            description="Roster loaded",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.tenant_added(
            tenant_id=6,
            display_name="Kone Awa",
            room_label="C-302",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "tenant_added"
        assert log_dict["entity_id"] == 6
        assert log_dict["details"]["room_label"] == "C-302"

    def test_audit_event_json_line_reads_back(self):
        """Test a JSON line parses back into an equivalent event."""
        event = AuditEventBuilder.meter_reading_recorded(
            tenant_id=2, meter_previous=180, meter_current=310,
        )
        parsed = AuditEvent.model_validate_json(event.to_json_line())
        assert parsed.event_id == event.event_id
        assert parsed.event_type == AuditEventType.METER_READING_RECORDED
        assert parsed.details == {"meter_previous": 180, "meter_current": 310}

    def test_validation_failed_builder(self):
        """Test AuditEventBuilder.validation_failed."""
        event = AuditEventBuilder.validation_failed(
            operation="add_tenant",
            error_code="duplicate_room",
            error_message="Room A-101 is already occupied",
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.entity_type is None
        assert event.error_code == "duplicate_room"
        assert event.is_user_action is True

    def test_roster_loaded_builder_seeded(self):
        """Test seeded rosters get their own event type."""
        event = AuditEventBuilder.roster_loaded(tenant_count=5, seeded=True)
        assert event.event_type == AuditEventType.ROSTER_SEEDED


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
