"""
Data Models Package

This package contains all Pydantic models used by LocaPay.
All data flowing through the billing core must conform to these schemas.
"""

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

__all__ = [
    # Tenant models
    "BillingSummary",
    "ErrorKind",
    "Roster",
    "Tenant",
    "TenantDraft",
    "TenantStatement",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
