"""Validation package."""

from locapay.validation.errors import (
    CurrentBelowPreviousError,
    DuplicateRoomError,
    InvalidNumberError,
    MissingRequiredFieldError,
    NegativeValueError,
    RosterError,
    TenantNotFoundError,
)
from locapay.validation.validator import (
    ensure_valid_draft,
    require_int,
    review_draft,
    user_friendly_summary,
    validate_meter_update,
)

__all__ = [
    # Errors
    "CurrentBelowPreviousError",
    "DuplicateRoomError",
    "InvalidNumberError",
    "MissingRequiredFieldError",
    "NegativeValueError",
    "RosterError",
    "TenantNotFoundError",
    # Checks
    "ensure_valid_draft",
    "require_int",
    "review_draft",
    "user_friendly_summary",
    "validate_meter_update",
]
