"""
Roster Validation

DESIGN DECISION: Validation happens in two forms:

REVIEW (review_draft):
- Collects every issue with a tenant draft at once
- Required fields, signs, room uniqueness, phone format
- Used by forms to show all problems in one go

ENFORCEMENT (ensure_valid_draft, validate_meter_update):
- Raises the typed RosterError of the first blocking issue
- Called by every roster operation BEFORE it mutates anything

IMPORTANT: Validation NEVER silently fixes values.
Lenient parsing of raw form input happens earlier, in locapay.parsing.
"""

import re
from typing import Optional

from locapay.models.tenant import (
    ErrorKind,
    Roster,
    TenantDraft,
    ValidationIssue,
    ValidationResult,
)
from locapay.validation.errors import (
    CurrentBelowPreviousError,
    DuplicateRoomError,
    InvalidNumberError,
    MissingRequiredFieldError,
    NegativeValueError,
)


PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{8,}$")

REQUIRED_TEXT_FIELDS = ("name", "first_name", "room_label")


def require_int(field: str, value: object) -> int:
    """Reject anything that is not a plain int (bools included)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidNumberError(field, value)
    return value


def validate_meter_update(new_previous: int, new_current: int) -> None:
    """
    Check a pending pair of meter readings.

    Must pass before any commit to a tenant's meter fields.

    Raises:
        InvalidNumberError: If either reading is not an int
        NegativeValueError: If either reading is negative
        CurrentBelowPreviousError: If new_current < new_previous
    """
    require_int("meter_previous", new_previous)
    require_int("meter_current", new_current)

    if new_previous < 0:
        raise NegativeValueError("meter_previous", new_previous)
    if new_current < 0:
        raise NegativeValueError("meter_current", new_current)

    if new_current < new_previous:
        raise CurrentBelowPreviousError(new_previous, new_current)


def review_draft(
    roster: Roster,
    draft: TenantDraft,
    exclude_id: Optional[int] = None,
) -> ValidationResult:
    """
    Review a tenant draft against the roster.

    Args:
        roster: Current roster, for the duplicate-room check
        draft: The submitted form data
        exclude_id: Tenant being edited (its own room is not a duplicate)

    Returns:
        ValidationResult with all issues found
    """
    issues = []

    # Required fields. A zero rent counts as missing.
    for field in REQUIRED_TEXT_FIELDS:
        if not getattr(draft, field):
            issues.append(ValidationIssue(
                field=field,
                kind=ErrorKind.MISSING_REQUIRED_FIELD,
                message=f"{field.replace('_', ' ').capitalize()} is required",
                severity="error",
            ))
    if not draft.rent:
        issues.append(ValidationIssue(
            field="rent",
            kind=ErrorKind.MISSING_REQUIRED_FIELD,
            message="Rent is required",
            severity="error",
            suggested_fix="Enter the monthly rent as a whole number",
        ))

    # Signs
    if draft.rent < 0:
        issues.append(ValidationIssue(
            field="rent",
            kind=ErrorKind.NEGATIVE_VALUE,
            message="Rent cannot be negative",
            severity="error",
        ))
    if draft.meter_reading is not None and draft.meter_reading < 0:
        issues.append(ValidationIssue(
            field="meter_reading",
            kind=ErrorKind.NEGATIVE_VALUE,
            message="Meter reading cannot be negative",
            severity="error",
        ))

    # Room uniqueness
    if draft.room_label and roster.room_taken(draft.room_label, exclude_id=exclude_id):
        issues.append(ValidationIssue(
            field="room_label",
            kind=ErrorKind.DUPLICATE_ROOM,
            message=f"Room {draft.room_label} is already occupied",
            severity="error",
            suggested_fix="Pick a free room or edit the current occupant",
        ))

    # Phone is display-only, so a strange value is only a warning
    if draft.phone and not PHONE_PATTERN.match(draft.phone):
        issues.append(ValidationIssue(
            field="phone",
            message=f"Phone number ({draft.phone}) looks unusual",
            severity="warning",
            suggested_fix="Use digits, spaces, dashes and an optional leading +",
        ))

    is_valid = not any(issue.severity == "error" for issue in issues)

    return ValidationResult(is_valid=is_valid, issues=issues)


def ensure_valid_draft(
    roster: Roster,
    draft: TenantDraft,
    exclude_id: Optional[int] = None,
) -> ValidationResult:
    """
    Review a draft and raise on the first blocking issue.

    Order: missing fields, then negative values, then duplicate room.

    Returns:
        The ValidationResult (may still carry warnings)
    """
    result = review_draft(roster, draft, exclude_id=exclude_id)
    if result.is_valid:
        return result

    errors = result.errors

    missing = [
        issue.field for issue in errors
        if issue.kind == ErrorKind.MISSING_REQUIRED_FIELD
    ]
    if missing:
        raise MissingRequiredFieldError(missing)

    for issue in errors:
        if issue.kind == ErrorKind.NEGATIVE_VALUE:
            raise NegativeValueError(issue.field, getattr(draft, issue.field))

    raise DuplicateRoomError(draft.room_label)


def user_friendly_summary(result: ValidationResult) -> str:
    """
    Generate a short summary of a draft review.

    This is what the form shows above the submit button.
    """
    if result.is_valid and not result.warnings:
        return "✅ All checks passed!"

    lines = []

    if result.has_errors:
        lines.append("❌ Please fix the following:")
        for issue in result.errors:
            lines.append(f"   • {issue.message}")
            if issue.suggested_fix:
                lines.append(f"     💡 {issue.suggested_fix}")

    if result.warnings:
        if lines:
            lines.append("")
        lines.append("⚠️ Please verify the following:")
        for warning in result.warnings:
            lines.append(f"   • {warning}")

    return "\n".join(lines)
