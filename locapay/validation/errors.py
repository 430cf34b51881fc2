"""
Roster Error Taxonomy

Every refused mutation raises one of these. They are all local,
recoverable validation failures: the roster is left exactly as it was
and the caller decides how to show the message to the user.
"""

from typing import Optional, Sequence

from locapay.models.tenant import ErrorKind


class RosterError(Exception):
    """Base exception for refused roster operations."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NegativeValueError(RosterError):
    """A rent, meter reading or bill amount was negative."""

    kind = ErrorKind.NEGATIVE_VALUE

    def __init__(self, field: str, value: object):
        super().__init__(f"{field.replace('_', ' ').capitalize()} cannot be negative (got {value})")
        self.field = field
        self.value = value


class CurrentBelowPreviousError(RosterError):
    """The new meter reading is lower than the previous one."""

    kind = ErrorKind.CURRENT_BELOW_PREVIOUS

    def __init__(self, previous: int, current: int):
        super().__init__(
            f"Current reading ({current}) cannot be lower than the previous reading ({previous})"
        )
        self.previous = previous
        self.current = current


class MissingRequiredFieldError(RosterError):
    """One or more required tenant fields are empty."""

    kind = ErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)
        super().__init__(
            "Please fill in all required fields: " + ", ".join(self.fields)
        )


class DuplicateRoomError(RosterError):
    """The room is already occupied by another tenant."""

    kind = ErrorKind.DUPLICATE_ROOM

    def __init__(self, room_label: str):
        super().__init__(f"Room {room_label} is already occupied")
        self.room_label = room_label


class TenantNotFoundError(RosterError):
    """No tenant with this id in the roster."""

    kind = ErrorKind.TENANT_NOT_FOUND

    def __init__(self, tenant_id: object):
        super().__init__(f"Tenant not found: {tenant_id}")
        self.tenant_id = tenant_id


class InvalidNumberError(RosterError):
    """A core operation received something other than a whole number."""

    kind = ErrorKind.INVALID_NUMBER

    def __init__(self, field: str, value: object, expected: Optional[str] = None):
        super().__init__(
            f"{field.replace('_', ' ').capitalize()} must be {expected or 'a whole number'} "
            f"(got {value!r})"
        )
        self.field = field
        self.value = value
