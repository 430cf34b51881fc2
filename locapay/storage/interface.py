"""
Abstract Storage Interface

DESIGN DECISION: The billing core never touches storage. The hosting
application loads a Roster once at session start, threads it through
the core, and saves it after every committed mutation. This allows us to:
1. Keep the core pure and synchronous
2. Use in-memory storage for testing
3. Swap the JSON file for something else later

The interface is intentionally tiny: load and save the whole roster.
"""

from abc import ABC, abstractmethod

from locapay.models.audit import AuditEvent
from locapay.models.tenant import Roster


class RosterStorageInterface(ABC):
    """
    Abstract interface for roster persistence.

    Implementations own the read/decode/corrupt-data path: load() must
    always return a usable Roster.
    """

    # Set by load(): True when the returned roster is the seed fallback
    last_load_seeded: bool = False

    @abstractmethod
    def load(self) -> Roster:
        """
        Load the stored roster.

        Returns:
            The stored roster, or the seed roster when nothing is stored
            or the stored state cannot be decoded
        """
        pass

    @abstractmethod
    def save(self, roster: Roster) -> None:
        """
        Persist the whole roster. Idempotent.

        Raises:
            StorageError: If the roster could not be written
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
