"""In-memory storage backends, used by tests and when no file is configured."""

from typing import Optional

from locapay.models.audit import AuditEvent
from locapay.models.tenant import Roster
from locapay.storage.interface import AuditStorageInterface, RosterStorageInterface
from locapay.storage.seed import seed_roster


class InMemoryRosterStorage(RosterStorageInterface):
    """
    Keeps a private copy of the last saved roster.

    Copies go in and out so that later mutations of the session's roster
    are only visible here once save() is called.
    """

    def __init__(self, roster: Optional[Roster] = None, seed_when_empty: bool = False):
        self._stored = roster.model_copy(deep=True) if roster is not None else None
        self._seed_when_empty = seed_when_empty
        self.save_count = 0
        self.last_load_seeded = False

    def load(self) -> Roster:
        self.last_load_seeded = False
        if self._stored is not None:
            return self._stored.model_copy(deep=True)
        if self._seed_when_empty:
            self.last_load_seeded = True
            return seed_roster()
        return Roster()

    def save(self, roster: Roster) -> None:
        self._stored = roster.model_copy(deep=True)
        self.save_count += 1

    @property
    def stored(self) -> Optional[Roster]:
        return self._stored


class InMemoryAuditStorage(AuditStorageInterface):
    """Audit events kept in a list, oldest first."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self.events))[:limit]
