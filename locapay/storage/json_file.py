"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON document on disk is the storage backend:
1. The roster is tens of tenants, rewritten whole on every save
2. No database setup required
3. The file can be inspected and backed up by hand

Writes go to a temporary file that then replaces the real one, so a
crash mid-write never leaves a half-written roster behind. Unreadable
or undecodable files fall back to the seed roster instead of failing.
"""

import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, Union

from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from locapay.log import get_logger
from locapay.models.audit import AuditEvent
from locapay.models.tenant import Roster
from locapay.storage.interface import (
    AuditStorageInterface,
    RosterStorageInterface,
    StorageError,
)
from locapay.storage.seed import seed_roster


logger = get_logger(__name__)

SeedFactory = Callable[[], Roster]


class JsonFileRosterStorage(RosterStorageInterface):
    """
    Roster persisted as one JSON document.

    Args:
        path: File holding the roster
        seed: Factory for the fallback roster. None means an empty roster.
    """

    def __init__(
        self,
        path: Union[str, Path],
        seed: Optional[SeedFactory] = seed_roster,
    ):
        self._path = Path(path)
        self._seed = seed
        self.last_load_seeded = False

    @property
    def path(self) -> Path:
        return self._path

    def _fallback(self) -> Roster:
        self.last_load_seeded = self._seed is not None
        return self._seed() if self._seed is not None else Roster()

    def load(self) -> Roster:
        """Read the roster, falling back to the seed when missing or corrupt."""
        self.last_load_seeded = False

        if not self._path.exists():
            logger.info("roster_file_missing", path=str(self._path))
            return self._fallback()

        try:
            raw = self._path.read_text(encoding="utf-8")
            return Roster.model_validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning(
                "roster_load_failed",
                path=str(self._path),
                error=str(e),
            )
            return self._fallback()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write_atomically(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def save(self, roster: Roster) -> None:
        """Write the whole roster, replacing the previous file."""
        try:
            self._write_atomically(roster.model_dump_json(indent=2))
        except OSError as e:
            raise StorageError(f"Failed to save roster to {self._path}: {e}") from e


class JsonLinesAuditStorage(AuditStorageInterface):
    """Append-only audit trail, one JSON object per line."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _append_line(self, line: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")

    def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event."""
        try:
            self._append_line(event.to_json_line())
            return True
        except OSError as e:
            # Audit logging should not break the main flow
            logger.error(
                "audit_append_failed",
                path=str(self._path),
                event_id=str(event.event_id),
                error=str(e),
            )
            return False

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Read back the newest events first, skipping unreadable lines."""
        if not self._path.exists():
            return []

        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise StorageError(f"Failed to read audit events: {e}") from e

        events = []
        for line in reversed(lines):
            if len(events) >= limit:
                break
            if not line.strip():
                continue
            try:
                events.append(AuditEvent.model_validate_json(line))
            except ValidationError:
                logger.warning("audit_line_unreadable", path=str(self._path))
        return events
