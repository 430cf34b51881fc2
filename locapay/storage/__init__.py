"""
Storage Package

Provides the persistence collaborator for the billing core: abstract
interfaces plus JSON file and in-memory implementations.
"""

from locapay.storage.interface import (
    AuditStorageInterface,
    RosterStorageInterface,
    StorageError,
)
from locapay.storage.json_file import (
    JsonFileRosterStorage,
    JsonLinesAuditStorage,
)
from locapay.storage.memory import (
    InMemoryAuditStorage,
    InMemoryRosterStorage,
)
from locapay.storage.seed import seed_roster

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "RosterStorageInterface",
    # Exceptions
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryRosterStorage",
    "JsonFileRosterStorage",
    "JsonLinesAuditStorage",
    # Seed data
    "seed_roster",
]
