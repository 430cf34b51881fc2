"""Tests for roster and audit storage backends."""

import json

import pytest

from locapay.models.audit import AuditEventBuilder, AuditEventType
from locapay.models.tenant import Roster, TenantDraft
from locapay.roster import add_tenant, edit_tenant
from locapay.storage import (
    InMemoryAuditStorage,
    InMemoryRosterStorage,
    JsonFileRosterStorage,
    JsonLinesAuditStorage,
    StorageError,
    seed_roster,
)

from tests.conftest import make_tenant


class TestJsonFileRosterStorage:
    """Tests for the JSON file roster backend."""

    def test_missing_file_falls_back_to_seed(self, tmp_path):
        """Test first start gets the demo roster."""
        storage = JsonFileRosterStorage(tmp_path / "roster.json")
        roster = storage.load()
        assert roster == seed_roster()
        assert storage.last_load_seeded is True

    def test_missing_file_without_seed_is_empty(self, tmp_path):
        storage = JsonFileRosterStorage(tmp_path / "roster.json", seed=None)
        assert len(storage.load()) == 0
        assert storage.last_load_seeded is False

    def test_corrupt_file_falls_back_to_seed(self, tmp_path):
        """Test undecodable JSON never fails the load."""
        path = tmp_path / "roster.json"
        path.write_text("{not json", encoding="utf-8")
        storage = JsonFileRosterStorage(path)
        assert len(storage.load()) == 5
        assert storage.last_load_seeded is True

    def test_inconsistent_file_falls_back_to_seed(self, tmp_path):
        """Test a stored roster with a duplicate room is not trusted."""
        path = tmp_path / "roster.json"
        tenants = [
            make_tenant(1, "A-101").model_dump(),
            make_tenant(2, "a-101").model_dump(),
        ]
        path.write_text(json.dumps({"tenants": tenants}), encoding="utf-8")
        storage = JsonFileRosterStorage(path)
        assert storage.load() == seed_roster()

    def test_save_then_load(self, tmp_path, roster):
        """Test a saved roster loads back identical."""
        storage = JsonFileRosterStorage(tmp_path / "roster.json")
        add_tenant(roster, TenantDraft(
            name="Kone", first_name="Awa", room_label="C-302",
            rent=160000, meter_reading=500, phone="+228 90 00 00 00",
        ))
        storage.save(roster)

        loaded = storage.load()
        assert loaded == roster
        assert storage.last_load_seeded is False

    def test_edited_roster_reloads(self, tmp_path, roster):
        """Test an edit with a long name survives a save and reload."""
        storage = JsonFileRosterStorage(tmp_path / "roster.json")
        add_tenant(roster, TenantDraft(
            name="Kone", first_name="Awa", room_label="Z-9", rent=160000,
        ))
        edit_tenant(roster, 1, TenantDraft(
            name="N" * 150, first_name="Mamadou", room_label="A-101", rent=150000,
        ))
        storage.save(roster)

        loaded = storage.load()
        assert storage.last_load_seeded is False
        assert loaded == roster
        assert loaded.get(6).room_label == "Z-9"
        assert loaded.get(1).name == "N" * 150

    def test_save_is_idempotent(self, tmp_path, roster):
        path = tmp_path / "roster.json"
        storage = JsonFileRosterStorage(path)
        storage.save(roster)
        first = path.read_text(encoding="utf-8")
        storage.save(roster)
        assert path.read_text(encoding="utf-8") == first

    def test_save_leaves_no_temporary_files(self, tmp_path, roster):
        JsonFileRosterStorage(tmp_path / "roster.json").save(roster)
        assert [p.name for p in tmp_path.iterdir()] == ["roster.json"]

    def test_save_creates_parent_directories(self, tmp_path, roster):
        path = tmp_path / "data" / "nested" / "roster.json"
        JsonFileRosterStorage(path).save(roster)
        assert path.exists()

    def test_save_failure_raises_storage_error(self, tmp_path, roster):
        """Test a path that cannot be written surfaces as StorageError."""
        target = tmp_path / "occupied"
        target.mkdir()
        (target / "keep").write_text("x", encoding="utf-8")

        with pytest.raises(StorageError):
            JsonFileRosterStorage(target).save(roster)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["occupied"]


class TestJsonLinesAuditStorage:
    """Tests for the JSON lines audit backend."""

    def test_append_and_read_newest_first(self, tmp_path):
        storage = JsonLinesAuditStorage(tmp_path / "audit.jsonl")
        assert storage.append_event(AuditEventBuilder.roster_loaded(5, seeded=True))
        assert storage.append_event(AuditEventBuilder.tenant_deleted(3))

        events = storage.recent_events()
        assert [e.event_type for e in events] == [
            AuditEventType.TENANT_DELETED,
            AuditEventType.ROSTER_SEEDED,
        ]

    def test_limit(self, tmp_path):
        storage = JsonLinesAuditStorage(tmp_path / "audit.jsonl")
        for tenant_id in range(1, 6):
            storage.append_event(AuditEventBuilder.tenant_deleted(tenant_id))
        assert [e.entity_id for e in storage.recent_events(limit=2)] == [5, 4]

    def test_unreadable_lines_are_skipped(self, tmp_path):
        """Test a damaged line does not hide the rest of the trail."""
        path = tmp_path / "audit.jsonl"
        storage = JsonLinesAuditStorage(path)
        storage.append_event(AuditEventBuilder.tenant_deleted(1))
        with path.open("a", encoding="utf-8") as handle:
            handle.write("garbage\n\n")
        storage.append_event(AuditEventBuilder.tenant_deleted(2))

        assert [e.entity_id for e in storage.recent_events()] == [2, 1]

    def test_no_file_means_no_events(self, tmp_path):
        assert JsonLinesAuditStorage(tmp_path / "audit.jsonl").recent_events() == []

    def test_append_failure_returns_false(self, tmp_path):
        """Test an unwritable audit file never raises."""
        storage = JsonLinesAuditStorage(tmp_path)
        assert storage.append_event(AuditEventBuilder.tenant_deleted(1)) is False


class TestInMemoryStorage:
    """Tests for the in-memory backends."""

    def test_roster_copies_are_isolated(self, roster):
        """Test unsaved mutations do not leak into storage."""
        storage = InMemoryRosterStorage(roster)
        loaded = storage.load()
        loaded.tenants.pop()

        assert len(storage.load()) == 5
        storage.save(loaded)
        assert len(storage.stored) == 4
        assert storage.save_count == 1

    def test_empty_storage(self):
        storage = InMemoryRosterStorage()
        assert storage.load() == Roster()
        assert storage.last_load_seeded is False

    def test_seed_when_empty(self):
        storage = InMemoryRosterStorage(seed_when_empty=True)
        assert len(storage.load()) == 5
        assert storage.last_load_seeded is True

    def test_audit_storage_order(self):
        storage = InMemoryAuditStorage()
        storage.append_event(AuditEventBuilder.tenant_deleted(1))
        storage.append_event(AuditEventBuilder.tenant_deleted(2))
        assert [e.entity_id for e in storage.recent_events()] == [2, 1]
        assert [e.entity_id for e in storage.events] == [1, 2]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
