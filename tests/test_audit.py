"""
Test suite for audit module

Tests the hash-chained audit trail, tamper detection and the in-memory
store behind it.
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from atm_core.storage import InMemoryStorage
from atm_core.audit import AuditTrail, AuditEvent, AuditEventType


class TestAuditEvent:
    """Test AuditEvent functionality"""

    def make_event(self, **overrides):
        fields = dict(
            id="AUDIT001",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            event_type=AuditEventType.TRANSACTION_COMPLETED,
            entity_type="card",
            entity_id="************8700",
            previous_hash="",
            current_hash="",
            metadata={"amount": Decimal('100.00')}
        )
        fields.update(overrides)
        return AuditEvent(**fields)

    def test_metadata_serialization(self):
        event = self.make_event(metadata={
            "amount": Decimal('12.50'),
            "when": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "type": AuditEventType.BALANCE_INQUIRY,
            "nested": {"values": [Decimal('1')]}
        })
        assert event.metadata == {
            "amount": "12.50",
            "when": "2024-01-01T00:00:00+00:00",
            "type": "balance_inquiry",
            "nested": {"values": ["1"]}
        }

    def test_hash_is_deterministic(self):
        assert self.make_event().calculate_hash() == self.make_event().calculate_hash()
        assert len(self.make_event().calculate_hash()) == 64

    def test_hash_covers_metadata(self):
        a = self.make_event(metadata={"amount": "1"})
        b = self.make_event(metadata={"amount": "2"})
        assert a.calculate_hash() != b.calculate_hash()

    def test_dict_round_trip(self):
        event = self.make_event()
        event.current_hash = event.calculate_hash()
        restored = AuditEvent.from_dict(event.to_dict())
        assert restored.event_type == AuditEventType.TRANSACTION_COMPLETED
        assert restored.created_at == event.created_at
        assert restored.verify_hash()


class TestAuditTrail:
    """Test hash chaining and integrity checks"""

    def setup_method(self):
        self.storage = InMemoryStorage()
        self.audit_trail = AuditTrail(self.storage)

    def log(self, event_type=AuditEventType.BALANCE_INQUIRY, entity_id="****1111"):
        return self.audit_trail.log_event(
            event_type=event_type,
            entity_type="card",
            entity_id=entity_id,
            metadata={"action": "RequestCardBalance"}
        )

    def test_chain(self):
        first = self.log()
        second = self.log()
        assert first.previous_hash == ""
        assert second.previous_hash == first.current_hash
        assert self.audit_trail.count_events() == 2

    def test_empty_trail_is_valid(self):
        result = self.audit_trail.verify_integrity()
        assert result['valid'] is True
        assert result['total_events'] == 0

    def test_intact_chain_verifies(self):
        for _ in range(5):
            self.log()
        result = self.audit_trail.verify_integrity()
        assert result['valid'] is True
        assert result['total_events'] == 5

    def test_tampered_metadata_detected(self):
        event = self.log()
        self.log()
        data = self.storage.find("audit_events", {"id": event.id})[0]
        data['metadata']['action'] = "WithdrawFromCard"
        self.storage.save("audit_events", event.id, data)

        result = self.audit_trail.verify_integrity()
        assert result['valid'] is False
        assert result['hash_errors'][0]['event_id'] == event.id

    def test_chain_break_detected(self):
        self.log()
        second = self.log()
        data = self.storage.find("audit_events", {"id": second.id})[0]
        data['previous_hash'] = "0" * 64
        data['current_hash'] = AuditEvent.from_dict(dict(data)).calculate_hash()
        self.storage.save("audit_events", second.id, data)

        result = self.audit_trail.verify_integrity()
        assert result['valid'] is False
        assert result['hash_errors'] == []
        assert result['chain_breaks'][0]['position'] == 1

    def test_resumes_chain_from_existing_storage(self):
        last = self.log()
        resumed = AuditTrail(self.storage)
        event = resumed.log_event(AuditEventType.TRANSACTION_DECLINED, "card", "****1111")
        assert event.previous_hash == last.current_hash
        assert resumed.verify_integrity()['valid'] is True

    def test_queries(self):
        self.log(AuditEventType.BALANCE_INQUIRY, "****1111")
        self.log(AuditEventType.AUTHENTICATION_FAILED, "****2222")
        self.log(AuditEventType.AUTHENTICATION_FAILED, "****1111")

        assert len(self.audit_trail.get_events_by_type(AuditEventType.AUTHENTICATION_FAILED)) == 2
        assert len(self.audit_trail.get_events_for_entity("card", "****1111")) == 2


class TestInMemoryStorage:
    """Test the record store"""

    def test_reads_and_writes_are_detached(self):
        storage = InMemoryStorage()
        record = {"nested": {"x": 1}}
        storage.save("t", "1", record)
        record["nested"]["x"] = 2
        storage.load_all("t")[0]["nested"]["x"] = 3
        storage.find("t", {})[0]["nested"]["x"] = 4
        assert storage.load_all("t") == [{"nested": {"x": 1}}]

    def test_load_all_keeps_insertion_order(self):
        storage = InMemoryStorage()
        for key in ("b", "a", "c"):
            storage.save("t", key, {"key": key})
        storage.save("t", "b", {"key": "b", "again": True})
        assert [r["key"] for r in storage.load_all("t")] == ["b", "a", "c"]

    def test_storage_has_no_single_record_lookup(self):
        """Audit events are only read as a chain or through filters"""
        assert not hasattr(InMemoryStorage(), "load")

    def test_find_count_clear(self):
        storage = InMemoryStorage()
        storage.save("t", "1", {"kind": "a"})
        storage.save("t", "2", {"kind": "b"})
        assert storage.find("t", {"kind": "b"}) == [{"kind": "b"}]
        assert storage.count("t") == 2
        storage.clear_table("t")
        assert storage.count("t") == 0
        assert storage.load_all("t") == []
