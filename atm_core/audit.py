"""
Audit Trail Module

Every ATM dispatch, successful or declined, becomes one event. Each event
stores the SHA-256 of its predecessor, so editing or removing a stored event
breaks the chain.
"""

import hashlib
import json
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Dict, List, Optional, Any
from enum import Enum
from decimal import Decimal
import threading
import uuid

from .storage import StorageInterface, StorageRecord


class AuditEventType(Enum):
    AUTHENTICATION_FAILED = "authentication_failed"
    BALANCE_INQUIRY = "balance_inquiry"
    TRANSACTION_COMPLETED = "transaction_completed"
    TRANSACTION_DECLINED = "transaction_declined"


def _serialize(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_serialize(k): _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


@dataclass
class AuditEvent(StorageRecord):
    event_type: AuditEventType
    entity_type: str
    entity_id: str
    previous_hash: str
    current_hash: str
    metadata: Dict[str, Any]

    def __post_init__(self):
        # metadata is stored as JSON, so hash what will be stored
        self.metadata = _serialize(self.metadata or {})

    def calculate_hash(self) -> str:
        """SHA-256 over every field except current_hash"""
        payload = {
            'id': self.id,
            'created_at': self.created_at.isoformat(),
            'event_type': self.event_type.value,
            'entity_type': self.entity_type,
            'entity_id': self.entity_id,
            'previous_hash': self.previous_hash,
            'metadata': self.metadata
        }
        canonical = json.dumps(payload, sort_keys=True, separators=(',', ':'))
        return hashlib.sha256(canonical.encode('utf-8')).hexdigest()

    def verify_hash(self) -> bool:
        return self.current_hash == self.calculate_hash()

    def to_dict(self) -> Dict[str, Any]:
        record = super().to_dict()
        record['event_type'] = self.event_type.value
        return record

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AuditEvent':
        data = dict(data)
        if isinstance(data['created_at'], str):
            data['created_at'] = datetime.fromisoformat(data['created_at'])
        if isinstance(data['event_type'], str):
            data['event_type'] = AuditEventType(data['event_type'])
        return cls(**data)


class AuditTrail:
    """
    Hash-chained log of ATM dispatches

    A trail opened over storage that already holds events continues the
    existing chain.
    """

    def __init__(self, storage: StorageInterface, table_name: str = "audit_events"):
        self.storage = storage
        self.table_name = table_name
        self._lock = threading.Lock()
        history = self.get_all_events()
        self._last_hash = history[-1].current_hash if history else ""

    def log_event(
        self,
        event_type: AuditEventType,
        entity_type: str,
        entity_id: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> AuditEvent:
        """
        Append one event after the current chain head

        Args:
            event_type: What happened at the terminal
            entity_type: Always "card" for ATM dispatches
            entity_id: Masked card number
            metadata: Action, outcome and balances; never the PIN

        Returns:
            The stored AuditEvent with its hash filled in
        """
        with self._lock:
            event = AuditEvent(
                id=str(uuid.uuid4()),
                created_at=datetime.now(timezone.utc),
                event_type=event_type,
                entity_type=entity_type,
                entity_id=entity_id,
                previous_hash=self._last_hash,
                current_hash="",
                metadata=metadata or {}
            )
            event.current_hash = event.calculate_hash()
            self.storage.save(self.table_name, event.id, event.to_dict())
            self._last_hash = event.current_hash
            return event

    def get_all_events(self) -> List[AuditEvent]:
        return [AuditEvent.from_dict(d) for d in self.storage.load_all(self.table_name)]

    def get_events_for_entity(self, entity_type: str, entity_id: str) -> List[AuditEvent]:
        rows = self.storage.find(self.table_name, {
            'entity_type': entity_type,
            'entity_id': entity_id
        })
        return [AuditEvent.from_dict(d) for d in rows]

    def get_events_by_type(self, event_type: AuditEventType) -> List[AuditEvent]:
        rows = self.storage.find(self.table_name, {'event_type': event_type.value})
        return [AuditEvent.from_dict(d) for d in rows]

    def count_events(self) -> int:
        return self.storage.count(self.table_name)

    def verify_integrity(self) -> Dict[str, Any]:
        """
        Walk the chain from the first event

        ``hash_errors`` lists events whose content no longer matches their
        hash; ``chain_breaks`` lists events that do not point at the event
        stored before them.
        """
        events = self.get_all_events()
        hash_errors = []
        chain_breaks = []

        expected_previous = ""
        for position, event in enumerate(events):
            if not event.verify_hash():
                hash_errors.append({
                    'event_id': event.id,
                    'position': position,
                    'expected_hash': event.calculate_hash(),
                    'actual_hash': event.current_hash
                })
            if event.previous_hash != expected_previous:
                chain_breaks.append({
                    'event_id': event.id,
                    'position': position,
                    'expected_previous_hash': expected_previous,
                    'actual_previous_hash': event.previous_hash
                })
            expected_previous = event.current_hash

        return {
            'valid': not hash_errors and not chain_breaks,
            'total_events': len(events),
            'hash_errors': hash_errors,
            'chain_breaks': chain_breaks
        }
