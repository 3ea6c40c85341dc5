"""
Storage Backend Module

Append-mostly record store behind the ATM audit trail, with one in-memory
implementation. Nothing is written to disk. Decimal values are kept as strings.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any
from decimal import Decimal
from datetime import datetime
import json
import threading
from dataclasses import dataclass, asdict


@dataclass
class StorageRecord:
    id: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready fields; timestamps as ISO 8601, Decimals as strings"""
        fields = asdict(self)
        fields['created_at'] = self.created_at.isoformat()
        return {
            key: str(value) if isinstance(value, Decimal) else value
            for key, value in fields.items()
        }


class StorageInterface(ABC):
    """Tables of JSON records keyed by id"""

    @abstractmethod
    def save(self, table: str, record_id: str, data: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def load_all(self, table: str) -> List[Dict[str, Any]]:
        """Every record of ``table`` in the order it was first saved"""
        pass

    @abstractmethod
    def find(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Records whose top-level fields equal every value in ``filters``"""
        pass

    @abstractmethod
    def count(self, table: str) -> int:
        pass

    @abstractmethod
    def clear_table(self, table: str) -> None:
        pass


class InMemoryStorage(StorageInterface):
    """Dict-backed store; every read and write works on a private copy"""

    def __init__(self):
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.RLock()

    def _rows(self, table: str) -> Dict[str, Dict[str, Any]]:
        return self._tables.setdefault(table, {})

    @staticmethod
    def _detach(record: Dict[str, Any]) -> Dict[str, Any]:
        return json.loads(json.dumps(record, default=str))

    def save(self, table: str, record_id: str, data: Dict[str, Any]) -> None:
        with self._lock:
            self._rows(table)[record_id] = self._detach(data)

    def load_all(self, table: str) -> List[Dict[str, Any]]:
        with self._lock:
            return [self._detach(row) for row in self._rows(table).values()]

    def find(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        with self._lock:
            return [
                self._detach(row)
                for row in self._rows(table).values()
                if all(row.get(field) == wanted for field, wanted in filters.items())
            ]

    def count(self, table: str) -> int:
        with self._lock:
            return len(self._rows(table))

    def clear_table(self, table: str) -> None:
        with self._lock:
            self._tables.pop(table, None)
