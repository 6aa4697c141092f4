"""
Process-lifetime repositories for generated trends and counter-measures.

Records are kept most-recent-first and are never mutated or evicted. Inserts
and reads take a lock so threaded servers never observe a partial insert.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Generic, List, Optional, TypeVar

from models import CounterMeasure, Trend

RecordT = TypeVar("RecordT", Trend, CounterMeasure)


class IdGenerator:
    """Millisecond-derived ids that never repeat within the process."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            candidate = int(self._clock() * 1000)
            if candidate <= self._last:
                candidate = self._last + 1
            self._last = candidate
            return str(candidate)


class InMemoryRepository(Generic[RecordT]):
    def __init__(self) -> None:
        self._records: List[RecordT] = []
        self._lock = threading.Lock()

    def insert_front(self, record: RecordT) -> RecordT:
        with self._lock:
            self._records.insert(0, record)
        return record

    def list(self) -> List[RecordT]:
        with self._lock:
            return list(self._records)

    def find_by_id(self, record_id: str) -> Optional[RecordT]:
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return record
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class TrendStore(InMemoryRepository[Trend]):
    pass


class CounterMeasureStore(InMemoryRepository[CounterMeasure]):
    pass
