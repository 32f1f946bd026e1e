"""Bounded, insertion-ordered history of classified records.

Design notes:
    - Backed by a deque with maxlen, so append and eviction of the oldest
      record are O(1) regardless of capacity.
    - Exactly one writer (the controller's tick) appends.  Any number of
      readers may call snapshot() concurrently; each gets an independent
      immutable tuple and never observes a half-applied eviction.
    - A short lock covers append/copy so readers on other threads are
      safe too, not only coroutines on the controller's event loop.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from itertools import islice
from typing import Deque

from axion_monitor.domain.errors import InvalidConfiguration
from axion_monitor.domain.record import ClassifiedRecord

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000


class HistoryBuffer:
    """Fixed-capacity FIFO store of ClassifiedRecords, oldest first.

    Args:
        capacity: Maximum number of retained records.  Once full, each
            append evicts the oldest record.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise InvalidConfiguration(f"history capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._records: Deque[ClassifiedRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    # ── Mutation ─────────────────────────────────────────────────────────

    def append(self, record: ClassifiedRecord) -> None:
        """Add *record* at the tail, evicting from the head when full."""
        with self._lock:
            self._records.append(record)

    def clear(self) -> None:
        """Drop every record.  Idempotent."""
        with self._lock:
            dropped = len(self._records)
            self._records.clear()
        logger.debug("History cleared (%d record(s) dropped)", dropped)

    # ── Queries ──────────────────────────────────────────────────────────

    def snapshot(self) -> tuple[ClassifiedRecord, ...]:
        """Consistent, read-only copy of the retained records, oldest first."""
        with self._lock:
            return tuple(self._records)

    def latest(self, n: int) -> tuple[ClassifiedRecord, ...]:
        """The *n* most recent records, still oldest first."""
        if n <= 0:
            return ()
        with self._lock:
            if n >= len(self._records):
                return tuple(self._records)
            return tuple(islice(self._records, len(self._records) - n, None))

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __repr__(self) -> str:
        return f"HistoryBuffer(size={len(self)}, capacity={self._capacity})"
