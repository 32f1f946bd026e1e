"""QueueSampleSource — a bounded inbox filled by pushed sensor payloads.

Gateways that stream samples at their own pace (e.g. over the
/ws/samples WebSocket) push into this queue; the controller drains one
sample per tick.  An empty queue is a transient per-tick failure, so a
gateway that goes silent eventually escalates to SourceUnavailable.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Deque

from axion_monitor.domain.errors import InvalidConfiguration
from axion_monitor.domain.sample import RawSample
from axion_monitor.sources.base import SampleSource
from axion_monitor.sources.payload import parse_raw_sample

logger = logging.getLogger(__name__)


class QueueEmpty(Exception):
    """Raised when a tick finds no pending sample."""


class QueueSampleSource(SampleSource):
    """Thread-safe FIFO of pending samples.  When full, the oldest is dropped.

    Args:
        max_pending: Maximum number of samples waiting to be consumed.
    """

    def __init__(self, max_pending: int = 100) -> None:
        if max_pending <= 0:
            raise InvalidConfiguration(f"max_pending must be positive, got {max_pending}")
        self._pending: Deque[RawSample] = deque(maxlen=max_pending)
        self._lock = threading.Lock()
        self.accepted_count: int = 0
        self.dropped_count: int = 0

    @property
    def source_name(self) -> str:
        return "stream"

    def push(self, sample: RawSample) -> None:
        """Enqueue a sample, discarding the oldest pending one when full."""
        with self._lock:
            if len(self._pending) == self._pending.maxlen:
                self.dropped_count += 1
                logger.warning("Sample queue full — dropping oldest pending sample")
            self._pending.append(sample)
            self.accepted_count += 1

    def push_payload(self, raw: dict[str, Any]) -> RawSample:
        """Parse a gateway payload and enqueue it.

        Raises:
            ValueError: If the payload cannot be parsed.
        """
        sample = parse_raw_sample(raw)
        self.push(sample)
        return sample

    def next_sample(self) -> RawSample:
        with self._lock:
            if not self._pending:
                raise QueueEmpty("no pending sample")
            return self._pending.popleft()

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)
