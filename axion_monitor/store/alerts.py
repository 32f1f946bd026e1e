"""AlertFeed — short most-recent-first list of human-readable impact alerts."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Deque

from axion_monitor.domain.errors import InvalidConfiguration
from axion_monitor.domain.record import ClassifiedRecord
from axion_monitor.foundation.clock import format_local_time

logger = logging.getLogger(__name__)

DEFAULT_ALERT_CAPACITY = 5
DEFAULT_ALERT_TIME_FORMAT = "%H:%M:%S"


class AlertFeed:
    """Keeps up to *capacity* alerts, newest first.

    Only HIGH and CRITICAL records produce alerts.  There is no
    deduplication: every qualifying record yields its own entry.  How many
    entries a display shows is up to the display.

    Args:
        capacity: Maximum number of retained alerts.
        time_format: strftime pattern for the record's local wall-clock time.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_ALERT_CAPACITY,
        time_format: str = DEFAULT_ALERT_TIME_FORMAT,
    ) -> None:
        if capacity <= 0:
            raise InvalidConfiguration(f"alert capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._time_format = time_format
        self._alerts: Deque[str] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def consider(self, record: ClassifiedRecord) -> str | None:
        """Emit an alert for *record* if it is a high impact.

        Returns the alert text, or None when the record does not qualify.
        """
        if not record.severity.is_high_impact:
            return None
        text = self.format_alert(record)
        with self._lock:
            # appendleft on a bounded deque drops the oldest from the right
            self._alerts.appendleft(text)
        logger.info(text)
        return text

    def format_alert(self, record: ClassifiedRecord) -> str:
        return (
            f"{record.severity.value} impact detected at "
            f"{format_local_time(record.timestamp, self._time_format)}"
        )

    def alerts(self, limit: int | None = None) -> list[str]:
        """Copy of the retained alerts, most recent first."""
        with self._lock:
            items = list(self._alerts)
        if limit is not None:
            return items[:max(limit, 0)]
        return items

    def clear(self) -> None:
        with self._lock:
            self._alerts.clear()
        logger.debug("Alert feed cleared")

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._alerts)
