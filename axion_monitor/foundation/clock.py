"""Timezone-aware clock utilities.

All timestamps in axion-monitor are UTC-aware.  This module is the
single source of "now" so tests can monkey-patch it trivially.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def from_epoch_ms(ms: float) -> datetime:
    """Convert epoch milliseconds into a UTC-aware datetime."""
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)


def to_epoch_ms(ts: datetime) -> int:
    """Convert an aware datetime into whole epoch milliseconds."""
    return int(round(ts.timestamp() * 1000))


def format_local_time(ts: datetime, fmt: str = "%H:%M:%S") -> str:
    """Render *ts* as wall-clock time in the host's local timezone."""
    return ts.astimezone().strftime(fmt)
