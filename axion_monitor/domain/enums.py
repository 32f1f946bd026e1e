"""Controlled enumerations for the axion-monitor domain.

Every categorical field in the domain MUST reference an enum defined here.
Free-form strings are not acceptable for classification fields.
"""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Per-sample impact severity, ordered LOW < MODERATE < HIGH < CRITICAL.

    The str mixin keeps JSON output readable; comparisons use the band
    order, not the alphabetical order of the values.
    """

    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @property
    def is_high_impact(self) -> bool:
        """HIGH and CRITICAL samples raise alerts and count as high impacts."""
        return self.rank >= _SEVERITY_RANK[Severity.HIGH]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MODERATE: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


class RiskLevel(str, Enum):
    """Aggregate concussion-risk level over the retained history window."""

    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class MonitorState(str, Enum):
    """Lifecycle states of a monitoring controller."""

    IDLE = "idle"
    RUNNING = "running"
