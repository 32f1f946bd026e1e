"""RiskAggregator — deterministic concussion-risk assessment over a history window.

Design principles:
    1. Pure function of the snapshot it is given.  No state, no I/O.
    2. Bounded by construction: it only ever sees the records the
       HistoryBuffer still retains, never the whole stream.
    3. Counts-based escalation, intentionally distinct from the per-sample
       magnitude thresholds used by the classifier.

Escalation (first match wins):
    CRITICAL records ≥ 1                     → CRITICAL
    HIGH records ≥ high_count_threshold      → HIGH
    HIGH records ≥ 1                         → MODERATE
    otherwise                                → LOW
"""

from __future__ import annotations

from typing import Sequence

from axion_monitor.domain.enums import RiskLevel, Severity
from axion_monitor.domain.errors import InvalidConfiguration
from axion_monitor.domain.record import ClassifiedRecord
from axion_monitor.domain.risk import ImpactEvent, RiskVerdict

DEFAULT_HIGH_COUNT_THRESHOLD = 3

ADVISORIES: dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: "Immediate medical attention required",
    RiskLevel.HIGH: "Multiple high impacts detected",
    RiskLevel.MODERATE: "Monitor for symptoms",
    RiskLevel.LOW: "No significant impacts detected",
}

RECOMMENDATIONS: dict[RiskLevel, tuple[str, ...]] = {
    RiskLevel.CRITICAL: (
        "Remove player from field immediately",
        "Conduct comprehensive neurological assessment",
        "Monitor for concussion symptoms",
        "Do not allow return to play without medical clearance",
    ),
    RiskLevel.HIGH: (
        "Consider removing player for assessment",
        "Monitor closely for symptoms",
        "Baseline cognitive testing recommended",
    ),
    RiskLevel.MODERATE: (
        "Continue monitoring during play",
        "Watch for delayed symptoms",
        "Consider sideline assessment if symptoms appear",
    ),
    RiskLevel.LOW: (
        "No immediate concerns. Continue normal monitoring protocols.",
    ),
}


class RiskAggregator:
    """Stateless aggregation of a history snapshot into a RiskVerdict.

    Args:
        high_count_threshold: Number of HIGH records that, without any
            CRITICAL record, escalates the verdict to HIGH.
    """

    def __init__(self, high_count_threshold: int = DEFAULT_HIGH_COUNT_THRESHOLD) -> None:
        if high_count_threshold < 1:
            raise InvalidConfiguration(
                f"high_count_threshold must be at least 1, got {high_count_threshold}"
            )
        self._high_count_threshold = high_count_threshold

    @property
    def high_count_threshold(self) -> int:
        return self._high_count_threshold

    # ── Public API ───────────────────────────────────────────────────────

    def assess(self, history: Sequence[ClassifiedRecord]) -> RiskVerdict:
        """Produce the risk verdict for *history*."""
        counts = self.severity_counts(history)
        level = self._level(counts)
        peak = max((r.peak_magnitude for r in history), default=0.0)

        return RiskVerdict(
            level=level,
            advisory=ADVISORIES[level],
            peak_magnitude=peak,
            record_count=len(history),
            high_impact_count=counts[Severity.HIGH] + counts[Severity.CRITICAL],
            severity_counts=counts,
            recommendations=list(RECOMMENDATIONS[level]),
        )

    @staticmethod
    def severity_counts(history: Sequence[ClassifiedRecord]) -> dict[Severity, int]:
        """Count records per severity; every band is always present."""
        counts = {severity: 0 for severity in Severity}
        for record in history:
            counts[record.severity] += 1
        return counts

    @staticmethod
    def high_impact_timeline(
        history: Sequence[ClassifiedRecord],
        limit: int = 10,
    ) -> list[ImpactEvent]:
        """The last *limit* HIGH/CRITICAL records, oldest first."""
        if limit <= 0:
            return []
        high = [r for r in history if r.severity.is_high_impact]
        return [
            ImpactEvent(timestamp=r.timestamp, magnitude=r.peak_magnitude, severity=r.severity)
            for r in high[-limit:]
        ]

    # ── Internals ────────────────────────────────────────────────────────

    def _level(self, counts: dict[Severity, int]) -> RiskLevel:
        if counts[Severity.CRITICAL] >= 1:
            return RiskLevel.CRITICAL
        high = counts[Severity.HIGH]
        if high >= self._high_count_threshold:
            return RiskLevel.HIGH
        if high >= 1:
            return RiskLevel.MODERATE
        return RiskLevel.LOW
