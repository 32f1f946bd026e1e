"""ImpactClassifier — deterministic per-sample severity classification.

Design principles:
    1. Pure function: accepts a RawSample, returns a ClassifiedRecord.
    2. No side effects, no state mutation, no I/O.
    3. Severity depends on max(magnitude1, magnitude2) alone.
    4. All thresholds are explicit and configurable.

Severity bands (strictly greater than, evaluated top-down):
    peak > critical  → CRITICAL
    peak > high      → HIGH
    peak > moderate  → MODERATE
    otherwise        → LOW

A peak exactly on a threshold falls into the lower band.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from axion_monitor.domain.enums import Severity
from axion_monitor.domain.errors import InvalidConfiguration, InvalidSample
from axion_monitor.domain.record import ClassifiedRecord
from axion_monitor.domain.sample import RawSample


@dataclass(frozen=True)
class SeverityThresholds:
    """Peak-magnitude thresholds (g) separating the severity bands."""

    critical: float = 50.0
    high: float = 30.0
    moderate: float = 15.0

    def __post_init__(self) -> None:
        values = (self.critical, self.high, self.moderate)
        if not all(math.isfinite(v) for v in values):
            raise InvalidConfiguration("severity thresholds must be finite")
        if self.moderate <= 0:
            raise InvalidConfiguration("moderate threshold must be positive")
        if not (self.critical > self.high > self.moderate):
            raise InvalidConfiguration(
                "severity thresholds must be strictly descending: "
                f"critical={self.critical}, high={self.high}, moderate={self.moderate}"
            )


def severity_for(peak_magnitude: float, thresholds: SeverityThresholds | None = None) -> Severity:
    """Map a peak magnitude onto its severity band."""
    t = thresholds or SeverityThresholds()
    if peak_magnitude > t.critical:
        return Severity.CRITICAL
    if peak_magnitude > t.high:
        return Severity.HIGH
    if peak_magnitude > t.moderate:
        return Severity.MODERATE
    return Severity.LOW


class ImpactClassifier:
    """Stateless classifier turning raw samples into classified records."""

    def __init__(self, thresholds: SeverityThresholds | None = None) -> None:
        self._thresholds = thresholds or SeverityThresholds()

    @property
    def thresholds(self) -> SeverityThresholds:
        return self._thresholds

    def classify(self, sample: RawSample) -> ClassifiedRecord:
        """Compute both magnitudes and the severity of *sample*.

        Raises:
            InvalidSample: If any vector component or magnitude is non-finite.
        """
        for name, vector in (("sensor1", sample.sensor1), ("sensor2", sample.sensor2)):
            if not vector.is_finite:
                raise InvalidSample(f"{name} has a non-finite component {vector.model_dump()}")

        magnitude1 = sample.sensor1.magnitude()
        magnitude2 = sample.sensor2.magnitude()
        # Finite components can still overflow the sum of squares
        if not (math.isfinite(magnitude1) and math.isfinite(magnitude2)):
            raise InvalidSample("magnitude overflowed to a non-finite value")

        return ClassifiedRecord(
            timestamp=sample.timestamp,
            sensor1=sample.sensor1,
            sensor2=sample.sensor2,
            magnitude1=magnitude1,
            magnitude2=magnitude2,
            severity=severity_for(max(magnitude1, magnitude2), self._thresholds),
        )
