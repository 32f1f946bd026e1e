"""ClassifiedRecord — a raw sample plus its derived magnitudes and severity.

Records are created once per tick by the classifier and never mutated.
Ownership passes to the HistoryBuffer on append.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from axion_monitor.domain.enums import Severity
from axion_monitor.domain.sample import Vector3
from axion_monitor.foundation.clock import to_epoch_ms


class ClassifiedRecord(BaseModel):
    """Immutable classification result for a single sample."""

    timestamp: datetime = Field(..., description="Copied from the raw sample")
    sensor1: Vector3
    sensor2: Vector3
    magnitude1: float = Field(..., ge=0.0, description="Euclidean norm of sensor1 (g)")
    magnitude2: float = Field(..., ge=0.0, description="Euclidean norm of sensor2 (g)")
    severity: Severity

    model_config = {"frozen": True}

    @property
    def peak_magnitude(self) -> float:
        """The larger of the two sensor magnitudes; severity derives from it."""
        return max(self.magnitude1, self.magnitude2)

    @property
    def timestamp_ms(self) -> int:
        return to_epoch_ms(self.timestamp)

    def summary(self) -> dict[str, Any]:
        """Flat JSON-friendly view used by the HTTP and WebSocket layers."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "timestamp_ms": self.timestamp_ms,
            "accelerometer1": self.sensor1.model_dump(),
            "accelerometer2": self.sensor2.model_dump(),
            "magnitude1": round(self.magnitude1, 4),
            "magnitude2": round(self.magnitude2, 4),
            "severity": self.severity.value,
        }
