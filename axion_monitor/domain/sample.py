"""Raw dual-sensor acceleration samples — the input contract of the engine.

A RawSample is what a SampleSource hands over once per tick: two triaxial
acceleration vectors (in g) and a capture timestamp.  The model validates
types only.  Non-finite components are deliberately let through so the
classifier can reject them with a distinct InvalidSample condition.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from axion_monitor.foundation.clock import to_epoch_ms, utc_now


class Vector3(BaseModel):
    """A triaxial acceleration vector in units of g."""

    x: float
    y: float
    z: float

    model_config = {"frozen": True}

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (self.x, self.y, self.z))

    def magnitude(self) -> float:
        """Euclidean norm of the vector."""
        # Plain products overflow to inf instead of raising like ** does
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)


class RawSample(BaseModel):
    """One dual-sensor reading.  Immutable once created."""

    sensor1: Vector3 = Field(..., description="Acceleration vector from the first sensor")
    sensor2: Vector3 = Field(..., description="Acceleration vector from the second sensor")
    timestamp: datetime = Field(default_factory=utc_now, description="Capture time (UTC-aware)")

    model_config = {"frozen": True}

    @field_validator("timestamp")
    @classmethod
    def timestamp_must_be_aware(cls, v: datetime) -> datetime:
        # Drivers commonly hand over naive timestamps
        if v.tzinfo is None:
            v = v.replace(tzinfo=timezone.utc)
        return v

    @property
    def timestamp_ms(self) -> int:
        return to_epoch_ms(self.timestamp)
