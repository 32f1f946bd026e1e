"""Risk domain models — the aggregate view over a history window.

A RiskVerdict is never stored.  It is recomputed from a history snapshot
whenever someone asks, so it is always consistent with the buffer it was
computed from.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from axion_monitor.domain.enums import RiskLevel, Severity


class RiskVerdict(BaseModel):
    """Aggregate concussion-risk assessment over the retained history."""

    level: RiskLevel
    advisory: str = Field(..., description="One-line guidance for the verdict level")
    peak_magnitude: float = Field(..., ge=0.0, description="Largest sensor magnitude in the window (g)")
    record_count: int = Field(0, ge=0)
    high_impact_count: int = Field(0, ge=0, description="HIGH + CRITICAL records")
    severity_counts: dict[Severity, int] = Field(default_factory=dict)
    recommendations: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class ImpactEvent(BaseModel):
    """One entry of the high-impact timeline."""

    timestamp: datetime
    magnitude: float = Field(..., ge=0.0)
    severity: Severity

    model_config = {"frozen": True}
