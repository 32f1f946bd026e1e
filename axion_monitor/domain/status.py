"""MonitorStatus — a point-in-time summary of one monitoring controller."""

from __future__ import annotations

from pydantic import BaseModel, Field

from axion_monitor.domain.enums import MonitorState, Severity


class MonitorStatus(BaseModel):
    """Structural facts about a controller, suitable for status cards."""

    session_id: str
    state: MonitorState
    data_points: int = Field(..., ge=0, description="Records currently retained")
    high_impacts: int = Field(..., ge=0, description="Retained HIGH + CRITICAL records")
    current_severity: Severity | None = None
    tick_interval_ms: float
    ticks: int = Field(0, ge=0)
    invalid_samples: int = Field(0, ge=0)
    source_failures: int = Field(0, ge=0)
    last_error: str | None = None

    model_config = {"frozen": True}
