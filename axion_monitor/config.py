"""Application configuration loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "axion-monitor"
    debug: bool = False
    log_level: str = "INFO"

    # Sampling loop
    tick_interval_ms: float = 100.0
    max_consecutive_failures: int = 10
    autostart: bool = False

    # Retention
    history_capacity: int = 1000
    alert_capacity: int = 5
    alert_time_format: str = "%H:%M:%S"

    # Per-sample severity thresholds (g)
    critical_threshold: float = 50.0
    high_threshold: float = 30.0
    moderate_threshold: float = 15.0

    # Risk aggregation
    risk_high_count: int = 3

    # Sample source
    source: Literal["synthetic", "stream"] = "synthetic"
    spike_probability: float = 0.05
    random_seed: int | None = None
    stream_max_pending: int = 100

    model_config = {"env_prefix": "AXION_"}


settings = Settings()
