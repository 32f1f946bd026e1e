"""axion-monitor — real-time head-impact classification and risk aggregation.

This is the application entry point.  It wires the sample source,
MonitorController, reading broadcaster and HTTP/WebSocket endpoints
together.  Each call to create_app() builds an independent controller.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from axion_monitor.api.monitor import create_monitor_router
from axion_monitor.api.ws_readings import create_stream_router
from axion_monitor.api.ws_samples import create_ingest_router
from axion_monitor.config import Settings, settings as default_settings
from axion_monitor.core.classifier import SeverityThresholds
from axion_monitor.core.controller import MonitorConfig, MonitorController
from axion_monitor.services.broadcaster import ReadingBroadcaster
from axion_monitor.sources.base import SampleSource
from axion_monitor.sources.queue import QueueSampleSource
from axion_monitor.sources.synthetic import SyntheticSampleSource

logger = logging.getLogger(__name__)


# ── Wiring helpers ───────────────────────────────────────────────────────────

def monitor_config_from(settings: Settings) -> MonitorConfig:
    """Map flat environment settings onto the controller's configuration."""
    return MonitorConfig(
        tick_interval_ms=settings.tick_interval_ms,
        history_capacity=settings.history_capacity,
        alert_capacity=settings.alert_capacity,
        alert_time_format=settings.alert_time_format,
        thresholds=SeverityThresholds(
            critical=settings.critical_threshold,
            high=settings.high_threshold,
            moderate=settings.moderate_threshold,
        ),
        high_count_threshold=settings.risk_high_count,
        max_consecutive_failures=settings.max_consecutive_failures,
    )


def build_source(settings: Settings) -> SampleSource:
    if settings.source == "stream":
        return QueueSampleSource(max_pending=settings.stream_max_pending)
    return SyntheticSampleSource(
        spike_probability=settings.spike_probability,
        seed=settings.random_seed,
    )


# ── App ──────────────────────────────────────────────────────────────────────

def create_app(settings: Settings | None = None, source: SampleSource | None = None) -> FastAPI:
    """Build a FastAPI app around a fresh MonitorController."""
    settings = settings or default_settings
    source = source or build_source(settings)
    controller = MonitorController(source, monitor_config_from(settings))
    broadcaster = ReadingBroadcaster()
    broadcaster.attach(controller)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.autostart:
            controller.start()
        try:
            yield
        finally:
            # No tick may outlive the application
            await controller.close()

    app = FastAPI(
        title=settings.app_name,
        description="Real-time impact classification and concussion-risk aggregation",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.controller = controller
    app.state.broadcaster = broadcaster

    # ── Routes ───────────────────────────────────────────────────────────

    app.include_router(create_monitor_router(controller))
    app.include_router(create_stream_router(controller, broadcaster))
    if isinstance(source, QueueSampleSource):
        app.include_router(create_ingest_router(source))

    # ── Health ───────────────────────────────────────────────────────────

    @app.get("/health")
    async def health() -> dict:
        status = controller.status()
        return {
            "status": "ok",
            "session_id": status.session_id,
            "state": status.state.value,
            "source": source.source_name,
            "data_points": status.data_points,
            "display_clients": broadcaster.client_count,
        }

    return app


# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=default_settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

app = create_app()


def run() -> None:
    """Console entry point: serve the default app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=default_settings.log_level.lower())


if __name__ == "__main__":
    run()
